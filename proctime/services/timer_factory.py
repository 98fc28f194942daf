"""Timer selection and the module-level user-time functions.

The platform variant is chosen once, at import, from ``sys.platform``.
There is no per-call dispatch and no fallback between variants.
"""

import sys
import threading
from typing import Optional

from ..lib.base import ProcessTimer
from ..lib.posix_times import PosixProcessTimer
from ..lib.windows_times import WindowsProcessTimer
from ..models.timer_configuration import TimerBackend, TimerConfiguration
from ..utils.logging import get_logger

logger = get_logger(__name__)

if sys.platform == "win32":
    PlatformTimer = WindowsProcessTimer
else:
    PlatformTimer = PosixProcessTimer

_BACKENDS = {
    TimerBackend.AUTO: PlatformTimer,
    TimerBackend.WINDOWS: WindowsProcessTimer,
    TimerBackend.POSIX: PosixProcessTimer,
}


def create_timer(backend="auto", checked: bool = False) -> ProcessTimer:
    """Build a timer for the requested backend.

    Args:
        backend: ``"auto"``, ``"windows"``, ``"posix"`` or a TimerBackend
        checked: Raise on OS query failures instead of degrading silently

    Returns:
        ProcessTimer instance

    Raises:
        ValueError: If the backend name is unknown
        PlatformUnsupportedError: If the backend cannot run on this platform
    """
    try:
        key = TimerBackend(backend.lower() if isinstance(backend, str) else backend)
    except ValueError as e:
        raise ValueError(f"Unknown timer backend: {backend}") from e

    timer_cls = _BACKENDS[key]
    timer = timer_cls(checked=checked)
    logger.debug(
        "Selected process timer",
        requested=key.value,
        backend=timer.name,
        checked=checked,
    )
    return timer


def create_timer_from_config(config: TimerConfiguration) -> ProcessTimer:
    return create_timer(config.backend, checked=config.checked)


_default_timer: Optional[ProcessTimer] = None
_default_lock = threading.Lock()


def get_default_timer() -> ProcessTimer:
    """Return the shared permissive timer for this platform."""
    global _default_timer
    if _default_timer is None:
        with _default_lock:
            if _default_timer is None:
                _default_timer = PlatformTimer()
    return _default_timer


def get_user_time() -> int:
    """Cumulative user CPU time of this process, in native ticks."""
    return get_default_timer().get_user_time()


def get_ticks() -> int:
    """Ticks per second for :func:`get_user_time` on this platform."""
    return get_default_timer().get_ticks()
