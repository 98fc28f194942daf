"""Windows user-time backend built on GetProcessTimes."""

import ctypes
from typing import Any, Callable, Optional

from ..exceptions import PlatformQueryError, PlatformUnsupportedError
from ..utils.logging import get_logger
from .base import ProcessTimer

logger = get_logger(__name__)

# FILETIME counts 100-nanosecond intervals
TICKS_PER_SECOND = 10_000_000


class FILETIME(ctypes.Structure):
    _fields_ = [
        ("dwLowDateTime", ctypes.c_uint32),
        ("dwHighDateTime", ctypes.c_uint32),
    ]


def filetime_to_int(ft: FILETIME) -> int:
    """Combine the two FILETIME words and reinterpret them as a signed 64-bit value."""
    return ctypes.c_int64((ft.dwHighDateTime << 32) | ft.dwLowDateTime).value


def load_kernel32() -> Any:
    """Load kernel32 and declare the prototypes used by the timer."""
    try:
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    except (AttributeError, OSError) as e:
        raise PlatformUnsupportedError(
            "kernel32 is not available on this platform", details={"error": str(e)}
        ) from e

    kernel32.GetCurrentProcess.argtypes = []
    kernel32.GetCurrentProcess.restype = ctypes.c_void_p

    lpfiletime = ctypes.POINTER(FILETIME)
    kernel32.GetProcessTimes.argtypes = [
        ctypes.c_void_p,
        lpfiletime,  # creation
        lpfiletime,  # exit
        lpfiletime,  # kernel
        lpfiletime,  # user
    ]
    kernel32.GetProcessTimes.restype = ctypes.c_int
    return kernel32


class WindowsProcessTimer(ProcessTimer):
    """User time from ``GetProcessTimes`` at a fixed 10 MHz resolution.

    Args:
        checked: Raise PlatformQueryError when ``GetProcessTimes`` fails
        kernel32: Object exposing ``GetCurrentProcess`` and ``GetProcessTimes``
        last_error: Callable returning the thread's last Win32 error code
    """

    name = "windows"

    def __init__(
        self,
        checked: bool = False,
        kernel32: Optional[Any] = None,
        last_error: Optional[Callable[[], int]] = None,
    ):
        super().__init__(checked)
        self._kernel32 = kernel32 if kernel32 is not None else load_kernel32()
        self._last_error = last_error or getattr(ctypes, "get_last_error", None)

        logger.debug("Initialized Windows process timer", checked=checked)

    def get_user_time(self) -> int:
        creation, exit_time, kernel, user = FILETIME(), FILETIME(), FILETIME(), FILETIME()

        ok = self._kernel32.GetProcessTimes(
            self._kernel32.GetCurrentProcess(),
            ctypes.pointer(creation),
            ctypes.pointer(exit_time),
            ctypes.pointer(kernel),
            ctypes.pointer(user),
        )

        if not ok:
            err = self._last_error() if self._last_error else None
            if self.checked:
                logger.error("GetProcessTimes failed", winerror=err)
                raise PlatformQueryError(
                    "GetProcessTimes failed",
                    details={"call": "GetProcessTimes", "winerror": err},
                )
            logger.debug("Ignoring GetProcessTimes failure", winerror=err)

        return filetime_to_int(user)

    def get_ticks(self) -> int:
        return TICKS_PER_SECOND
