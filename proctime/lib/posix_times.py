"""POSIX user-time backend built on times(2) and sysconf(_SC_CLK_TCK)."""

import ctypes
import os
from ctypes.util import find_library
from typing import Any, Callable, Optional

from ..exceptions import PlatformQueryError, PlatformUnsupportedError
from ..utils.logging import get_logger
from .base import ProcessTimer

logger = get_logger(__name__)

clock_t = ctypes.c_long

# times() signals failure by returning (clock_t) -1
TIMES_FAILED = -1


class tms(ctypes.Structure):
    _fields_ = [
        ("tms_utime", clock_t),   # user time
        ("tms_stime", clock_t),   # system time
        ("tms_cutime", clock_t),  # user time of reaped children
        ("tms_cstime", clock_t),  # system time of reaped children
    ]


def load_libc() -> Any:
    """Load the C library and declare the times() prototype."""
    try:
        libc = ctypes.CDLL(find_library("c"), use_errno=True)
        times = libc.times
    except (OSError, AttributeError, TypeError) as e:
        raise PlatformUnsupportedError(
            "times() is not available on this platform", details={"error": str(e)}
        ) from e

    times.argtypes = [ctypes.POINTER(tms)]
    times.restype = clock_t
    return libc


class PosixProcessTimer(ProcessTimer):
    """User time from ``times()``, frequency from ``sysconf(_SC_CLK_TCK)``.

    Args:
        checked: Raise PlatformQueryError when ``times()`` returns -1
        libc: Object exposing ``times``; the C library when omitted
        sysconf: Replacement for :func:`os.sysconf`
    """

    name = "posix"

    def __init__(
        self,
        checked: bool = False,
        libc: Optional[Any] = None,
        sysconf: Optional[Callable[[str], int]] = None,
    ):
        super().__init__(checked)
        self._times = (libc if libc is not None else load_libc()).times

        self._sysconf = sysconf or getattr(os, "sysconf", None)
        if self._sysconf is None:
            raise PlatformUnsupportedError("os.sysconf is not available on this platform")

        logger.debug("Initialized POSIX process timer", checked=checked)

    def get_user_time(self) -> int:
        buf = tms()
        elapsed = self._times(ctypes.pointer(buf))

        if elapsed == TIMES_FAILED:
            err = ctypes.get_errno()
            if self.checked:
                logger.error("times() failed", errno=err)
                raise PlatformQueryError(
                    "times() failed", details={"call": "times", "errno": err}
                )
            logger.debug("Ignoring times() failure", errno=err)

        return buf.tms_utime

    def get_ticks(self) -> int:
        try:
            ticks = self._sysconf("SC_CLK_TCK")
        except (ValueError, OSError) as e:
            raise PlatformQueryError(
                "sysconf(SC_CLK_TCK) failed",
                details={"call": "sysconf", "error": str(e)},
            ) from e

        if ticks <= 0:
            raise PlatformQueryError(
                "sysconf(SC_CLK_TCK) returned a non-positive value",
                details={"call": "sysconf", "value": ticks},
            )
        return ticks
