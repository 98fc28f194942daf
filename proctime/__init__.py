"""proctime: user CPU time of the current process in platform-native ticks.

    >>> import proctime
    >>> seconds = proctime.get_user_time() / proctime.get_ticks()
"""

from .exceptions import PlatformQueryError, PlatformUnsupportedError
from .lib.base import ProcessTimer
from .models.measurement import CPUTimeSample, TickFrequency, UserTimeValue
from .services.timer_factory import (
    PlatformTimer,
    create_timer,
    get_default_timer,
    get_ticks,
    get_user_time,
)

__version__ = "1.0.0"

__all__ = [
    "get_user_time",
    "get_ticks",
    "create_timer",
    "get_default_timer",
    "PlatformTimer",
    "ProcessTimer",
    "CPUTimeSample",
    "TickFrequency",
    "UserTimeValue",
    "PlatformQueryError",
    "PlatformUnsupportedError",
]
