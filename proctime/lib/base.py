"""Common interface for process user-time backends."""

from abc import ABC, abstractmethod

from ..models.measurement import CPUTimeSample, TickFrequency, UserTimeValue


class ProcessTimer(ABC):
    """Reads the cumulative user CPU time of the current process.

    Subclasses talk to one operating system facility each. ``checked``
    controls what happens when that facility reports failure: by default
    the failure is ignored and whatever the output buffer holds is returned;
    with ``checked=True`` a :class:`~proctime.exceptions.PlatformQueryError`
    is raised instead.
    """

    name: str = ""

    def __init__(self, checked: bool = False):
        self.checked = checked

    @abstractmethod
    def get_user_time(self) -> int:
        """Return user CPU time since process start, in native ticks."""

    @abstractmethod
    def get_ticks(self) -> int:
        """Return the number of ticks per second for this backend."""

    def sample(self) -> CPUTimeSample:
        """Read the user time and tick frequency into a single sample."""
        return CPUTimeSample(
            backend=self.name,
            user_time=UserTimeValue(ticks=self.get_user_time()),
            frequency=TickFrequency(ticks_per_second=self.get_ticks()),
        )

    def user_seconds(self) -> float:
        return self.get_user_time() / self.get_ticks()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(checked={self.checked})"
