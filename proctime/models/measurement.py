"""Value models for process CPU time measurements.

A measurement is a raw tick count plus the tick frequency needed to turn it
into seconds. Both are immutable and created fresh on every query.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserTimeValue(BaseModel):
    """Cumulative user CPU time of the calling process, in native ticks.

    Values are only meaningful within the process that produced them.
    """

    model_config = ConfigDict(frozen=True)

    ticks: int

    def __int__(self) -> int:
        return self.ticks


class TickFrequency(BaseModel):
    """Ticks per second for the active timer backend."""

    model_config = ConfigDict(frozen=True)

    ticks_per_second: int = Field(gt=0)

    def __int__(self) -> int:
        return self.ticks_per_second

    def to_seconds(self, value: UserTimeValue) -> float:
        """Convert a tick count measured at this frequency into seconds."""
        return value.ticks / self.ticks_per_second


class CPUTimeSample(BaseModel):
    """A user time reading together with the frequency that interprets it."""

    model_config = ConfigDict(frozen=True)

    backend: str
    user_time: UserTimeValue
    frequency: TickFrequency

    @property
    def seconds(self) -> float:
        """User CPU time in seconds."""
        return self.frequency.to_seconds(self.user_time)

    def to_dict(self) -> dict:
        """Flat representation used by the CLI."""
        return {
            "backend": self.backend,
            "user_ticks": self.user_time.ticks,
            "ticks_per_second": self.frequency.ticks_per_second,
            "user_seconds": self.seconds,
        }
