"""Cross-check a process timer against psutil over a CPU-bound workload."""

import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import psutil

from ..lib.base import ProcessTimer
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CrossCheckResult:
    """Outcome of one cross-check run."""

    backend: str
    ticks_per_second: int
    start_ticks: int
    end_ticks: int
    timer_seconds: float
    psutil_seconds: float
    wall_seconds: float
    tolerance_seconds: float

    @property
    def difference_seconds(self) -> float:
        return abs(self.timer_seconds - self.psutil_seconds)

    @property
    def within_tolerance(self) -> bool:
        """Timer delta is in [0, wall + tolerance] and agrees with psutil.

        Each reading can be off by one tick, so two ticks of slack are
        allowed on top of the tolerance when comparing with psutil.
        """
        resolution = 2.0 / self.ticks_per_second
        return (
            self.end_ticks >= self.start_ticks
            and 0.0 <= self.timer_seconds <= self.wall_seconds + self.tolerance_seconds
            and self.difference_seconds <= self.tolerance_seconds + resolution
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "ticks_per_second": self.ticks_per_second,
            "start_ticks": self.start_ticks,
            "end_ticks": self.end_ticks,
            "timer_seconds": self.timer_seconds,
            "psutil_seconds": self.psutil_seconds,
            "wall_seconds": self.wall_seconds,
            "difference_seconds": self.difference_seconds,
            "tolerance_seconds": self.tolerance_seconds,
            "within_tolerance": self.within_tolerance,
        }


def burn(seconds: float, clock: Callable[[], float] = time.perf_counter) -> float:
    """Spin the CPU for ``seconds`` of wall-clock time; return the actual duration."""
    start = clock()
    deadline = start + seconds
    while clock() < deadline:
        pass
    return clock() - start


class CrossChecker:
    """Measures the same workload with a ProcessTimer and with psutil."""

    def __init__(
        self,
        timer: ProcessTimer,
        tolerance_seconds: float = 0.05,
        process: Optional[psutil.Process] = None,
    ):
        if not (math.isfinite(tolerance_seconds) and tolerance_seconds > 0):
            raise ValueError("Tolerance must be a positive finite number")

        self.timer = timer
        self.tolerance_seconds = tolerance_seconds
        self.process = process or psutil.Process()

    def run(self, burn_seconds: float = 0.25) -> CrossCheckResult:
        """Burn CPU for ``burn_seconds`` and compare both readings."""
        if not (math.isfinite(burn_seconds) and burn_seconds > 0):
            raise ValueError("Burn duration must be a positive finite number")

        ticks_per_second = self.timer.get_ticks()

        start_ticks = self.timer.get_user_time()
        start_psutil = self.process.cpu_times().user
        wall = burn(burn_seconds)
        end_ticks = self.timer.get_user_time()
        end_psutil = self.process.cpu_times().user

        result = CrossCheckResult(
            backend=self.timer.name,
            ticks_per_second=ticks_per_second,
            start_ticks=start_ticks,
            end_ticks=end_ticks,
            timer_seconds=(end_ticks - start_ticks) / ticks_per_second,
            psutil_seconds=end_psutil - start_psutil,
            wall_seconds=wall,
            tolerance_seconds=self.tolerance_seconds,
        )

        if result.within_tolerance:
            logger.info(
                "Cross-check passed",
                backend=result.backend,
                pid=self.process.pid,
                timer_seconds=result.timer_seconds,
                psutil_seconds=result.psutil_seconds,
            )
        else:
            logger.warning(
                "Cross-check out of tolerance", pid=self.process.pid, **result.to_dict()
            )

        return result
