"""Test configuration for path adjustments and shared fakes."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from proctime.lib.base import ProcessTimer  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_proctime_env(monkeypatch):
    """Keep the developer's PROCTIME_* settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("PROCTIME_"):
            monkeypatch.delenv(name, raising=False)


class StubTimer(ProcessTimer):
    """Timer replaying a fixed sequence of tick readings."""

    name = "stub"

    def __init__(self, readings, ticks_per_second=100, checked=False):
        super().__init__(checked)
        self._readings = iter(readings)
        self.ticks_per_second = ticks_per_second

    def get_user_time(self) -> int:
        return next(self._readings)

    def get_ticks(self) -> int:
        return self.ticks_per_second


@pytest.fixture
def stub_timer_factory():
    return StubTimer
