"""Tests for the Windows GetProcessTimes backend."""

from __future__ import annotations

import sys

import pytest

from proctime.exceptions import PlatformQueryError, PlatformUnsupportedError
from proctime.lib.windows_times import (
    FILETIME,
    TICKS_PER_SECOND,
    WindowsProcessTimer,
    filetime_to_int,
)

ERROR_ACCESS_DENIED = 5


class FakeKernel32:
    """Stands in for kernel32; writes a fixed user FILETIME."""

    CURRENT_PROCESS = -1

    def __init__(self, low=0, high=0, ok=1):
        self.low = low
        self.high = high
        self.ok = ok
        self.handles = []

    def GetCurrentProcess(self):
        return self.CURRENT_PROCESS

    def GetProcessTimes(self, handle, creation, exit_time, kernel, user):
        self.handles.append(handle)
        if self.ok:
            kernel.contents.dwLowDateTime = 12345
            user.contents.dwLowDateTime = self.low
            user.contents.dwHighDateTime = self.high
        return self.ok


class TestFiletimeConversion:
    def test_low_word_only(self):
        ft = FILETIME(dwLowDateTime=5, dwHighDateTime=0)
        assert filetime_to_int(ft) == 5

    def test_high_word_is_shifted(self):
        ft = FILETIME(dwLowDateTime=0, dwHighDateTime=1)
        assert filetime_to_int(ft) == 2 ** 32

    def test_both_words_combined(self):
        ft = FILETIME(dwLowDateTime=0x89ABCDEF, dwHighDateTime=0x01234567)
        assert filetime_to_int(ft) == 0x0123456789ABCDEF

    def test_all_ones_reinterpreted_as_signed(self):
        ft = FILETIME(dwLowDateTime=0xFFFFFFFF, dwHighDateTime=0xFFFFFFFF)
        assert filetime_to_int(ft) == -1


class TestUserTime:
    def test_reads_user_field_of_current_process(self):
        kernel32 = FakeKernel32(low=20_000_000)
        timer = WindowsProcessTimer(kernel32=kernel32)

        assert timer.get_user_time() == 20_000_000
        assert kernel32.handles == [FakeKernel32.CURRENT_PROCESS]

    def test_failure_returns_zeroed_buffer_by_default(self):
        timer = WindowsProcessTimer(
            kernel32=FakeKernel32(ok=0), last_error=lambda: ERROR_ACCESS_DENIED
        )
        assert timer.get_user_time() == 0

    def test_checked_failure_raises(self):
        timer = WindowsProcessTimer(
            checked=True,
            kernel32=FakeKernel32(ok=0),
            last_error=lambda: ERROR_ACCESS_DENIED,
        )

        with pytest.raises(PlatformQueryError) as exc_info:
            timer.get_user_time()

        assert exc_info.value.details == {
            "call": "GetProcessTimes",
            "winerror": ERROR_ACCESS_DENIED,
        }


def test_ticks_are_fixed_at_100ns_resolution():
    timer = WindowsProcessTimer(kernel32=FakeKernel32())
    assert timer.get_ticks() == TICKS_PER_SECOND == 10_000_000


def test_sample_converts_to_seconds():
    timer = WindowsProcessTimer(kernel32=FakeKernel32(low=15_000_000))
    reading = timer.sample()

    assert reading.backend == "windows"
    assert reading.seconds == pytest.approx(1.5)


@pytest.mark.skipif(sys.platform == "win32", reason="kernel32 is present on Windows")
def test_unavailable_off_windows():
    with pytest.raises(PlatformUnsupportedError):
        WindowsProcessTimer()


@pytest.mark.skipif(sys.platform != "win32", reason="Windows only")
def test_real_kernel32():
    timer = WindowsProcessTimer(checked=True)
    assert timer.get_user_time() >= 0
    assert timer.get_ticks() == 10_000_000
