"""Tests for common.throttle module."""

import pytest

from common.throttle import FixedIntervalThrottle, NoThrottle, RequestThrottle


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestFixedIntervalThrottle:
    def test_first_acquire_does_not_wait(self) -> None:
        clock = FakeClock()
        throttle = FixedIntervalThrottle(1.0, clock=clock, sleep=clock.sleep)
        throttle.acquire()
        assert clock.sleeps == []

    def test_back_to_back_calls_wait_full_interval(self) -> None:
        clock = FakeClock()
        throttle = FixedIntervalThrottle(1.0, clock=clock, sleep=clock.sleep)
        throttle.acquire()
        throttle.acquire()
        throttle.acquire()
        assert clock.sleeps == [1.0, 1.0]

    def test_waits_only_for_remaining_time(self) -> None:
        clock = FakeClock()
        throttle = FixedIntervalThrottle(1.0, clock=clock, sleep=clock.sleep)
        throttle.acquire()
        clock.now += 0.25
        throttle.acquire()
        assert clock.sleeps == [pytest.approx(0.75)]

    def test_no_wait_after_interval_elapsed(self) -> None:
        clock = FakeClock()
        throttle = FixedIntervalThrottle(1.0, clock=clock, sleep=clock.sleep)
        throttle.acquire()
        clock.now += 5
        throttle.acquire()
        assert clock.sleeps == []

    def test_negative_interval_raises(self) -> None:
        with pytest.raises(ValueError, match="must not be negative"):
            FixedIntervalThrottle(-1)

    def test_satisfies_protocol(self) -> None:
        assert isinstance(FixedIntervalThrottle(0), RequestThrottle)
        assert isinstance(NoThrottle(), RequestThrottle)


class TestNoThrottle:
    def test_acquire_returns_immediately(self) -> None:
        assert NoThrottle().acquire() is None
