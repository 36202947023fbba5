from __future__ import annotations

import threading

import pytest

from quotebar.runtime.scheduler import RotationScheduler


class FakeClocks:
    def __init__(self) -> None:
        self.wall = 1_000.0
        self.mono = 50.0

    def elapse(self, seconds: float, *, suspended: float = 0.0) -> None:
        self.mono += seconds
        self.wall += seconds + suspended


def _scheduler(tick, clocks: FakeClocks, **kwargs) -> RotationScheduler:
    return RotationScheduler(
        tick,
        wall_clock=lambda: clocks.wall,
        monotonic_clock=lambda: clocks.mono,
        **kwargs,
    )


def test_run_once_should_tick() -> None:
    calls: list[int] = []
    clocks = FakeClocks()
    scheduler = _scheduler(lambda: calls.append(1), clocks)
    clocks.elapse(60)
    assert scheduler.run_once() is False
    assert calls == [1]


def test_run_once_should_detect_suspension() -> None:
    clocks = FakeClocks()
    scheduler = _scheduler(lambda: None, clocks, period_sec=60, wake_threshold_sec=120)
    clocks.elapse(60, suspended=3 * 3600)
    assert scheduler.run_once() is True
    clocks.elapse(60)
    assert scheduler.run_once() is False


def test_run_once_should_survive_failing_tick() -> None:
    clocks = FakeClocks()

    def boom() -> None:
        raise RuntimeError("tick failed")

    scheduler = _scheduler(boom, clocks)
    scheduler.run_once()


def test_scheduler_should_reject_non_positive_period() -> None:
    with pytest.raises(ValueError):
        RotationScheduler(lambda: None, period_sec=0)


def test_scheduler_thread_should_tick_until_stopped() -> None:
    ticked = threading.Event()
    scheduler = RotationScheduler(ticked.set, period_sec=0.01)
    scheduler.start()
    try:
        assert ticked.wait(2.0)
        assert scheduler.running
    finally:
        scheduler.stop()
    assert not scheduler.running
