from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, List

import pytest

from quotebar.runtime.controller import QuoteController
from quotebar.runtime.store import MemoryBlobStore, QuoteStateStore
from quotebar.state.models import RotationState


@pytest.fixture(scope="session")
def t0() -> datetime:
    return datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def state_factory(t0: datetime) -> Callable[..., RotationState]:
    def _factory(**overrides: object) -> RotationState:
        payload = {
            "quotes": ("A", "B", "C"),
            "rotation_hours": 1,
            "rotation_minutes": 0,
            "current_index": 0,
            "last_rotation_at": t0,
        }
        payload.update(overrides)
        return RotationState(**payload)  # type: ignore[arg-type]

    return _factory


class FakeClock:
    """Manually advanced time source for controller tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


@pytest.fixture
def clock(t0: datetime) -> FakeClock:
    return FakeClock(t0)


class FixedRandom:
    """Random index source returning queued values and recording bounds."""

    def __init__(self, *values: int) -> None:
        self.values: List[int] = list(values) or [0]
        self.calls: List[int] = []

    def __call__(self, upper: int) -> int:
        self.calls.append(upper)
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def fixed_random() -> FixedRandom:
    return FixedRandom(0)


@pytest.fixture
def memory_backend() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def state_store(memory_backend: MemoryBlobStore) -> QuoteStateStore:
    return QuoteStateStore(memory_backend, key="state")


@pytest.fixture
def controller(state_store: QuoteStateStore, clock: FakeClock, fixed_random: FixedRandom) -> QuoteController:
    return QuoteController(state_store, now_provider=clock, random_index=fixed_random)
