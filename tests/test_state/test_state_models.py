from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from quotebar.core.enums import ColorPreset, FontPreset
from quotebar.state.models import (
    DEFAULT_ROTATION_HOURS,
    DEFAULT_ROTATION_MINUTES,
    MAX_ROTATION_HOURS,
    DisplayStyle,
    RotationState,
    clamp_rotation_interval,
    launch_state,
    normalize,
    wrap_index,
)

INDEX_SAMPLES = [-1_000_003, -7, -3, -1, 0, 1, 2, 3, 4, 99, 10**12]
INTERVAL_SAMPLES = [(-5, -5), (0, 0), (0, 1), (0, 59), (0, 60), (1, 0), (168, 59), (169, 0), (10_000, -1)]


def test_empty_state_should_use_default_interval() -> None:
    state = RotationState.empty()
    assert state.quotes == ()
    assert (state.rotation_hours, state.rotation_minutes) == (6, 0)
    assert state.current_index is None
    assert state.last_rotation_at is None
    assert state.display_style == DisplayStyle()


def test_rotation_state_should_store_quotes_as_tuple() -> None:
    state = RotationState(quotes=["A", "B"])  # type: ignore[arg-type]
    assert state.quotes == ("A", "B")
    assert state == RotationState(quotes=("A", "B"))


def test_interval_seconds_should_combine_hours_and_minutes() -> None:
    assert RotationState(rotation_hours=2, rotation_minutes=30).interval_seconds == 9_000


def test_current_quote_should_be_none_when_index_out_of_range() -> None:
    assert RotationState(quotes=("A",), current_index=5).current_quote is None
    assert RotationState(quotes=("A", "B"), current_index=1).current_quote == "B"


@pytest.mark.parametrize("index", INDEX_SAMPLES)
@pytest.mark.parametrize("count", [1, 2, 3, 7])
def test_wrap_index_should_land_in_range(index: int, count: int) -> None:
    wrapped = wrap_index(index, count)
    assert 0 <= wrapped < count
    assert (wrapped - index) % count == 0


def test_clamp_rotation_interval_should_clamp_independently() -> None:
    assert clamp_rotation_interval(999, -4) == (MAX_ROTATION_HOURS, 0)
    assert clamp_rotation_interval(-1, 75) == (0, 59)
    assert clamp_rotation_interval(3, 15) == (3, 15)


@pytest.mark.parametrize("hours,minutes", INTERVAL_SAMPLES)
def test_normalize_should_keep_interval_in_bounds(hours: int, minutes: int) -> None:
    state = normalize(RotationState(quotes=("A",), rotation_hours=hours, rotation_minutes=minutes))
    assert 0 <= state.rotation_hours <= 168
    assert 0 <= state.rotation_minutes <= 59
    assert state.interval_seconds > 0


def test_normalize_should_reset_zero_interval_to_default() -> None:
    state = normalize(RotationState(quotes=("A",), rotation_hours=0, rotation_minutes=0))
    assert (state.rotation_hours, state.rotation_minutes) == (DEFAULT_ROTATION_HOURS, DEFAULT_ROTATION_MINUTES)

    negative = normalize(RotationState(rotation_hours=-3, rotation_minutes=-9))
    assert (negative.rotation_hours, negative.rotation_minutes) == (6, 0)


def test_normalize_should_clear_selection_for_empty_list(t0: datetime) -> None:
    state = normalize(RotationState(quotes=(), current_index=4, last_rotation_at=t0))
    assert state.current_index is None
    assert state.last_rotation_at is None


@pytest.mark.parametrize("index", INDEX_SAMPLES)
def test_normalize_should_wrap_out_of_range_index(index: int) -> None:
    state = normalize(RotationState(quotes=("A", "B", "C"), current_index=index))
    assert state.current_index == index % 3


def test_normalize_should_default_missing_index_to_zero() -> None:
    state = normalize(RotationState(quotes=("A", "B"), current_index=None))
    assert state.current_index == 0
    assert state.last_rotation_at is None


def test_normalize_should_treat_naive_anchor_as_utc() -> None:
    state = normalize(RotationState(quotes=("A",), current_index=0, last_rotation_at=datetime(2024, 1, 1, 8, 0)))
    assert state.last_rotation_at == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    assert state.last_rotation_at.tzinfo is not None


def test_normalize_should_preserve_display_style() -> None:
    style = DisplayStyle(font=FontPreset.SERIF, color=ColorPreset.TEAL, bold=True)
    assert normalize(RotationState(quotes=("A",), display_style=style)).display_style == style


@pytest.mark.parametrize(
    "state",
    [
        RotationState(),
        RotationState(quotes=("A",), rotation_hours=0, rotation_minutes=0, current_index=-4),
        RotationState(quotes=("A", "B", "C"), rotation_hours=500, rotation_minutes=99, current_index=17),
        RotationState(quotes=(), rotation_hours=-1, current_index=2, last_rotation_at=datetime(2024, 1, 1)),
        RotationState(quotes=("A", "A"), current_index=None, last_rotation_at=datetime(2024, 1, 1)),
    ],
)
def test_normalize_should_be_idempotent(state: RotationState) -> None:
    once = normalize(state)
    assert normalize(once) == once
    assert once.normalized() == once


def test_launch_state_should_randomize_index_in_range(t0: datetime) -> None:
    stored = RotationState(quotes=("A", "B", "C"), current_index=0, last_rotation_at=t0 - timedelta(days=3))
    now = t0 + timedelta(minutes=1)
    bounds: list[int] = []

    def source(upper: int) -> int:
        bounds.append(upper)
        return 8

    state = launch_state(stored, now, source)
    assert bounds == [3]
    assert state.current_index == 2
    assert state.last_rotation_at == now


def test_launch_state_should_keep_empty_state_empty(t0: datetime) -> None:
    def source(upper: int) -> int:  # pragma: no cover - must not be called
        raise AssertionError("random source used for empty list")

    state = launch_state(RotationState(current_index=3, last_rotation_at=t0), t0, source)
    assert state == RotationState.empty()


def test_launch_state_should_normalize_stored_interval(t0: datetime) -> None:
    state = launch_state(RotationState(quotes=("A",), rotation_hours=400), t0, lambda upper: 0)
    assert state.rotation_hours == MAX_ROTATION_HOURS
    assert state.current_index == 0
