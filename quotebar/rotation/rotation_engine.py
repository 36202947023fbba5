"""Scheduled and manual quote rotation.

Both operations are pure: they take a state and the current time and return
a :class:`RotationResult` carrying the next state plus a ``changed`` flag
obtained by comparing it with the caller's input. Hosts use the flag to skip
redundant persistence and rendering.

Scheduled ticks use catch-up semantics. When the host slept through several
intervals, a single tick advances the index once per elapsed interval and
moves the anchor forward by whole intervals, so the window boundaries never
drift towards the tick times.
"""
from __future__ import annotations

import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import NamedTuple

from quotebar.core.time_utils import ensure_utc
from quotebar.state.models import RotationState, normalize


class RotationResult(NamedTuple):
    state: RotationState
    changed: bool


def apply_rotation_if_needed(state: RotationState, now: datetime) -> RotationResult:
    """Advance the selection by the number of intervals elapsed since the anchor."""

    original = state
    state = normalize(state)
    now = ensure_utc(now)

    if not state.quotes:
        return RotationResult(state, state != original)

    interval_seconds = state.interval_seconds
    if interval_seconds <= 0:
        return RotationResult(state, state != original)

    anchor = state.last_rotation_at
    if anchor is None:
        # Legacy/malformed data: start the window now, keep the current quote.
        state = replace(state, last_rotation_at=now)
        return RotationResult(state, state != original)

    steps = _due_steps(anchor, now, interval_seconds)
    if steps == 0:
        return RotationResult(state, state != original)

    index = state.current_index if state.current_index is not None else 0
    state = replace(
        state,
        current_index=(index + steps) % len(state.quotes),
        last_rotation_at=anchor + timedelta(seconds=interval_seconds * steps),
    )
    return RotationResult(state, state != original)


def force_next_quote(state: RotationState, now: datetime) -> RotationResult:
    """Advance exactly one position and restart the window at ``now``."""

    original = state
    state = normalize(state)

    if not state.quotes:
        return RotationResult(state, state != original)

    index = state.current_index if state.current_index is not None else -1
    state = replace(
        state,
        current_index=(index + 1) % len(state.quotes),
        last_rotation_at=ensure_utc(now),
    )
    return RotationResult(state, state != original)


def next_rotation_at(state: RotationState) -> datetime | None:
    """Return when the next scheduled advance is due, if anything rotates."""

    state = normalize(state)
    if not state.quotes or state.last_rotation_at is None:
        return None
    return state.last_rotation_at + timedelta(seconds=state.interval_seconds)


def rotation_steps(state: RotationState, now: datetime) -> int:
    """Number of positions a tick at ``now`` would advance (0 when not due)."""

    state = normalize(state)
    if not state.quotes or state.last_rotation_at is None or state.interval_seconds <= 0:
        return 0
    return _due_steps(state.last_rotation_at, ensure_utc(now), state.interval_seconds)


def _due_steps(anchor: datetime, now: datetime, interval_seconds: int) -> int:
    elapsed = (now - anchor).total_seconds()
    if elapsed < interval_seconds:
        return 0
    # Crossing the threshold always advances at least once.
    return max(math.floor(elapsed / interval_seconds), 1)


__all__ = [
    "RotationResult",
    "apply_rotation_if_needed",
    "force_next_quote",
    "next_rotation_at",
    "rotation_steps",
]
