"""Datamodels describing the persisted rotation state.

:class:`RotationState` is the only record quotebar persists. It is an
immutable value: every change produces a new instance, and :func:`normalize`
is the single gate that repairs whatever storage, edits or older schema
versions hand us. The rotation engine and the persistence gateway only ever
see normalized states.

Invariants after :func:`normalize`:

* an empty quote list has neither a current index nor an anchor timestamp;
* a non-empty list always has an index inside ``[0, len(quotes))``;
* hours stay in ``[0, 168]`` and minutes in ``[0, 59]``;
* a zero-length interval is replaced by the 6h default.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Tuple

from quotebar.core.enums import ColorPreset, FontPreset, TextSizePreset
from quotebar.core.time_utils import ensure_utc
from quotebar.core.types import RandomIndexSource

DEFAULT_ROTATION_HOURS = 6
DEFAULT_ROTATION_MINUTES = 0
MIN_ROTATION_HOURS = 0
MAX_ROTATION_HOURS = 168
MIN_ROTATION_MINUTES = 0
MAX_ROTATION_MINUTES = 59


@dataclass(frozen=True, slots=True)
class DisplayStyle:
    """How presentation collaborators should render the current quote."""

    font: FontPreset = FontPreset.SYSTEM
    text_size: TextSizePreset = TextSizePreset.REGULAR
    color: ColorPreset = ColorPreset.LABEL
    bold: bool = False


@dataclass(frozen=True, slots=True)
class RotationState:
    """Quote list, rotation interval, current selection and anchor time.

    ``last_rotation_at`` marks the start of the current interval window. It
    is re-anchored on manual advance and moved forward in whole intervals on
    scheduled ticks, see :mod:`quotebar.rotation.rotation_engine`.
    """

    quotes: Tuple[str, ...] = ()
    rotation_hours: int = DEFAULT_ROTATION_HOURS
    rotation_minutes: int = DEFAULT_ROTATION_MINUTES
    display_style: DisplayStyle = field(default_factory=DisplayStyle)
    current_index: int | None = None
    last_rotation_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.quotes, tuple):
            object.__setattr__(self, "quotes", tuple(self.quotes))

    @classmethod
    def empty(cls) -> "RotationState":
        """Canonical state of a first launch or an unreadable store."""

        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.quotes

    @property
    def interval_seconds(self) -> int:
        return self.rotation_hours * 3600 + self.rotation_minutes * 60

    @property
    def current_quote(self) -> str | None:
        """Return the selected quote text, or ``None`` when nothing is selected."""

        index = self.current_index
        if index is None or not 0 <= index < len(self.quotes):
            return None
        return self.quotes[index]

    def normalized(self) -> "RotationState":
        return normalize(self)


def clamp_rotation_interval(hours: int, minutes: int) -> Tuple[int, int]:
    """Clamp hours and minutes independently to their allowed ranges."""

    clamped_hours = min(max(hours, MIN_ROTATION_HOURS), MAX_ROTATION_HOURS)
    clamped_minutes = min(max(minutes, MIN_ROTATION_MINUTES), MAX_ROTATION_MINUTES)
    return clamped_hours, clamped_minutes


def wrap_index(index: int, count: int) -> int:
    """Wrap any integer (negative or overflowing) into ``[0, count)``."""

    if count <= 0:
        return 0
    return ((index % count) + count) % count


def normalize(state: RotationState) -> RotationState:
    """Return ``state`` repaired so that every model invariant holds.

    Pure, total and idempotent. Must run after every load, list edit and
    interval edit before the result is adopted.
    """

    hours, minutes = clamp_rotation_interval(state.rotation_hours, state.rotation_minutes)
    if hours * 3600 + minutes * 60 == 0:
        hours, minutes = DEFAULT_ROTATION_HOURS, DEFAULT_ROTATION_MINUTES

    if not state.quotes:
        return replace(
            state,
            rotation_hours=hours,
            rotation_minutes=minutes,
            current_index=None,
            last_rotation_at=None,
        )

    if state.current_index is None:
        index = 0
    else:
        index = wrap_index(state.current_index, len(state.quotes))
    anchor = state.last_rotation_at
    if anchor is not None:
        anchor = ensure_utc(anchor)
    return replace(
        state,
        rotation_hours=hours,
        rotation_minutes=minutes,
        current_index=index,
        last_rotation_at=anchor,
    )


def launch_state(
    stored: RotationState,
    now: datetime,
    random_index: RandomIndexSource = random.randrange,
) -> RotationState:
    """Prepare the state shown right after process start.

    Every fresh start shows a random quote and restarts the interval window,
    so restarting the host doubles as a shuffle. ``random_index(n)`` must
    return an integer in ``[0, n)``; out-of-range values are wrapped.
    """

    state = normalize(stored)
    if not state.quotes:
        return state

    count = len(state.quotes)
    index = wrap_index(random_index(count), count)
    return replace(state, current_index=index, last_rotation_at=ensure_utc(now))


__all__ = [
    "DEFAULT_ROTATION_HOURS",
    "DEFAULT_ROTATION_MINUTES",
    "MAX_ROTATION_HOURS",
    "MAX_ROTATION_MINUTES",
    "MIN_ROTATION_HOURS",
    "MIN_ROTATION_MINUTES",
    "DisplayStyle",
    "RotationState",
    "clamp_rotation_interval",
    "launch_state",
    "normalize",
    "wrap_index",
]
