"""User edits of the quote list, interval and display style.

Each helper takes the current state and returns a new normalized state.
Rejected edits raise :class:`~quotebar.core.errors.QuoteEditError` and leave
the caller's state untouched. Indices here are 0-based; the command layer
translates from what users type.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from quotebar.core.errors import QuoteEditError
from quotebar.core.time_utils import ensure_utc
from quotebar.state.models import DisplayStyle, RotationState, clamp_rotation_interval, normalize


def _clean_text(text: str) -> str:
    cleaned = text.strip()
    if not cleaned:
        raise QuoteEditError("Quote text must not be blank")
    return cleaned


def _check_index(state: RotationState, index: int) -> None:
    if not 0 <= index < len(state.quotes):
        raise QuoteEditError(f"No quote at position {index + 1} (have {len(state.quotes)})")


def add_quote(state: RotationState, text: str, now: datetime) -> RotationState:
    """Append a quote; the first quote ever added becomes the selection."""

    cleaned = _clean_text(text)
    current = normalize(state)
    updated = replace(current, quotes=current.quotes + (cleaned,))
    if current.current_index is None:
        updated = replace(updated, current_index=0, last_rotation_at=ensure_utc(now))
    return normalize(updated)


def edit_quote(state: RotationState, index: int, text: str, now: datetime) -> RotationState:
    cleaned = _clean_text(text)
    current = normalize(state)
    _check_index(current, index)
    quotes = list(current.quotes)
    quotes[index] = cleaned
    return normalize(replace(current, quotes=tuple(quotes), last_rotation_at=ensure_utc(now)))


def remove_quote(state: RotationState, index: int, now: datetime) -> RotationState:
    """Remove a quote while keeping the selection on a sensible neighbour.

    Removing an entry before the selection shifts it down so the same text
    stays visible; removing the selected entry keeps the position, which
    then shows the following quote (or the new last one).
    """

    current = normalize(state)
    _check_index(current, index)
    quotes = current.quotes[:index] + current.quotes[index + 1 :]
    if not quotes:
        return normalize(replace(current, quotes=(), current_index=None, last_rotation_at=None))

    selected = current.current_index
    if selected is not None:
        if index < selected:
            selected -= 1
        elif index == selected:
            selected = min(selected, len(quotes) - 1)
    return normalize(
        replace(current, quotes=quotes, current_index=selected, last_rotation_at=ensure_utc(now))
    )


def set_rotation_interval(state: RotationState, hours: int, minutes: int, now: datetime) -> RotationState:
    """Change the interval and restart the current window at ``now``."""

    clamped_hours, clamped_minutes = clamp_rotation_interval(hours, minutes)
    if clamped_hours == 0 and clamped_minutes == 0:
        raise QuoteEditError("Rotation interval must be at least one minute")
    current = normalize(state)
    return normalize(
        replace(
            current,
            rotation_hours=clamped_hours,
            rotation_minutes=clamped_minutes,
            last_rotation_at=ensure_utc(now),
        )
    )


def set_display_style(state: RotationState, style: DisplayStyle) -> RotationState:
    return normalize(replace(state, display_style=style))


__all__ = [
    "add_quote",
    "edit_quote",
    "remove_quote",
    "set_display_style",
    "set_rotation_interval",
]
