"""Render-ready snapshot of the rotation state.

Presentation collaborators (status line, Telegram replies, a future tray
icon) consume :class:`QuoteView` and never reach into the raw state.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from quotebar.rotation.rotation_engine import next_rotation_at
from quotebar.state.models import DisplayStyle, RotationState, normalize

MAX_TITLE_CHARACTERS = 48
EMPTY_TITLE = "No quotes"
EMPTY_MENU_TEXT = "No quotes configured"


@dataclass(frozen=True, slots=True)
class QuoteView:
    title: str
    menu_text: str
    current_quote: str | None
    current_position: int | None
    quote_count: int
    next_enabled: bool
    interval_label: str
    next_rotation_at: datetime | None
    style: DisplayStyle


def truncate_title(quote: str, limit: int = MAX_TITLE_CHARACTERS) -> str:
    """Shorten ``quote`` to ``limit`` characters followed by an ellipsis."""

    if len(quote) <= limit:
        return quote
    return f"{quote[:limit]}…"


def format_interval(hours: int, minutes: int) -> str:
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def build_view(state: RotationState) -> QuoteView:
    state = normalize(state)
    quote = state.current_quote
    return QuoteView(
        title=truncate_title(quote) if quote is not None else EMPTY_TITLE,
        menu_text=quote if quote is not None else EMPTY_MENU_TEXT,
        current_quote=quote,
        current_position=state.current_index + 1 if state.current_index is not None else None,
        quote_count=len(state.quotes),
        next_enabled=not state.is_empty,
        interval_label=format_interval(state.rotation_hours, state.rotation_minutes),
        next_rotation_at=next_rotation_at(state),
        style=state.display_style,
    )


__all__ = ["QuoteView", "build_view", "format_interval", "truncate_title"]
