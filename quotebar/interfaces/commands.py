"""Transport-neutral command handlers.

Each ``cmd_*`` method takes the whitespace-split arguments a user typed and
returns the reply text. The Telegram bot is a thin wrapper around this
class; other front-ends can reuse it unchanged. Positions shown to and typed
by users are 1-based.
"""
from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Sequence

from quotebar.core.enums import ColorPreset, FontPreset, TextSizePreset
from quotebar.core.errors import QuoteEditError
from quotebar.core.time_utils import to_local
from quotebar.interfaces.view import QuoteView
from quotebar.state.models import MAX_ROTATION_HOURS, MAX_ROTATION_MINUTES, DisplayStyle

if TYPE_CHECKING:
    from quotebar.runtime.controller import QuoteController

_STYLE_USAGE = (
    "Usage: /style font <system|rounded|monospaced|serif> | size <small|regular|large> | "
    "color <name> | bold <on|off>"
)


def _parse_position(raw: str) -> int:
    try:
        position = int(raw)
    except ValueError:
        raise QuoteEditError(f"Invalid position: {raw}") from None
    if position < 1:
        raise QuoteEditError("Positions start at 1")
    return position - 1


class QuoteCommands:
    """Command layer translating user input into controller calls."""

    def __init__(self, controller: "QuoteController", *, timezone_name: str | None = None) -> None:
        self._controller = controller
        self._timezone_name = timezone_name

    def cmd_quote(self, _: Sequence[str]) -> str:
        view = self._controller.view()
        if view.current_quote is None:
            return "No quotes configured. Add one with /add <text>"
        return f"[{view.current_position}/{view.quote_count}] {view.current_quote}"

    def cmd_next(self, _: Sequence[str]) -> str:
        if not self._controller.view().next_enabled:
            return "No quotes configured. Add one with /add <text>"
        self._controller.force_next()
        return self.cmd_quote(())

    def cmd_list(self, _: Sequence[str]) -> str:
        state = self._controller.state
        if not state.quotes:
            return "No quotes configured"
        lines = []
        for position, text in enumerate(state.quotes, start=1):
            marker = "▶" if position - 1 == state.current_index else " "
            lines.append(f"{marker} {position}. {text}")
        return "\n".join(lines)

    def cmd_add(self, args: Sequence[str]) -> str:
        text = " ".join(args)
        if not text.strip():
            return "Usage: /add <text>"
        try:
            state = self._controller.add_quote(text)
        except QuoteEditError as exc:
            return str(exc)
        return f"Added quote #{len(state.quotes)}"

    def cmd_edit(self, args: Sequence[str]) -> str:
        if len(args) < 2:
            return "Usage: /edit <position> <text>"
        try:
            index = _parse_position(args[0])
            self._controller.edit_quote(index, " ".join(args[1:]))
        except QuoteEditError as exc:
            return str(exc)
        return f"Updated quote #{index + 1}"

    def cmd_remove(self, args: Sequence[str]) -> str:
        if len(args) != 1:
            return "Usage: /remove <position>"
        try:
            index = _parse_position(args[0])
            state = self._controller.remove_quote(index)
        except QuoteEditError as exc:
            return str(exc)
        return f"Removed quote #{index + 1}, {len(state.quotes)} left"

    def cmd_interval(self, args: Sequence[str]) -> str:
        if not args:
            return f"Rotating every {self._controller.view().interval_label}. Usage: /interval <hours> [minutes]"
        if len(args) > 2:
            return "Usage: /interval <hours> [minutes]"
        try:
            hours = int(args[0])
            minutes = int(args[1]) if len(args) == 2 else 0
        except ValueError:
            return "Invalid integer"
        if not 0 <= hours <= MAX_ROTATION_HOURS or not 0 <= minutes <= MAX_ROTATION_MINUTES:
            return f"Hours must be 0-{MAX_ROTATION_HOURS} and minutes 0-{MAX_ROTATION_MINUTES}"
        try:
            self._controller.set_rotation_interval(hours, minutes)
        except QuoteEditError as exc:
            return str(exc)
        return f"Rotating every {self._controller.view().interval_label}"

    def cmd_style(self, args: Sequence[str]) -> str:
        if len(args) != 2:
            return _STYLE_USAGE
        attribute, value = args[0].lower(), args[1].lower()
        style = self._controller.state.display_style
        try:
            if attribute == "font":
                updated = replace(style, font=FontPreset(value))
            elif attribute == "size":
                updated = replace(style, text_size=TextSizePreset[value.upper()])
            elif attribute == "color":
                updated = replace(style, color=ColorPreset(value))
            elif attribute == "bold" and value in {"on", "off"}:
                updated = replace(style, bold=value == "on")
            else:
                return _STYLE_USAGE
        except (KeyError, ValueError):
            return f"Unknown {attribute}: {value}"
        self._controller.set_display_style(updated)
        return f"Style updated: {_describe_style(updated)}"

    def cmd_status(self, _: Sequence[str]) -> str:
        view = self._controller.view()
        lines = [
            f"Quote: {view.title}",
            f"Quotes: {view.quote_count}",
            f"Interval: {view.interval_label}",
            f"Next rotation: {self._format_next(view)}",
            f"Style: {_describe_style(view.style)}",
        ]
        return "\n".join(lines)

    def _format_next(self, view: QuoteView) -> str:
        if view.next_rotation_at is None:
            return "-"
        local = to_local(view.next_rotation_at, self._timezone_name)
        return local.strftime("%Y-%m-%d %H:%M %Z")


def _describe_style(style: DisplayStyle) -> str:
    bold = ", bold" if style.bold else ""
    return f"{style.font.display_name}, {style.text_size.display_name}, {style.color.display_name}{bold}"


__all__ = ["QuoteCommands"]
