from __future__ import annotations

import pytest

from quotebar.core.enums import FontPreset
from quotebar.interfaces.commands import QuoteCommands


@pytest.fixture
def commands(controller) -> QuoteCommands:
    controller.launch(seed_quotes=["Alpha", "Beta", "Gamma"])
    return QuoteCommands(controller, timezone_name="UTC")


def test_quote_and_next_should_report_position(commands: QuoteCommands) -> None:
    assert commands.cmd_quote([]) == "[1/3] Alpha"
    assert commands.cmd_next([]) == "[2/3] Beta"
    assert commands.cmd_list([]) == "  1. Alpha\n▶ 2. Beta\n  3. Gamma"


def test_commands_should_explain_empty_list(controller) -> None:
    controller.launch()
    commands = QuoteCommands(controller)
    assert commands.cmd_quote([]).startswith("No quotes configured")
    assert commands.cmd_next([]).startswith("No quotes configured")
    assert commands.cmd_list([]) == "No quotes configured"
    assert "Next rotation: -" in commands.cmd_status([])


def test_add_edit_remove_should_use_one_based_positions(commands: QuoteCommands, controller) -> None:
    assert commands.cmd_add(["Delta", "quote"]) == "Added quote #4"
    assert commands.cmd_add([]) == "Usage: /add <text>"
    assert commands.cmd_edit(["2", "New", "Beta"]) == "Updated quote #2"
    assert commands.cmd_edit(["0", "x"]) == "Positions start at 1"
    assert commands.cmd_edit(["x", "y"]) == "Invalid position: x"
    assert commands.cmd_remove(["9"]) == "No quote at position 9 (have 4)"
    assert commands.cmd_remove(["1"]) == "Removed quote #1, 3 left"
    assert controller.state.quotes == ("New Beta", "Gamma", "Delta quote")


def test_interval_command_should_validate_input(commands: QuoteCommands, controller) -> None:
    assert commands.cmd_interval(["2", "15"]) == "Rotating every 2h 15m"
    assert commands.cmd_interval(["0", "0"]) == "Rotation interval must be at least one minute"
    assert commands.cmd_interval(["200"]) == "Hours must be 0-168 and minutes 0-59"
    assert commands.cmd_interval(["a"]) == "Invalid integer"
    assert (controller.state.rotation_hours, controller.state.rotation_minutes) == (2, 15)


def test_style_command_should_update_presets(commands: QuoteCommands, controller) -> None:
    assert commands.cmd_style(["font", "serif"]) == "Style updated: Serif, Regular, Label"
    assert commands.cmd_style(["size", "huge"]) == "Unknown size: huge"
    assert commands.cmd_style(["bold", "on"]) == "Style updated: Serif, Regular, Label, bold"
    assert commands.cmd_style(["weight", "x"]).startswith("Usage: /style")
    assert controller.state.display_style.font is FontPreset.SERIF
    assert controller.state.display_style.bold is True


def test_status_should_show_next_rotation_in_local_time(commands: QuoteCommands) -> None:
    status = commands.cmd_status([])
    assert "Quote: Alpha" in status
    assert "Interval: 6h" in status
    assert "Next rotation: 2024-01-01 18:00 UTC" in status
