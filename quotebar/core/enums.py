"""Enumerations shared across quotebar subsystems.

The display presets below are persisted inside the ``menuBarStyle`` block of
the stored state, so their values are part of the wire format and must not be
renamed.
"""
from __future__ import annotations

from enum import Enum, IntEnum


class FontPreset(str, Enum):
    """Font family used to render the status title."""

    SYSTEM = "system"
    ROUNDED = "rounded"
    MONOSPACED = "monospaced"
    SERIF = "serif"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class TextSizePreset(IntEnum):
    """Point size presets for the status title."""

    SMALL = 12
    REGULAR = 13
    LARGE = 15

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class ColorPreset(str, Enum):
    """Text color presets. ``label`` follows the host's default text color."""

    LABEL = "label"
    RED = "red"
    ORANGE = "orange"
    GREEN = "green"
    BLUE = "blue"
    PINK = "pink"
    YELLOW = "yellow"
    PURPLE = "purple"
    INDIGO = "indigo"
    TEAL = "teal"
    CYAN = "cyan"
    BROWN = "brown"
    GRAY = "gray"
    BLACK = "black"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class RotationReason(str, Enum):
    """Why the visible quote changed; recorded in telemetry events."""

    LAUNCH = "launch"
    TICK = "tick"
    MANUAL = "manual"
