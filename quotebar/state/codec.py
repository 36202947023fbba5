"""JSON codec for the stored state document.

The document uses camelCase keys::

    {"quotes": [...], "rotationHours": 6, "rotationMinutes": 0,
     "menuBarStyle": {"fontPreset": "system", "textSizePreset": 13,
                      "colorPreset": "label", "isBold": false},
     "currentIndex": 0, "lastRotationAt": 1718000000.0}

Every field has a decode-time default applied here, once: a missing key and
an explicit ``null`` both resolve to it, unknown keys are ignored, and an
unrecognised display preset falls back to that preset's default. Decoding
does not normalize; :class:`quotebar.runtime.store.QuoteStateStore` does.

``lastRotationAt`` counts seconds since the UNIX epoch (1970-01-01 UTC).
Documents that used the 2001-01-01 reference date would decode about 31
years early; launch re-anchors the window, so only the very first tick
after such an import is affected.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

from quotebar.core.enums import ColorPreset, FontPreset, TextSizePreset
from quotebar.core.errors import StateDecodeError, StateEncodeError
from quotebar.core.time_utils import from_unix_timestamp, to_unix_timestamp
from quotebar.state.models import (
    DEFAULT_ROTATION_HOURS,
    DEFAULT_ROTATION_MINUTES,
    DisplayStyle,
    RotationState,
)


class StoredStyle(BaseModel):
    """``menuBarStyle`` block of the stored document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    font_preset: FontPreset = Field(FontPreset.SYSTEM, alias="fontPreset")
    text_size_preset: TextSizePreset = Field(TextSizePreset.REGULAR, alias="textSizePreset")
    color_preset: ColorPreset = Field(ColorPreset.LABEL, alias="colorPreset")
    is_bold: bool = Field(False, alias="isBold")

    @model_validator(mode="before")
    @classmethod
    def _null_means_absent(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("font_preset", "text_size_preset", "color_preset", mode="wrap")
    @classmethod
    def _unknown_preset_to_default(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].default

    @classmethod
    def from_style(cls, style: DisplayStyle) -> "StoredStyle":
        return cls(
            font_preset=style.font,
            text_size_preset=style.text_size,
            color_preset=style.color,
            is_bold=style.bold,
        )

    def to_style(self) -> DisplayStyle:
        return DisplayStyle(
            font=self.font_preset,
            text_size=self.text_size_preset,
            color=self.color_preset,
            bold=self.is_bold,
        )


class StoredState(BaseModel):
    """Top-level stored document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    quotes: List[str] = Field(default_factory=list)
    rotation_hours: int = Field(DEFAULT_ROTATION_HOURS, alias="rotationHours")
    rotation_minutes: int = Field(DEFAULT_ROTATION_MINUTES, alias="rotationMinutes")
    menu_bar_style: StoredStyle = Field(default_factory=StoredStyle, alias="menuBarStyle")
    current_index: Optional[int] = Field(None, alias="currentIndex")
    last_rotation_at: Optional[float] = Field(None, alias="lastRotationAt")

    @model_validator(mode="before")
    @classmethod
    def _null_means_absent(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def from_state(cls, state: RotationState) -> "StoredState":
        anchor = state.last_rotation_at
        return cls(
            quotes=list(state.quotes),
            rotation_hours=state.rotation_hours,
            rotation_minutes=state.rotation_minutes,
            menu_bar_style=StoredStyle.from_style(state.display_style),
            current_index=state.current_index,
            last_rotation_at=to_unix_timestamp(anchor) if anchor is not None else None,
        )

    def to_state(self) -> RotationState:
        anchor = self.last_rotation_at
        return RotationState(
            quotes=tuple(self.quotes),
            rotation_hours=self.rotation_hours,
            rotation_minutes=self.rotation_minutes,
            display_style=self.menu_bar_style.to_style(),
            current_index=self.current_index,
            last_rotation_at=from_unix_timestamp(anchor) if anchor is not None else None,
        )


def encode_state(state: RotationState) -> bytes:
    """Serialize ``state`` into deterministic UTF-8 JSON."""

    try:
        document = StoredState.from_state(state).model_dump(mode="json", by_alias=True)
        # Stable key order, no extra whitespace
        return json.dumps(
            document, separators=(",", ":"), sort_keys=True, ensure_ascii=False
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise StateEncodeError(f"Failed to serialize state: {exc}") from exc


def decode_state(data: bytes) -> RotationState:
    """Parse stored bytes into a (not yet normalized) :class:`RotationState`."""

    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise StateDecodeError("Stored state is not valid UTF-8 JSON") from exc
    if not isinstance(raw, dict):
        raise StateDecodeError(f"Stored state root must be an object, got {type(raw).__name__}")
    try:
        document = StoredState.model_validate(raw)
    except ValidationError as exc:
        raise StateDecodeError(f"Stored state has invalid fields: {exc.error_count()} error(s)") from exc
    try:
        return document.to_state()
    except (OverflowError, OSError, ValueError) as exc:
        raise StateDecodeError(f"Stored timestamp is out of range: {exc}") from exc


__all__ = ["StoredState", "StoredStyle", "decode_state", "encode_state"]
