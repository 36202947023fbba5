"""Structured telemetry events written as JSON lines."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict

from quotebar.core.enums import RotationReason


@dataclass(slots=True)
class TelemetryEvent:
    """Generic event used by JSON-line logs under ``events/quotes_YYYYMMDD.jsonl``."""

    timestamp: datetime
    event_type: str
    level: str = "INFO"
    payload: Dict[str, Any] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


def rotation_event(
    *,
    timestamp: datetime,
    reason: RotationReason,
    index: int | None,
    quote_count: int,
    steps: int = 1,
) -> TelemetryEvent:
    """Event emitted whenever the visible quote changes."""

    return TelemetryEvent(
        timestamp=timestamp,
        event_type="quote_rotated",
        payload={"reason": reason.value, "index": index, "steps": steps},
        context={"quote_count": quote_count},
    )


def edit_event(*, timestamp: datetime, action: str, quote_count: int, **details: Any) -> TelemetryEvent:
    """Event emitted after an accepted list, interval or style edit."""

    return TelemetryEvent(
        timestamp=timestamp,
        event_type="quotes_edited",
        payload={"action": action, **details},
        context={"quote_count": quote_count},
    )


__all__ = ["TelemetryEvent", "edit_event", "rotation_event"]
