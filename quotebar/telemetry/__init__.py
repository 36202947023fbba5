"""Telemetry and logging subsystem package."""
from .events import TelemetryEvent, edit_event, rotation_event
from .logging_setup import JsonFormatter, configure_logging
from .storage import TelemetryStorage, default_storage

__all__ = [
    "JsonFormatter",
    "TelemetryEvent",
    "TelemetryStorage",
    "configure_logging",
    "default_storage",
    "edit_event",
    "rotation_event",
]
