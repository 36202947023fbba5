"""Error hierarchy shared by the quotebar subsystems.

The state model and rotation engine never raise: malformed input is absorbed
by normalization. The types below cover the outer seams (codec, storage,
edits, config) so callers can tell a rejected user edit apart from a broken
storage backend. Submodules should raise the most specific error available.
"""
from __future__ import annotations


class CoreError(Exception):
    """Base class for all custom exceptions in the application."""


class ConfigurationError(CoreError):
    """Raised when configuration files are missing or invalid."""


class StateCodecError(CoreError):
    """Raised when a state cannot be converted to or from its stored form."""


class StateDecodeError(StateCodecError):
    """Raised when stored bytes are not a readable state document."""


class StateEncodeError(StateCodecError):
    """Raised when a state cannot be serialized."""


class StateStoreError(CoreError):
    """Raised when the persistence backend cannot be read or written."""


class QuoteEditError(CoreError):
    """Raised when a list or interval edit is rejected (bad index, blank text)."""


class TelemetryError(CoreError):
    """Raised for telemetry/logging persistence issues."""
