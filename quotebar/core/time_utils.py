"""Utilities for dealing with timezones and timestamps.

The rotation engine compares aware UTC datetimes; storage keeps UNIX seconds
and the presentation layer shows local wall-clock times. The helpers below
provide a single source of truth for converting between them.
"""
from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from .types import Timestamp

DEFAULT_TZ_NAME = "UTC"


def get_app_timezone(tz_name: str | None = None) -> ZoneInfo:
    """Return the ZoneInfo object for the configured timezone."""

    target_name = tz_name or DEFAULT_TZ_NAME
    return ZoneInfo(target_name)


def now_utc() -> datetime:
    """Return the current UTC datetime with tzinfo."""

    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime; naive values are taken as UTC."""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local(dt: datetime, tz_name: str | None = None) -> datetime:
    """Convert ``dt`` to the provided timezone for display."""

    return ensure_utc(dt).astimezone(get_app_timezone(tz_name))


def to_unix_timestamp(dt: datetime) -> Timestamp:
    """Convert an aware datetime to a UNIX timestamp (float seconds)."""

    if dt.tzinfo is None:
        raise ValueError("Datetime must be timezone-aware before conversion")
    return Timestamp(dt.timestamp())


def from_unix_timestamp(value: float) -> datetime:
    """Convert UNIX seconds back into an aware UTC datetime."""

    return datetime.fromtimestamp(value, tz=timezone.utc)
