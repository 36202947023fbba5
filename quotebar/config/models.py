"""Typed configuration models for the quotebar host.

The config subsystem relies on pydantic to validate the YAML file and to
provide strongly-typed objects to the rest of the runtime. Every section has
defaults, so an empty or missing file yields a working local setup.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt, model_validator

from quotebar.runtime.store import DEFAULT_STATE_KEY


class StorageBackend(str, Enum):
    """Where the rotation state blob lives."""

    FILE = "file"
    MEMORY = "memory"


class StorageConfig(BaseModel):
    """Persistence backend selection and location of the state blob."""

    backend: StorageBackend = StorageBackend.FILE
    directory: str = Field("runtime", min_length=1)
    key: str = Field(DEFAULT_STATE_KEY, min_length=1, pattern=r"^[A-Za-z0-9_.-]+$")


class SchedulerConfig(BaseModel):
    """Tick cadence. Rotation intervals themselves live in the stored state."""

    tick_interval_sec: PositiveInt = 60
    wake_threshold_sec: PositiveFloat = 120.0


class TelemetryConfig(BaseModel):
    """Logging/event switches."""

    log_level: str = Field("INFO")
    log_dir: str = Field("data/logs")
    events_dir: str = Field("data")
    timezone: str = Field("UTC")


class TelegramConfig(BaseModel):
    """Telegram bot token and chat id used by the Telegram interface."""

    enabled: bool = False
    bot_token: Optional[str] = Field(None, min_length=10)
    chat_id: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _require_credentials_when_enabled(self) -> "TelegramConfig":
        if self.enabled and (not self.bot_token or self.chat_id is None):
            raise ValueError("telegram.bot_token and telegram.chat_id are required when telegram is enabled")
        return self


class QuotesConfig(BaseModel):
    """Quotes imported on startup while the stored list is empty."""

    seed: List[str] = Field(default_factory=list)


class AppConfig(BaseModel):
    """Runtime config composed of storage, scheduler, telemetry and interfaces."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    quotes: QuotesConfig = Field(default_factory=QuotesConfig)
