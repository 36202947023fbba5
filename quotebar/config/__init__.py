"""Configuration loading and validation package."""

from .loader import load_app_config, load_or_default, resolve_config_path
from .models import (
    AppConfig,
    QuotesConfig,
    SchedulerConfig,
    StorageBackend,
    StorageConfig,
    TelegramConfig,
    TelemetryConfig,
)

__all__ = [
    "AppConfig",
    "QuotesConfig",
    "SchedulerConfig",
    "StorageBackend",
    "StorageConfig",
    "TelegramConfig",
    "TelemetryConfig",
    "load_app_config",
    "load_or_default",
    "resolve_config_path",
]
