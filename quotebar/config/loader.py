"""YAML loader for the config subsystem.

``load_app_config`` consumes one YAML file, validates it via models.py and
returns a typed :class:`AppConfig`. Sections map one-to-one to the models, so
new settings only require extending the model.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from quotebar.core.errors import ConfigurationError

from .models import AppConfig

CONFIG_ENV_VAR = "QUOTEBAR_CONFIG"
_DEFAULT_CONFIG_PATH = Path("config") / "app.yml"


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"YAML root must be a mapping in {path}")
    return data


def load_app_config(path: Path | str = _DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load app.yml (storage, scheduler, telemetry, telegram, quotes)."""

    path = Path(path)
    data = _read_yaml(path)
    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc


def resolve_config_path(config_dir: Path) -> Path | None:
    """Return the config file to use: ``$QUOTEBAR_CONFIG``, then ``app.yml``.

    ``None`` means no file was found and defaults apply.
    """

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    candidate = config_dir / "app.yml"
    if candidate.exists():
        return candidate
    return None


def load_or_default(config_dir: Path) -> AppConfig:
    path = resolve_config_path(config_dir)
    if path is None:
        return AppConfig()
    return load_app_config(path)
