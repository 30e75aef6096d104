"""Configuration loading and merging for pouchctl."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values

from ..exceptions import ConfigError

__all__ = [
    "deep_merge",
    "get_default_config",
    "load_dotenv_config",
    "load_env_config",
    "load_global_config",
    "load_yaml_config",
    "merge_config",
]

logger = logging.getLogger(__name__)

DEFAULT_HOST = "unix:///var/run/pouchd.sock"
DEFAULT_API_VERSION = "1.24"
DEFAULT_TIMEOUT = 60
_PROJECT_CONFIG = Path("pouch.yaml")

_ENV_TO_CONFIG_KEY = {
    "POUCH_HOST": ("daemon", "host"),
    "POUCH_API_VERSION": ("daemon", "api_version"),
    "POUCH_TIMEOUT": ("daemon", "timeout"),
    "POUCH_LOG_LEVEL": ("logging", "level"),
    "POUCH_LOG_FILE": ("logging", "file"),
}


def merge_config(
    cli_args: Dict[str, Any],
    env_config: Dict[str, Any],
    dotenv_config: Dict[str, Any],
    file_config: Dict[str, Any],
    defaults: Dict[str, Any],
) -> Dict[str, Any]:
    """Merge configuration dictionaries honoring precedence order."""
    merged = _copy(defaults)
    deep_merge(merged, file_config)
    deep_merge(merged, dotenv_config)
    deep_merge(merged, env_config)
    deep_merge(merged, _drop_none(cli_args))
    return merged


def deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> None:
    """Recursively merge ``overlay`` into ``base`` in place."""
    for key, value in overlay.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value


def _copy(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: _copy(value) if isinstance(value, dict) else value
        for key, value in config.items()
    }


def _drop_none(config: Dict[str, Any]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    for key, value in config.items():
        if isinstance(value, dict):
            nested = _drop_none(value)
            if nested:
                cleaned[key] = nested
        elif value is not None:
            cleaned[key] = value
    return cleaned


def load_yaml_config(yaml_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load ``pouch.yaml`` (or an explicit file).

    A missing default file yields ``{}``. An explicit path that is missing,
    unreadable or not a mapping raises ``ConfigError``.
    """
    explicit = yaml_path is not None
    path = yaml_path or _PROJECT_CONFIG
    if not path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {path}")
        return {}

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (yaml.YAMLError, OSError) as exc:
        if explicit:
            raise ConfigError(f"failed to read config {path}: {exc}") from exc
        logger.warning("Failed to load %s: %s", path, exc)
        return {}

    if not isinstance(data, dict):
        if explicit:
            raise ConfigError(f"invalid config format (expected mapping): {path}")
        return {}
    return data


def load_global_config() -> Dict[str, Any]:
    """Load user-level configuration from standard locations."""
    try:
        home = Path.home()
    except (OSError, RuntimeError):
        return {}

    for candidate in (
        home / ".pouch" / "config.yaml",
        home / ".config" / "pouch" / "config.yaml",
    ):
        try:
            if candidate.exists():
                with candidate.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle) or {}
                if isinstance(data, dict):
                    return data
        except (yaml.YAMLError, OSError) as exc:
            logger.warning("Failed to load %s: %s", candidate, exc)
            continue
    return {}


def load_dotenv_config(dotenv_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load supported ``POUCH_*`` settings from a ``.env`` file."""
    path = dotenv_path or Path(".env")
    if not path.exists():
        return {}

    values = dotenv_values(path)
    config: Dict[str, Any] = {}
    for env_key, (section, key) in _ENV_TO_CONFIG_KEY.items():
        if values.get(env_key) is not None:
            config.setdefault(section, {})[key] = values[env_key]
    return config


def load_env_config() -> Dict[str, Any]:
    """Load supported ``POUCH_*`` settings from the current environment."""
    config: Dict[str, Any] = {}
    for env_key, (section, key) in _ENV_TO_CONFIG_KEY.items():
        if env_key in os.environ:
            config.setdefault(section, {})[key] = os.environ[env_key]
    return config


def get_default_config() -> Dict[str, Any]:
    """Return a fresh copy of pouchctl's default configuration."""
    return {
        "daemon": {
            "host": DEFAULT_HOST,
            "api_version": DEFAULT_API_VERSION,
            "timeout": DEFAULT_TIMEOUT,
        },
        "logging": {
            "level": "WARNING",
            "file": None,
        },
    }
