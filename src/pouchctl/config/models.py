"""Typed views over the merged configuration dictionary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..exceptions import ConfigError
from .defaults import DEFAULT_API_VERSION, DEFAULT_HOST, DEFAULT_TIMEOUT

__all__ = ["DaemonConfig", "LoggingConfig"]


@dataclass(frozen=True)
class DaemonConfig:
    """Where and how to reach the container daemon."""

    host: str = DEFAULT_HOST
    api_version: str = DEFAULT_API_VERSION
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DaemonConfig":
        host = str(data.get("host") or "").strip()
        if not host:
            raise ConfigError("daemon.host must not be empty")
        try:
            timeout = int(data.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"daemon.timeout must be an integer, got {data.get('timeout')!r}"
            ) from exc
        if timeout <= 0:
            raise ConfigError("daemon.timeout must be > 0")
        api_version = str(data.get("api_version") or DEFAULT_API_VERSION)
        return cls(host=host, api_version=api_version, timeout=timeout)


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        level = str(data.get("level") or "WARNING").upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"logging.level is not a valid level: {level}")
        log_file = data.get("file")
        return cls(level=level, file=str(log_file) if log_file else None)
