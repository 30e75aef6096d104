"""pouchctl exception hierarchy."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ConfigError",
    "DaemonError",
    "PouchError",
    "ValidationError",
]


class PouchError(Exception):
    """Base class for pouchctl exceptions."""


class ValidationError(PouchError):
    """Raised when a flag or positional argument fails validation."""

    def __init__(self, message: str, *, flag: Optional[str] = None) -> None:
        if flag:
            message = f"invalid value for {flag}: {message}"
        super().__init__(message)
        self.flag = flag


class DaemonError(PouchError):
    """Raised when the daemon rejects a request or cannot be reached."""


class ConfigError(PouchError):
    """Raised when an explicitly requested config file cannot be used."""
