"""Logging setup for the pouchctl CLI."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

__all__ = ["JSONFormatter", "setup_logging"]

_PACKAGE_LOGGER = "pouchctl"
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_NOISY_THIRD_PARTY_LOGGERS = (
    "urllib3",
    "docker",
    "docker.utils",
    "docker.auth",
    "docker.api",
)


class JSONFormatter(logging.Formatter):
    """Format log records as JSON Lines."""

    def format(
        self, record: logging.LogRecord
    ) -> str:  # noqa: D401 - short override doc
        entry = {
            "timestamp": _to_iso_millis(datetime.now(timezone.utc)),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _LOG_RECORD_IGNORED_FIELDS:
                continue
            entry[key] = _json_safe(value)

        return json.dumps(entry)


_LOG_RECORD_IGNORED_FIELDS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "exc_info",
    "exc_text",
    "stack_info",
    "taskName",
}


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Route ``pouchctl`` loggers to stderr and, optionally, a JSONL file.

    Stdout is reserved for the command's own output.
    """
    console_level = logging.getLevelName(level.upper())
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    handlers: List[logging.Handler] = [_console_handler(console_level)]
    if log_file:
        handlers.append(_file_handler(Path(log_file)))

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.DEBUG if log_file else console_level)
    package_logger.propagate = False
    for handler in handlers:
        package_logger.addHandler(handler)

    _limit_third_party_noise()


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(JSONFormatter())
    return handler


def _limit_third_party_noise() -> None:
    for name in _NOISY_THIRD_PARTY_LOGGERS:
        noisy_logger = logging.getLogger(name)
        noisy_logger.setLevel(logging.WARNING)
        noisy_logger.propagate = False


def _to_iso_millis(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def _json_safe(value: object) -> object:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value
