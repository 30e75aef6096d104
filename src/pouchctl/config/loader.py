"""Assemble the effective configuration for one invocation.

Precedence (lowest to highest): defaults, global config, project
``pouch.yaml`` (or ``--config``), ``.env``, environment, CLI flags.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .defaults import (
    deep_merge,
    get_default_config,
    load_dotenv_config,
    load_env_config,
    load_global_config,
    load_yaml_config,
    merge_config,
)
from .models import DaemonConfig, LoggingConfig

__all__ = ["build_cli_config", "load_config"]


def build_cli_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate global argparse options into a hierarchical config dict."""
    cfg: Dict[str, Any] = {"daemon": {}, "logging": {}}
    cfg["daemon"]["host"] = getattr(args, "host", None)
    cfg["daemon"]["api_version"] = getattr(args, "api_version", None)
    cfg["daemon"]["timeout"] = getattr(args, "timeout", None)
    if getattr(args, "debug", False):
        cfg["logging"]["level"] = "DEBUG"
    log_file = getattr(args, "log_file", None)
    if log_file:
        cfg["logging"]["file"] = str(log_file)
    return cfg


def load_config(
    args: argparse.Namespace,
) -> Tuple[DaemonConfig, LoggingConfig]:
    """Merge every configuration source and return typed sections.

    Raises ``ConfigError`` when an explicit ``--config`` cannot be used or a
    merged value is invalid.
    """
    config_path: Optional[Path] = getattr(args, "config", None)
    file_config = load_global_config()
    deep_merge(file_config, load_yaml_config(config_path))
    merged = merge_config(
        build_cli_config(args),
        load_env_config(),
        load_dotenv_config(),
        file_config,
        get_default_config(),
    )
    return (
        DaemonConfig.from_dict(merged.get("daemon") or {}),
        LoggingConfig.from_dict(merged.get("logging") or {}),
    )
