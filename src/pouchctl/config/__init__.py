"""Configuration loading, merging and typed settings."""

from .defaults import (
    deep_merge,
    get_default_config,
    load_dotenv_config,
    load_env_config,
    load_global_config,
    load_yaml_config,
    merge_config,
)
from .loader import build_cli_config, load_config
from .models import DaemonConfig, LoggingConfig

__all__ = [
    "DaemonConfig",
    "LoggingConfig",
    "build_cli_config",
    "deep_merge",
    "get_default_config",
    "load_config",
    "load_dotenv_config",
    "load_env_config",
    "load_global_config",
    "load_yaml_config",
    "merge_config",
]
