"""Daemon client layer."""

from .daemon import DaemonClient

__all__ = ["DaemonClient"]
