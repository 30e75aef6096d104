"""CLI layer for the pouch command-line interface."""

__all__ = [
    "create",
    "main",
    "parser",
]
