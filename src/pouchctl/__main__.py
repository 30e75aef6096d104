"""
Main entry point for pouchctl.

This module allows pouchctl to be run as:
    python -m pouchctl
"""

from .cli.main import main

if __name__ == "__main__":
    main()
