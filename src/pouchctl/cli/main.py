#!/usr/bin/env python3
"""pouchctl CLI entrypoint.

Parses arguments, loads configuration and logging, then dispatches to the
requested subcommand.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Final, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from ..config import load_config
from ..exceptions import ConfigError
from ..utils.logging import setup_logging
from .create import run_create
from .parser import create_parser

__all__: Final = ["main"]


async def _dispatch(
    console: Console, err_console: Console, args: argparse.Namespace
) -> int:
    try:
        daemon_config, logging_config = load_config(args)
    except ConfigError as exc:
        err_console.print(f"[red]invalid configuration:[/red] {escape(str(exc))}")
        return 1
    setup_logging(logging_config.level, logging_config.file)

    if args.command == "create":
        return await run_create(console, err_console, args, daemon_config)
    err_console.print(f"[red]unknown command:[/red] {escape(str(args.command))}")
    return 1


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)
    console = Console()
    err_console = Console(stderr=True)

    rc = asyncio.run(_dispatch(console, err_console, args))
    sys.exit(int(rc))


if __name__ == "__main__":
    main()
