"""The ``pouch create`` command: build the container spec, submit it, report the result."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List

from rich.console import Console
from rich.markup import escape

from ..client import DaemonClient
from ..config import DaemonConfig
from ..container import CreateResult, build_container_spec, options_from_namespace
from ..exceptions import DaemonError, ValidationError

__all__ = ["run_create", "print_result", "EXIT_DAEMON_ERROR", "EXIT_INVALID_INPUT"]

logger = logging.getLogger(__name__)

EXIT_DAEMON_ERROR = 1
EXIT_INVALID_INPUT = 2
_FAILURE_PREFIX = "failed to create container"
# Daemon-supplied text is printed verbatim.
_PLAIN = {"markup": False, "highlight": False, "emoji": False, "soft_wrap": True}


def _positionals(args: argparse.Namespace) -> List[str]:
    image = getattr(args, "image", None)
    if image is None:
        return []
    return [image, *(getattr(args, "args", None) or [])]


def _report_failure(err_console: Console, message: str) -> None:
    err_console.print(
        f"[red]{_FAILURE_PREFIX}:[/red] {escape(message)}", emoji=False, soft_wrap=True
    )


def print_result(console: Console, result: CreateResult) -> None:
    """Write warnings, then the single identity line, to stdout."""
    for warning in result.warnings:
        console.print(f"WARNING: {warning}", **_PLAIN)
    console.print(f"container ID: {result.id}, name: {result.name}", **_PLAIN)


async def run_create(
    console: Console,
    err_console: Console,
    args: argparse.Namespace,
    daemon_config: DaemonConfig,
) -> int:
    """Create one container and return the process exit code."""
    options = options_from_namespace(args)
    try:
        spec = build_container_spec(options, _positionals(args))
    except ValidationError as exc:
        logger.debug("create aborted before submission: %s", exc)
        _report_failure(err_console, str(exc))
        return EXIT_INVALID_INPUT

    loop = asyncio.get_running_loop()
    try:
        client = DaemonClient(daemon_config)
        try:
            result = await loop.run_in_executor(
                None, lambda: client.create_container(spec, options.name)
            )
        finally:
            client.close()
    except DaemonError as exc:
        logger.info("container create failed: %s", exc)
        _report_failure(err_console, str(exc))
        return EXIT_DAEMON_ERROR

    print_result(console, result)
    return 0
