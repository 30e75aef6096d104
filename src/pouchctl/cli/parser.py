"""CLI parser builder for pouchctl.

``create_parser()`` builds a fresh parser on every call; flag groups for
``create`` are added by small section helpers so each stays readable.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..version import __version__

__all__ = ["create_parser"]

CREATE_DESCRIPTION = (
    "Create a static container object in Pouchd. "
    "When creating, all configuration user input will be stored in memory "
    "store of Pouchd. This is useful when you wish to create a container "
    "configuration ahead of time so that Pouchd will preserve the resource in "
    "advance. The container you created is ready to start when you need it."
)


def _create_epilog() -> str:
    return (
        "Example:\n"
        "  $ pouch create --name foo busybox:latest\n"
        "  container ID: e1d541722d68dc5d133cca9e7bd8fd9338603e1763096c8e853522b60d11f7b9, name: foo\n"
    )


def add_global_args(parser: argparse.ArgumentParser) -> None:
    g = parser.add_argument_group("Daemon & Logging")
    g.add_argument(
        "-H",
        "--host",
        help="Address of the pouch daemon (default: unix:///var/run/pouchd.sock)",
    )
    g.add_argument("--api-version", help="Daemon API version (default: 1.24)")
    g.add_argument(
        "--timeout", type=int, help="Per-request daemon timeout in seconds (default: 60)"
    )
    g.add_argument("--config", type=Path, help="Config file (default pouch.yaml)")
    g.add_argument("--debug", action="store_true", help="Enable debug logging")
    g.add_argument("--log-file", type=Path, help="Append JSONL logs to this file")


def add_container_args(parser: argparse.ArgumentParser) -> None:
    g = parser.add_argument_group("Container")
    g.add_argument("--name", default="", help="Specify name of container")
    g.add_argument("-t", "--tty", action="store_true", help="Allocate a tty device")
    g.add_argument(
        "-v",
        "--volume",
        action="append",
        default=[],
        help="Bind mount volumes to container (repeatable)",
    )
    g.add_argument("--runtime", default="", help="Specify oci runtime")
    g.add_argument(
        "-e",
        "--env",
        action="append",
        default=[],
        help="Set environment variables for container (repeatable)",
    )
    g.add_argument(
        "-l",
        "--label",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Set label for a container (repeatable)",
    )
    g.add_argument("--entrypoint", default="", help="Overwrite the default entrypoint")
    g.add_argument(
        "-w", "--workdir", default="", help="Set the working directory in a container"
    )
    g.add_argument("-u", "--user", default="", help="UID")
    g.add_argument("--hostname", default="", help="Set container's hostname")
    g.add_argument(
        "--restart", default="", help="Restart policy to apply when container exits"
    )


def add_cpu_args(parser: argparse.ArgumentParser) -> None:
    g = parser.add_argument_group("CPU")
    g.add_argument("--cpu-share", type=int, default=0, help="CPU shares")
    g.add_argument("--cpuset-cpus", default="", help="CPUs in cpuset")
    g.add_argument("--cpuset-mems", default="", help="MEMs in cpuset")
    g.add_argument(
        "--sche-lat-switch",
        type=int,
        default=0,
        help="Whether to enable scheduler latency count in cpuacct",
    )
    g.add_argument(
        "--intel-rdt-l3-cbm",
        default="",
        help="Limit container resource for Intel RDT/CAT which introduced in Linux 4.10 kernel",
    )


def add_memory_args(parser: argparse.ArgumentParser) -> None:
    g = parser.add_argument_group("Memory")
    g.add_argument("-m", "--memory", default="", help="Container memory limit")
    g.add_argument("--memory-swap", default="", help="Container swap limit")
    g.add_argument(
        "--memory-swappiness",
        type=int,
        default=-1,
        help="Container memory swappiness [0, 100]",
    )
    g.add_argument(
        "--memory-wmark-ratio",
        type=int,
        default=0,
        help=(
            "Represent this container's memory low water mark percentage, range "
            "in [0, 100]. The value of memory low water mark is "
            "memory.limit_in_bytes * MemoryWmarkRatio"
        ),
    )
    g.add_argument(
        "--memory-extra",
        type=int,
        default=0,
        help="Represent container's memory high water mark percentage, range in [0, 100]",
    )
    g.add_argument(
        "--memory-force-empty-ctl",
        type=int,
        default=0,
        help="Whether to reclaim page cache when deleting the cgroup of container",
    )


def add_isolation_args(parser: argparse.ArgumentParser) -> None:
    g = parser.add_argument_group("Isolation & Devices")
    g.add_argument(
        "--device",
        action="append",
        default=[],
        help="Add a host device to the container (repeatable)",
    )
    g.add_argument(
        "--enableLxcfs", dest="enable_lxcfs", action="store_true", help="Enable lxcfs"
    )
    g.add_argument("--ipc", default="", help="IPC namespace to use")
    g.add_argument("--pid", default="", help="PID namespace to use")
    g.add_argument("--uts", default="", help="UTS namespace to use")
    g.add_argument(
        "--sysctl",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Sysctl options (repeatable)",
    )
    g.add_argument(
        "--security-opt",
        action="append",
        default=[],
        help="Security Options (repeatable)",
    )
    g.add_argument(
        "--net",
        action="append",
        default=[],
        help="Set networks to container (repeatable)",
    )


def add_capability_args(parser: argparse.ArgumentParser) -> None:
    g = parser.add_argument_group("Capabilities")
    g.add_argument(
        "--privileged",
        action="store_true",
        help="Give extended privileges to the container",
    )
    g.add_argument(
        "--cap-add", action="append", default=[], help="Add Linux capabilities"
    )
    g.add_argument(
        "--cap-drop", action="append", default=[], help="Drop Linux capabilities"
    )


def add_blkio_args(parser: argparse.ArgumentParser) -> None:
    g = parser.add_argument_group("Block IO")
    g.add_argument(
        "--blkio-weight",
        type=int,
        default=0,
        help="Block IO (relative weight), between 10 and 1000, or 0 to disable",
    )
    g.add_argument(
        "--blkio-weight-device",
        action="append",
        default=[],
        metavar="PATH:WEIGHT",
        help="Block IO weight (relative device weight)",
    )
    g.add_argument(
        "--device-read-bps",
        action="append",
        default=[],
        metavar="PATH:RATE",
        help="Limit read rate (bytes per second) from a device",
    )
    g.add_argument(
        "--device-read-iops",
        action="append",
        default=[],
        metavar="PATH:RATE",
        help="Limit read rate (IO per second) from a device",
    )
    g.add_argument(
        "--device-write-bps",
        action="append",
        default=[],
        metavar="PATH:RATE",
        help="Limit write rate (bytes per second) from a device",
    )
    g.add_argument(
        "--device-write-iops",
        action="append",
        default=[],
        metavar="PATH:RATE",
        help="Limit write rate (IO per second) from a device",
    )


def add_create_positionals(parser: argparse.ArgumentParser) -> None:
    # Everything after IMAGE belongs to the container command, flags included.
    parser.add_argument("image", nargs="?", metavar="IMAGE")
    parser.add_argument("args", nargs=argparse.REMAINDER, metavar="ARG")


def add_create_command(subparsers) -> argparse.ArgumentParser:
    create = subparsers.add_parser(
        "create",
        usage="pouch create [OPTIONS] IMAGE [ARG...]",
        help="Create a new container with specified image",
        description=CREATE_DESCRIPTION,
        epilog=_create_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_container_args(create)
    add_cpu_args(create)
    add_memory_args(create)
    add_isolation_args(create)
    add_capability_args(create)
    add_blkio_args(create)
    add_create_positionals(create)
    return create


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pouch",
        description="Client for the pouch container daemon.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    add_global_args(parser)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    add_create_command(subparsers)
    return parser
