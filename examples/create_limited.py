"""Create a memory- and IO-limited busybox container from Python.

Run with a reachable daemon:
    python examples/create_limited.py [unix:///var/run/pouchd.sock]
"""

from __future__ import annotations

import sys

from pouchctl import CreateOptions, DaemonClient, build_container_spec
from pouchctl.config import DaemonConfig


def main() -> None:
    host = sys.argv[1] if len(sys.argv) > 1 else DaemonConfig().host
    options = CreateOptions(
        name="limited-busybox",
        memory="256m",
        memory_swappiness=0,
        blkio_weight=500,
        device_read_bps=["/dev/sda:10mb"],
        cap_drop=["NET_RAW"],
        restart="on-failure:3",
    )
    spec = build_container_spec(options, ["busybox:latest", "sleep", "3600"])
    with DaemonClient(DaemonConfig(host=host)) as client:
        result = client.create_container(spec, options.name)
    for warning in result.warnings:
        print(f"WARNING: {warning}")
    print(f"container ID: {result.id}, name: {result.name}")


if __name__ == "__main__":
    main()
