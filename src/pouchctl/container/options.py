"""The flag set of ``pouch create`` as an explicit, typed value."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List

__all__ = ["CreateOptions", "options_from_namespace"]


@dataclass(frozen=True)
class CreateOptions:
    """Raw user input for one ``create`` invocation.

    Defaults mirror the command-line defaults, so an empty ``CreateOptions()``
    describes ``pouch create IMAGE`` with no flags.
    """

    name: str = ""
    tty: bool = False
    volumes: List[str] = field(default_factory=list)
    runtime: str = ""
    env: List[str] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    entrypoint: str = ""
    workdir: str = ""
    user: str = ""
    hostname: str = ""

    # cpu
    cpu_share: int = 0
    cpuset_cpus: str = ""
    cpuset_mems: str = ""

    # memory
    memory: str = ""
    memory_swap: str = ""
    memory_swappiness: int = -1
    memory_wmark_ratio: int = 0
    memory_extra: int = 0
    memory_force_empty_ctl: int = 0
    sche_lat_switch: int = 0

    devices: List[str] = field(default_factory=list)
    enable_lxcfs: bool = False
    restart: str = ""

    # namespaces
    ipc_mode: str = ""
    pid_mode: str = ""
    uts_mode: str = ""

    sysctls: List[str] = field(default_factory=list)
    networks: List[str] = field(default_factory=list)
    security_opts: List[str] = field(default_factory=list)

    # capabilities
    privileged: bool = False
    cap_add: List[str] = field(default_factory=list)
    cap_drop: List[str] = field(default_factory=list)

    # blkio
    blkio_weight: int = 0
    blkio_weight_device: List[str] = field(default_factory=list)
    device_read_bps: List[str] = field(default_factory=list)
    device_write_bps: List[str] = field(default_factory=list)
    device_read_iops: List[str] = field(default_factory=list)
    device_write_iops: List[str] = field(default_factory=list)

    intel_rdt_l3_cbm: str = ""


def _str(value) -> str:
    return "" if value is None else str(value)


def _list(value) -> List[str]:
    return [str(item) for item in (value or [])]


def options_from_namespace(args: argparse.Namespace) -> CreateOptions:
    """Bind each parsed ``create`` flag to its ``CreateOptions`` field."""
    return CreateOptions(
        name=_str(args.name),
        tty=bool(args.tty),
        volumes=_list(args.volume),
        runtime=_str(args.runtime),
        env=_list(args.env),
        labels=_list(args.label),
        entrypoint=_str(args.entrypoint),
        workdir=_str(args.workdir),
        user=_str(args.user),
        hostname=_str(args.hostname),
        cpu_share=int(args.cpu_share),
        cpuset_cpus=_str(args.cpuset_cpus),
        cpuset_mems=_str(args.cpuset_mems),
        memory=_str(args.memory),
        memory_swap=_str(args.memory_swap),
        memory_swappiness=int(args.memory_swappiness),
        memory_wmark_ratio=int(args.memory_wmark_ratio),
        memory_extra=int(args.memory_extra),
        memory_force_empty_ctl=int(args.memory_force_empty_ctl),
        sche_lat_switch=int(args.sche_lat_switch),
        devices=_list(args.device),
        enable_lxcfs=bool(args.enable_lxcfs),
        restart=_str(args.restart),
        ipc_mode=_str(args.ipc),
        pid_mode=_str(args.pid),
        uts_mode=_str(args.uts),
        sysctls=_list(args.sysctl),
        networks=_list(args.net),
        security_opts=_list(args.security_opt),
        privileged=bool(args.privileged),
        cap_add=_list(args.cap_add),
        cap_drop=_list(args.cap_drop),
        blkio_weight=int(args.blkio_weight),
        blkio_weight_device=_list(args.blkio_weight_device),
        device_read_bps=_list(args.device_read_bps),
        device_write_bps=_list(args.device_write_bps),
        device_read_iops=_list(args.device_read_iops),
        device_write_iops=_list(args.device_write_iops),
        intel_rdt_l3_cbm=_str(args.intel_rdt_l3_cbm),
    )
