"""Build the container specification from ``create`` options.

Pure data transformation: nothing here touches the network or the
filesystem, so a ``ValidationError`` always surfaces before the daemon is
contacted.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

from ..exceptions import ValidationError
from .models import (
    ContainerConfig,
    ContainerSpec,
    HostConfig,
    NetworkingConfig,
    Resources,
)
from .options import CreateOptions
from .parsers import (
    MAX_BLKIO_WEIGHT,
    MIN_BLKIO_WEIGHT,
    fold_device_values,
    parse_bps_device,
    parse_byte_size,
    parse_device_mapping,
    parse_iops_device,
    parse_key_value,
    parse_restart_policy,
    parse_weight_device,
)

__all__ = ["build_container_spec"]

logger = logging.getLogger(__name__)


def build_container_spec(options: CreateOptions, args: Sequence[str]) -> ContainerSpec:
    """Return the three-part spec for ``pouch create [options] IMAGE [ARG...]``."""
    if not args:
        raise ValidationError('"create" requires at least 1 argument (IMAGE)')
    image, cmd = args[0], tuple(args[1:])
    if not image.strip():
        raise ValidationError("image reference must not be empty")

    spec = ContainerSpec(
        container=_container_config(options, image, cmd),
        host=_host_config(options),
        networking=NetworkingConfig(networks=tuple(options.networks)),
    )
    logger.debug(
        "built container spec image=%s cmd=%s networks=%s devices=%d",
        image,
        list(cmd),
        list(spec.networking.networks),
        len(spec.host.resources.devices),
    )
    return spec


def _container_config(
    options: CreateOptions, image: str, cmd: Tuple[str, ...]
) -> ContainerConfig:
    return ContainerConfig(
        image=image,
        cmd=cmd,
        entrypoint=tuple(options.entrypoint.split()),
        working_dir=options.workdir,
        user=options.user,
        hostname=options.hostname,
        tty=options.tty,
        env=tuple(options.env),
        labels=tuple(parse_key_value(raw, "--label") for raw in options.labels),
    )


def _host_config(options: CreateOptions) -> HostConfig:
    return HostConfig(
        resources=_resources(options),
        binds=tuple(options.volumes),
        runtime=options.runtime,
        enable_lxcfs=options.enable_lxcfs,
        ipc_mode=options.ipc_mode,
        pid_mode=options.pid_mode,
        uts_mode=options.uts_mode,
        sysctls=tuple(parse_key_value(raw, "--sysctl") for raw in options.sysctls),
        security_opt=tuple(options.security_opts),
        privileged=options.privileged,
        cap_add=tuple(options.cap_add),
        cap_drop=tuple(options.cap_drop),
        restart_policy=parse_restart_policy(options.restart),
        network_mode=options.networks[0] if options.networks else "",
    )


def _resources(options: CreateOptions) -> Resources:
    _check_swappiness(options.memory_swappiness)
    _check_blkio_weight(options.blkio_weight)
    return Resources(
        cpu_shares=options.cpu_share,
        cpuset_cpus=options.cpuset_cpus,
        cpuset_mems=options.cpuset_mems,
        memory=parse_byte_size(options.memory, "--memory"),
        memory_swap=parse_byte_size(
            options.memory_swap, "--memory-swap", allow_unlimited=True
        ),
        memory_swappiness=options.memory_swappiness,
        memory_wmark_ratio=options.memory_wmark_ratio,
        memory_extra=options.memory_extra,
        memory_force_empty_ctl=options.memory_force_empty_ctl,
        sche_lat_switch=options.sche_lat_switch,
        intel_rdt_l3_cbm=options.intel_rdt_l3_cbm,
        devices=tuple(parse_device_mapping(raw) for raw in options.devices),
        blkio_weight=options.blkio_weight,
        blkio_weight_device=fold_device_values(
            options.blkio_weight_device, parse_weight_device, "--blkio-weight-device"
        ),
        device_read_bps=fold_device_values(
            options.device_read_bps, parse_bps_device, "--device-read-bps"
        ),
        device_write_bps=fold_device_values(
            options.device_write_bps, parse_bps_device, "--device-write-bps"
        ),
        device_read_iops=fold_device_values(
            options.device_read_iops, parse_iops_device, "--device-read-iops"
        ),
        device_write_iops=fold_device_values(
            options.device_write_iops, parse_iops_device, "--device-write-iops"
        ),
    )


def _check_swappiness(value: int) -> None:
    if value != -1 and not 0 <= value <= 100:
        raise ValidationError(
            f"{value} (must be -1 or between 0 and 100)", flag="--memory-swappiness"
        )


def _check_blkio_weight(value: int) -> None:
    if value != 0 and not MIN_BLKIO_WEIGHT <= value <= MAX_BLKIO_WEIGHT:
        raise ValidationError(
            f"{value} (must be 0 or between {MIN_BLKIO_WEIGHT} and {MAX_BLKIO_WEIGHT})",
            flag="--blkio-weight",
        )
