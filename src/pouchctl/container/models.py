"""Container specification data structures sent to the daemon.

A ``ContainerSpec`` is assembled once by the builder and never mutated. The
``to_api`` methods render the Docker-compatible JSON body accepted by the
daemon's ``/containers/create`` endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

__all__ = [
    "ContainerConfig",
    "ContainerSpec",
    "CreateResult",
    "DeviceMapping",
    "HostConfig",
    "NetworkingConfig",
    "Resources",
    "RestartPolicy",
]

KeyValuePairs = Tuple[Tuple[str, str], ...]


def _fold_pairs(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    folded: Dict[str, str] = {}
    for key, value in pairs:
        folded[key] = value
    return folded


def _list_or_none(values: Tuple[str, ...]) -> Optional[List[str]]:
    return list(values) if values else None


@dataclass(frozen=True)
class DeviceMapping:
    """A host device exposed inside the container."""

    path_on_host: str
    path_in_container: str
    cgroup_permissions: str = "rwm"

    def to_api(self) -> Dict[str, str]:
        return {
            "PathOnHost": self.path_on_host,
            "PathInContainer": self.path_in_container,
            "CgroupPermissions": self.cgroup_permissions,
        }


@dataclass(frozen=True)
class RestartPolicy:
    name: str = "no"
    maximum_retry_count: int = 0

    def to_api(self) -> Dict[str, Any]:
        return {"Name": self.name, "MaximumRetryCount": self.maximum_retry_count}


@dataclass(frozen=True)
class Resources:
    """Cgroup limits, including the vendor memory/scheduler extensions.

    ``memory_swappiness`` of -1 and ``blkio_weight`` of 0 are the "leave it
    to the daemon" sentinels. Per-device maps are keyed by device path.
    """

    cpu_shares: int = 0
    cpuset_cpus: str = ""
    cpuset_mems: str = ""
    memory: int = 0
    memory_swap: int = 0
    memory_swappiness: int = -1
    memory_wmark_ratio: int = 0
    memory_extra: int = 0
    memory_force_empty_ctl: int = 0
    sche_lat_switch: int = 0
    intel_rdt_l3_cbm: str = ""
    devices: Tuple[DeviceMapping, ...] = ()
    blkio_weight: int = 0
    blkio_weight_device: Dict[str, int] = field(default_factory=dict)
    device_read_bps: Dict[str, int] = field(default_factory=dict)
    device_write_bps: Dict[str, int] = field(default_factory=dict)
    device_read_iops: Dict[str, int] = field(default_factory=dict)
    device_write_iops: Dict[str, int] = field(default_factory=dict)

    def to_api(self) -> Dict[str, Any]:
        return {
            "CpuShares": self.cpu_shares,
            "CpusetCpus": self.cpuset_cpus,
            "CpusetMems": self.cpuset_mems,
            "Memory": self.memory,
            "MemorySwap": self.memory_swap,
            "MemorySwappiness": self.memory_swappiness,
            "MemoryWmarkRatio": self.memory_wmark_ratio,
            "MemoryExtra": self.memory_extra,
            "MemoryForceEmptyCtl": self.memory_force_empty_ctl,
            "ScheLatSwitch": self.sche_lat_switch,
            "IntelRdtL3Cbm": self.intel_rdt_l3_cbm,
            "Devices": [device.to_api() for device in self.devices],
            "BlkioWeight": self.blkio_weight,
            "BlkioWeightDevice": [
                {"Path": path, "Weight": weight}
                for path, weight in self.blkio_weight_device.items()
            ],
            "BlkioDeviceReadBps": _throttle_list(self.device_read_bps),
            "BlkioDeviceWriteBps": _throttle_list(self.device_write_bps),
            "BlkioDeviceReadIOps": _throttle_list(self.device_read_iops),
            "BlkioDeviceWriteIOps": _throttle_list(self.device_write_iops),
        }


def _throttle_list(rates: Dict[str, int]) -> List[Dict[str, Any]]:
    return [{"Path": path, "Rate": rate} for path, rate in rates.items()]


@dataclass(frozen=True)
class ContainerConfig:
    """Identity and runtime fields of the container."""

    image: str
    cmd: Tuple[str, ...] = ()
    entrypoint: Tuple[str, ...] = ()
    working_dir: str = ""
    user: str = ""
    hostname: str = ""
    tty: bool = False
    env: Tuple[str, ...] = ()
    labels: KeyValuePairs = ()

    def to_api(self) -> Dict[str, Any]:
        return {
            "Image": self.image,
            "Cmd": _list_or_none(self.cmd),
            "Entrypoint": _list_or_none(self.entrypoint),
            "WorkingDir": self.working_dir,
            "User": self.user,
            "Hostname": self.hostname,
            "Tty": self.tty,
            "Env": list(self.env),
            "Labels": _fold_pairs(self.labels),
        }


@dataclass(frozen=True)
class HostConfig:
    """Isolation, devices and resource limits applied on the host."""

    resources: Resources = field(default_factory=Resources)
    binds: Tuple[str, ...] = ()
    runtime: str = ""
    enable_lxcfs: bool = False
    ipc_mode: str = ""
    pid_mode: str = ""
    uts_mode: str = ""
    sysctls: KeyValuePairs = ()
    security_opt: Tuple[str, ...] = ()
    privileged: bool = False
    cap_add: Tuple[str, ...] = ()
    cap_drop: Tuple[str, ...] = ()
    restart_policy: RestartPolicy = field(default_factory=RestartPolicy)
    network_mode: str = ""

    def to_api(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "Binds": list(self.binds),
            "Runtime": self.runtime,
            "EnableLxcfs": self.enable_lxcfs,
            "IpcMode": self.ipc_mode,
            "PidMode": self.pid_mode,
            "UTSMode": self.uts_mode,
            "Sysctls": _fold_pairs(self.sysctls),
            "SecurityOpt": list(self.security_opt),
            "Privileged": self.privileged,
            "CapAdd": list(self.cap_add),
            "CapDrop": list(self.cap_drop),
            "RestartPolicy": self.restart_policy.to_api(),
            "NetworkMode": self.network_mode,
        }
        # Resources are flattened into HostConfig on the wire.
        body.update(self.resources.to_api())
        return body


@dataclass(frozen=True)
class NetworkingConfig:
    networks: Tuple[str, ...] = ()

    def to_api(self) -> Dict[str, Any]:
        return {"EndpointsConfig": {network: {} for network in self.networks}}


@dataclass(frozen=True)
class ContainerSpec:
    """The complete, three-part creation request."""

    container: ContainerConfig
    host: HostConfig
    networking: NetworkingConfig

    def to_api(self) -> Dict[str, Any]:
        body = self.container.to_api()
        body["HostConfig"] = self.host.to_api()
        body["NetworkingConfig"] = self.networking.to_api()
        return body


@dataclass(frozen=True)
class CreateResult:
    """Identity assigned by the daemon plus any non-fatal warnings."""

    id: str
    name: str
    warnings: Tuple[str, ...] = ()
