from __future__ import annotations

import pytest

from pouchctl.container import CreateOptions, build_container_spec
from pouchctl.container.models import DeviceMapping, RestartPolicy
from pouchctl.exceptions import ValidationError


def test_defaults_populate_every_field() -> None:
    spec = build_container_spec(CreateOptions(), ["busybox"])

    container = spec.container
    assert container.image == "busybox"
    assert container.cmd == ()
    assert container.entrypoint == ()
    assert container.working_dir == ""
    assert container.user == ""
    assert container.hostname == ""
    assert container.tty is False
    assert container.env == ()
    assert container.labels == ()

    host = spec.host
    assert host.binds == ()
    assert host.runtime == ""
    assert host.enable_lxcfs is False
    assert (host.ipc_mode, host.pid_mode, host.uts_mode) == ("", "", "")
    assert host.sysctls == ()
    assert host.security_opt == ()
    assert host.privileged is False
    assert host.cap_add == () and host.cap_drop == ()
    assert host.restart_policy == RestartPolicy(name="no", maximum_retry_count=0)
    assert host.network_mode == ""

    res = host.resources
    assert res.cpu_shares == 0
    assert res.cpuset_cpus == "" and res.cpuset_mems == ""
    assert res.memory == 0 and res.memory_swap == 0
    assert res.memory_swappiness == -1
    assert res.memory_wmark_ratio == 0
    assert res.memory_extra == 0
    assert res.memory_force_empty_ctl == 0
    assert res.sche_lat_switch == 0
    assert res.intel_rdt_l3_cbm == ""
    assert res.devices == ()
    assert res.blkio_weight == 0
    assert res.blkio_weight_device == {}
    assert res.device_read_bps == {} and res.device_write_bps == {}
    assert res.device_read_iops == {} and res.device_write_iops == {}

    assert spec.networking.networks == ()


def test_supplied_values_reach_their_fields() -> None:
    options = CreateOptions(
        tty=True,
        volumes=["/data:/data"],
        runtime="runc",
        env=["A=1"],
        labels=["team=infra"],
        entrypoint="/bin/sh -c",
        workdir="/srv",
        user="1000",
        hostname="box",
        cpu_share=512,
        cpuset_cpus="0-1",
        cpuset_mems="0",
        memory="512m",
        memory_swap="1g",
        memory_swappiness=60,
        memory_wmark_ratio=80,
        memory_extra=20,
        memory_force_empty_ctl=1,
        sche_lat_switch=1,
        devices=["/dev/fuse"],
        enable_lxcfs=True,
        restart="on-failure:3",
        ipc_mode="host",
        pid_mode="container:abc",
        uts_mode="host",
        sysctls=["net.ipv4.ip_forward=1"],
        networks=["bridge", "overlay"],
        security_opts=["seccomp=unconfined"],
        privileged=True,
        cap_add=["NET_ADMIN"],
        cap_drop=["MKNOD"],
        blkio_weight=300,
        intel_rdt_l3_cbm="L3:0=ffff",
    )
    spec = build_container_spec(options, ["busybox:latest", "sleep", "60"])

    assert spec.container.cmd == ("sleep", "60")
    assert spec.container.entrypoint == ("/bin/sh", "-c")
    assert spec.container.labels == (("team", "infra"),)
    assert spec.host.sysctls == (("net.ipv4.ip_forward", "1"),)
    assert spec.host.restart_policy == RestartPolicy("on-failure", 3)
    assert spec.host.pid_mode == "container:abc"
    assert spec.host.network_mode == "bridge"
    assert spec.networking.networks == ("bridge", "overlay")
    res = spec.host.resources
    assert res.memory == 512 * 1024 * 1024
    assert res.memory_swap == 1024**3
    assert res.memory_swappiness == 60
    assert res.memory_wmark_ratio == 80
    assert res.memory_extra == 20
    assert res.devices == (DeviceMapping("/dev/fuse", "/dev/fuse", "rwm"),)
    assert res.blkio_weight == 300
    assert res.intel_rdt_l3_cbm == "L3:0=ffff"


def test_list_flags_keep_order_and_duplicates() -> None:
    options = CreateOptions(
        env=["B=2", "A=1", "B=2"],
        cap_add=["SYS_ADMIN", "NET_ADMIN", "SYS_ADMIN"],
        labels=["x=1", "x=2"],
    )
    spec = build_container_spec(options, ["busybox"])

    assert spec.container.env == ("B=2", "A=1", "B=2")
    assert spec.host.cap_add == ("SYS_ADMIN", "NET_ADMIN", "SYS_ADMIN")
    assert spec.container.labels == (("x", "1"), ("x", "2"))
    # the wire body is a map, so the later label wins there
    assert spec.to_api()["Labels"] == {"x": "2"}


def test_repeated_device_rates_keep_last_value() -> None:
    options = CreateOptions(
        device_read_bps=["/dev/sda:1mb", "/dev/sdb:2mb", "/dev/sda:4mb"],
        device_write_iops=["/dev/sda:100", "/dev/sda:250"],
        blkio_weight_device=["/dev/sda:100", "/dev/sda:700"],
    )
    res = build_container_spec(options, ["busybox"]).host.resources

    assert res.device_read_bps == {"/dev/sda": 4 * 1024**2, "/dev/sdb": 2 * 1024**2}
    assert res.device_write_iops == {"/dev/sda": 250}
    assert res.blkio_weight_device == {"/dev/sda": 700}


def test_zero_positionals_is_rejected() -> None:
    with pytest.raises(ValidationError, match="requires at least 1 argument"):
        build_container_spec(CreateOptions(), [])


@pytest.mark.parametrize(
    "options, flag",
    [
        (CreateOptions(device_read_bps=["sda"]), "--device-read-bps"),
        (CreateOptions(device_write_bps=["/dev/sda:fast"]), "--device-write-bps"),
        (CreateOptions(device_read_iops=["/dev/sda:-1"]), "--device-read-iops"),
        (CreateOptions(blkio_weight_device=["/dev/sda:5"]), "--blkio-weight-device"),
        (CreateOptions(memory="lots"), "--memory"),
        (CreateOptions(memory_swappiness=101), "--memory-swappiness"),
        (CreateOptions(blkio_weight=5), "--blkio-weight"),
        (CreateOptions(labels=["novalue"]), "--label"),
        (CreateOptions(sysctls=["=1"]), "--sysctl"),
        (CreateOptions(restart="sometimes"), "--restart"),
        (CreateOptions(devices=["/dev/fuse:/dev/fuse:rwx"]), "--device"),
    ],
)
def test_malformed_values_name_the_flag(options: CreateOptions, flag: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        build_container_spec(options, ["busybox"])

    assert excinfo.value.flag == flag
    assert f"invalid value for {flag}" in str(excinfo.value)


def test_memory_swap_accepts_unlimited() -> None:
    spec = build_container_spec(CreateOptions(memory_swap="-1"), ["busybox"])
    assert spec.host.resources.memory_swap == -1


def test_api_body_flattens_resources_into_host_config() -> None:
    options = CreateOptions(
        memory="1g",
        device_read_bps=["/dev/sda:1mb"],
        networks=["bridge"],
        sysctls=["kernel.msgmax=65536"],
    )
    body = build_container_spec(options, ["busybox"]).to_api()

    assert body["Image"] == "busybox"
    assert body["Cmd"] is None
    assert body["HostConfig"]["Memory"] == 1024**3
    assert body["HostConfig"]["MemorySwappiness"] == -1
    assert body["HostConfig"]["BlkioDeviceReadBps"] == [
        {"Path": "/dev/sda", "Rate": 1024**2}
    ]
    assert body["HostConfig"]["Sysctls"] == {"kernel.msgmax": "65536"}
    assert body["HostConfig"]["RestartPolicy"] == {"Name": "no", "MaximumRetryCount": 0}
    assert body["HostConfig"]["NetworkMode"] == "bridge"
    assert body["NetworkingConfig"] == {"EndpointsConfig": {"bridge": {}}}
