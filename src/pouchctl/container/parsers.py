"""Parsers for the structured flag values of ``pouch create``.

Each parser handles a single occurrence of a flag and raises
``ValidationError`` naming that flag. Per-device values come back as
``(device_path, value)`` pairs and ``fold_device_values`` collapses repeated
occurrences into one mapping.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Tuple

from docker.errors import DockerException
from docker.utils import parse_bytes

from ..exceptions import ValidationError
from .models import DeviceMapping, RestartPolicy

__all__ = [
    "fold_device_values",
    "parse_bps_device",
    "parse_byte_size",
    "parse_device_mapping",
    "parse_iops_device",
    "parse_key_value",
    "parse_restart_policy",
    "parse_weight_device",
]

DevicePair = Tuple[str, int]

_DEVICE_PREFIX = "/dev/"
_CGROUP_PERMISSIONS = frozenset("rwm")
_RESTART_POLICIES = ("no", "always", "unless-stopped", "on-failure")
MIN_BLKIO_WEIGHT = 10
MAX_BLKIO_WEIGHT = 1000


def parse_key_value(raw: str, flag: str) -> Tuple[str, str]:
    """Split ``key=value``; the value may itself contain ``=``."""
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise ValidationError(f"{raw!r} (expected key=value)", flag=flag)
    return key.strip(), value


def parse_byte_size(raw: str, flag: str, *, allow_unlimited: bool = False) -> int:
    """Parse ``512m``/``1g``/``1024`` style sizes; empty means 0."""
    text = (raw or "").strip()
    if not text:
        return 0
    if allow_unlimited and text == "-1":
        return -1
    try:
        size = int(parse_bytes(text))
    except (DockerException, ValueError) as exc:
        raise ValidationError(f"{raw!r} ({exc})", flag=flag) from exc
    if size < 0:
        raise ValidationError(f"{raw!r} (must not be negative)", flag=flag)
    return size


def _split_device(raw: str, flag: str) -> Tuple[str, str]:
    parts = raw.split(":")
    if len(parts) != 2 or not parts[1]:
        raise ValidationError(f"{raw!r} (expected <device-path>:<value>)", flag=flag)
    path, value = parts
    if not path.startswith(_DEVICE_PREFIX):
        raise ValidationError(
            f"{raw!r} (device path must start with {_DEVICE_PREFIX})", flag=flag
        )
    return path, value


def parse_weight_device(raw: str, flag: str = "--blkio-weight-device") -> DevicePair:
    path, value = _split_device(raw, flag)
    try:
        weight = int(value)
    except ValueError as exc:
        raise ValidationError(f"{raw!r} (weight must be an integer)", flag=flag) from exc
    if not MIN_BLKIO_WEIGHT <= weight <= MAX_BLKIO_WEIGHT:
        raise ValidationError(
            f"{raw!r} (weight must be between {MIN_BLKIO_WEIGHT} and {MAX_BLKIO_WEIGHT})",
            flag=flag,
        )
    return path, weight


def parse_bps_device(raw: str, flag: str = "--device-read-bps") -> DevicePair:
    path, value = _split_device(raw, flag)
    return path, parse_byte_size(value, flag)


def parse_iops_device(raw: str, flag: str = "--device-read-iops") -> DevicePair:
    path, value = _split_device(raw, flag)
    try:
        rate = int(value)
    except ValueError as exc:
        raise ValidationError(f"{raw!r} (rate must be an integer)", flag=flag) from exc
    if rate < 0:
        raise ValidationError(f"{raw!r} (rate must not be negative)", flag=flag)
    return path, rate


def fold_device_values(
    raws: Iterable[str],
    parser: Callable[[str, str], DevicePair],
    flag: str,
) -> Dict[str, int]:
    """Parse every occurrence of ``flag``; a repeated device path keeps its last value."""
    folded: Dict[str, int] = {}
    for raw in raws:
        path, value = parser(raw, flag)
        folded[path] = value
    return folded


def _is_permissions(text: str) -> bool:
    return bool(text) and set(text) <= _CGROUP_PERMISSIONS and len(set(text)) == len(text)


def parse_device_mapping(raw: str, flag: str = "--device") -> DeviceMapping:
    """Parse ``host[:container][:perms]``."""
    parts = raw.split(":")
    if not parts[0] or len(parts) > 3:
        raise ValidationError(
            f"{raw!r} (expected host[:container][:permissions])", flag=flag
        )
    host = parts[0]
    container = host
    permissions = "rwm"
    if len(parts) == 2:
        if _is_permissions(parts[1]):
            permissions = parts[1]
        elif parts[1]:
            container = parts[1]
    elif len(parts) == 3:
        container = parts[1] or host
        if not _is_permissions(parts[2]):
            raise ValidationError(
                f"{raw!r} (permissions must be a combination of r, w and m)",
                flag=flag,
            )
        permissions = parts[2]
    return DeviceMapping(
        path_on_host=host,
        path_in_container=container,
        cgroup_permissions=permissions,
    )


def parse_restart_policy(raw: str, flag: str = "--restart") -> RestartPolicy:
    text = (raw or "").strip()
    if not text:
        return RestartPolicy()
    name, sep, count = text.partition(":")
    if name not in _RESTART_POLICIES:
        raise ValidationError(
            f"{raw!r} (must be one of {', '.join(_RESTART_POLICIES)})", flag=flag
        )
    if not sep:
        return RestartPolicy(name=name)
    if name != "on-failure":
        raise ValidationError(
            f"{raw!r} (maximum retry count only applies to on-failure)", flag=flag
        )
    try:
        retries = int(count)
    except ValueError as exc:
        raise ValidationError(
            f"{raw!r} (maximum retry count must be an integer)", flag=flag
        ) from exc
    if retries < 0:
        raise ValidationError(
            f"{raw!r} (maximum retry count must not be negative)", flag=flag
        )
    return RestartPolicy(name=name, maximum_retry_count=retries)
