"""Container specification models, flag parsers and the builder."""

from .builder import build_container_spec
from .models import (
    ContainerConfig,
    ContainerSpec,
    CreateResult,
    DeviceMapping,
    HostConfig,
    NetworkingConfig,
    Resources,
    RestartPolicy,
)
from .options import CreateOptions, options_from_namespace

__all__ = [
    "ContainerConfig",
    "ContainerSpec",
    "CreateOptions",
    "CreateResult",
    "DeviceMapping",
    "HostConfig",
    "NetworkingConfig",
    "Resources",
    "RestartPolicy",
    "build_container_spec",
    "options_from_namespace",
]
