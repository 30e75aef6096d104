"""pouchctl public API surface.

Only the stable entry points are exported here; everything else should be
considered internal and may change.
"""

from .client.daemon import DaemonClient
from .container.builder import build_container_spec
from .container.models import ContainerSpec, CreateResult
from .container.options import CreateOptions
from .version import __version__

__all__ = [
    "ContainerSpec",
    "CreateOptions",
    "CreateResult",
    "DaemonClient",
    "build_container_spec",
    "__version__",
]
