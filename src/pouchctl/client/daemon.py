"""
Client for the container daemon's create endpoint.

Wraps the low-level Docker SDK ``APIClient``: the daemon speaks the
Docker-compatible ``POST /containers/create`` API, so the SDK provides the
transport, URL versioning and error decoding.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import docker
from docker.errors import APIError, DockerException
from requests.exceptions import RequestException

from ..config import DaemonConfig
from ..container.models import ContainerSpec, CreateResult
from ..exceptions import DaemonError

logger = logging.getLogger(__name__)


def _explain(exc: Exception) -> str:
    """Return the daemon's own message when it sent one."""
    if isinstance(exc, APIError) and exc.explanation:
        explanation = exc.explanation
        if isinstance(explanation, bytes):
            explanation = explanation.decode("utf-8", errors="replace")
        return str(explanation).strip()
    return str(exc)


class DaemonClient:
    """Submits container specifications to the daemon."""

    def __init__(self, config: Optional[DaemonConfig] = None, api: Any = None):
        """Connect lazily to the daemon described by ``config``.

        Args:
            config: Daemon address, API version and per-request timeout.
            api: Pre-built low-level client, mainly for tests.
        """
        self.config = config or DaemonConfig()
        if api is not None:
            self.api = api
            return
        try:
            self.api = docker.APIClient(
                base_url=self.config.host,
                version=self.config.api_version,
                timeout=self.config.timeout,
            )
        except DockerException as exc:
            raise DaemonError(
                f"cannot configure daemon client for {self.config.host}: {exc}"
            ) from exc

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.api.close()

    def __enter__(self) -> "DaemonClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_container(self, spec: ContainerSpec, name: str = "") -> CreateResult:
        """Create one container; an empty ``name`` lets the daemon pick one.

        Exactly one request is made. Any daemon or transport failure is
        raised as ``DaemonError`` and no result is returned.
        """
        body = spec.to_api()
        logger.debug(
            "POST /containers/create image=%s name=%s host=%s",
            spec.container.image,
            name or "<generated>",
            self.config.host,
        )
        started = time.monotonic()
        try:
            response = self.api.create_container_from_config(body, name=name or None)
        except (DockerException, RequestException) as exc:
            logger.debug("create failed after %.2fs: %s", time.monotonic() - started, exc)
            raise DaemonError(_explain(exc)) from exc

        result = self._to_result(response, name)
        logger.info(
            "Created container %s (ID: %s) in %.2fs",
            result.name,
            result.id[:12],
            time.monotonic() - started,
        )
        return result

    @staticmethod
    def _to_result(response: Dict[str, Any], requested_name: str) -> CreateResult:
        if not isinstance(response, dict) or not response.get("Id"):
            raise DaemonError(f"unexpected create response from daemon: {response!r}")
        name = str(response.get("Name") or requested_name).lstrip("/")
        warnings = tuple(str(w) for w in (response.get("Warnings") or ()))
        return CreateResult(id=str(response["Id"]), name=name, warnings=warnings)


__all__ = ["DaemonClient"]
