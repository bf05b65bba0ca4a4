"""Container backend abstraction for dev-service containers.

This package provides a Protocol for container backends and a Docker
implementation built on testcontainers.
"""

from .docker import DockerBackend, ReusedContainer, StartedDockerContainer, get_shared_network
from .protocol import ContainerBackend, StartedContainer


def get_default_backend(*, reuse_enabled: bool = False) -> ContainerBackend:
    """Get the default container backend (Docker)."""
    return DockerBackend(reuse_enabled=reuse_enabled)


__all__ = [
    "ContainerBackend",
    "DockerBackend",
    "ReusedContainer",
    "StartedContainer",
    "StartedDockerContainer",
    "get_default_backend",
    "get_shared_network",
]
