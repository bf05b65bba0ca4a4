"""Container backend protocol definition.

Defines the interface for starting containers from a ``ContainerSpec`` so the
provider logic does not depend on a particular container engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from devservices_oracle.types.container import ContainerSpec


class StartedContainer(Protocol):
    """A running container as reported by the backend."""

    @property
    def container_id(self) -> str:
        """Id of the running container."""
        ...

    @property
    def host(self) -> str:
        """Host the published ports are reachable on."""
        ...

    @property
    def reused(self) -> bool:
        """True if an already running container was picked up instead of a new one."""
        ...

    @property
    def reusable(self) -> bool:
        """True if the container outlives this process so a later launch can pick it up."""
        ...

    def get_mapped_port(self, port: int) -> int:
        """Get the host port a container port is published on.

        Args:
            port: Container port.

        Returns:
            Host port.

        Raises:
            ContainerNotStartedError: If the port is not published.
        """
        ...

    def stop(self) -> None:
        """Stop and remove the container."""
        ...


class ContainerBackend(Protocol):
    """Protocol for container backend implementations."""

    def start(self, spec: ContainerSpec) -> StartedContainer:
        """Start a container and wait until it is ready.

        The spec is sealed once the container runs.

        Args:
            spec: Fully configured container spec.

        Returns:
            The running container.

        Raises:
            DevServicesStartupError: If the container fails to start or
                does not become ready within the spec's startup timeout.
        """
        ...


__all__ = ["ContainerBackend", "StartedContainer"]
