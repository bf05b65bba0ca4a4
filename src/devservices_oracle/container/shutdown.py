"""Shutdown handle handed to the framework with a started dev service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from devservices_oracle.core.utils import logger

if TYPE_CHECKING:
    from .backend.protocol import StartedContainer


class ContainerShutdownCloseable:
    """Stops a dev-service container when closed.

    Closing is idempotent: only the first call touches the container. A
    reusable container is left running so the next launch can pick it up.

    Args:
        container: The running container this handle owns.
        friendly_service_name: Name used in log messages (e.g., "Oracle").
        reusable: Whether the container should outlive this launch.
    """

    def __init__(self, container: StartedContainer, friendly_service_name: str, *, reusable: bool = False) -> None:
        self.container = container
        self.friendly_service_name = friendly_service_name
        self.reusable = reusable
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        if self.reusable:
            logger.info(
                f"Dev Services for {self.friendly_service_name} is no longer needed, "
                "but the container is reusable so it is kept running"
            )
            return

        self.container.stop()
        logger.info(f"Dev Services for {self.friendly_service_name} shut down.")

    def __enter__(self) -> ContainerShutdownCloseable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["ContainerShutdownCloseable"]
