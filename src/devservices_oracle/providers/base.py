"""Provider contract between the host framework and dev-service implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from devservices_oracle.types.datasource import DatasourceStartRequest, RunningDatasourceDescriptor


@runtime_checkable
class DevServicesDatasourceProvider(Protocol):
    """Starts a database for the framework's datasource wiring.

    Implementations block until the database is ready (or the request's
    startup timeout elapses) and hand ownership of the container to the
    returned descriptor's shutdown handle.
    """

    def start_database(self, request: DatasourceStartRequest) -> RunningDatasourceDescriptor:
        """Start a database container.

        Args:
            request: What the framework wants started. Missing values fall
                back to provider defaults.

        Returns:
            Descriptor with container id, connection URL, credentials and
            a shutdown handle.

        Raises:
            DevServicesStartupError: If the container could not be started.
        """
        ...


__all__ = ["DevServicesDatasourceProvider"]
