"""Network and port decisions for the Oracle dev-service container."""

from __future__ import annotations

from devservices_oracle.core.utils import logger
from devservices_oracle.types.container import ContainerSpec
from devservices_oracle.types.datasource import DatabaseKind

from .defaults import ORACLE_NANO_CPUS, ORACLE_PORT
from .network import configure_shared_network


class OracleContainerConfigurator:
    """Applies the network/port strategy to a container spec before start.

    Exactly one network mode is applied:

    - shared network: the container joins the shared network under a fresh
      alias and publishes nothing on the host;
    - port-mapped with a fixed port: host ``fixed_exposed_port`` is bound to
      the database port;
    - port-mapped: the database port is published on an ephemeral host port.

    Shared network takes precedence over a fixed port.

    Args:
        use_shared_network: Whether dev services run on a shared network.
        fixed_exposed_port: Host port to bind the database port to, if any.

    Example:
        >>> configurator = OracleContainerConfigurator(use_shared_network=False, fixed_exposed_port=15210)
        >>> configurator.configure(spec)
        >>> spec.port_bindings
        {1521: 15210}
    """

    def __init__(self, *, use_shared_network: bool, fixed_exposed_port: int | None = None) -> None:
        self.use_shared_network = use_shared_network
        self.fixed_exposed_port = fixed_exposed_port
        self.host_name: str | None = None

    def configure(self, spec: ContainerSpec) -> str | None:
        """Apply CPU quota and network/port settings to the spec.

        Args:
            spec: Spec of a container that has not been started yet.

        Returns:
            The network alias in shared-network mode, otherwise None.
        """
        spec.with_nano_cpus(ORACLE_NANO_CPUS)

        if self.use_shared_network:
            if self.fixed_exposed_port is not None:
                logger.warning(
                    f"Ignoring fixed port {self.fixed_exposed_port} for Oracle: "
                    "shared network is in use, the database is reachable by alias on the container port"
                )
            self.host_name = configure_shared_network(spec, DatabaseKind.ORACLE.value)
            logger.debug(f"Oracle container joins shared network as {self.host_name}")
            return self.host_name

        if self.fixed_exposed_port is not None:
            spec.with_bind_ports(ORACLE_PORT, self.fixed_exposed_port)
            logger.debug(f"Binding Oracle port {ORACLE_PORT} to host port {self.fixed_exposed_port}")
        else:
            spec.with_exposed_ports(ORACLE_PORT)
        return None


def apply_url_params(spec: ContainerSpec, params: dict[str, str]) -> None:
    """Record connection parameters on the spec, unfiltered."""
    for key, value in params.items():
        spec.with_url_param(key, value)


__all__ = ["OracleContainerConfigurator", "apply_url_params"]
