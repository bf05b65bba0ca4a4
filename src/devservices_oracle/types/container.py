"""Container-related type definitions for dev-service containers."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from enum import StrEnum

from devservices_oracle.errors import ConfigurationConflictError, ContainerAlreadyStartedError


class NetworkMode(StrEnum):
    """How the application reaches the container."""

    SHARED = "shared"  # Same virtual network, addressed by alias
    PORT_MAPPED = "port_mapped"  # Through a port published on the host


@dataclass
class ContainerSpec:
    """Launch configuration of a single container, built up before start.

    Mutators return ``self`` so calls can be chained. Once the container has
    been started the spec is sealed and every mutator raises
    ``ContainerAlreadyStartedError``.

    A spec is either in shared-network mode (it has a network alias) or in
    port-mapped mode (it publishes ports on the host), never both.
    """

    image: str
    env: dict[str, str] = field(default_factory=dict)
    exposed_ports: list[int] = field(default_factory=list)
    port_bindings: dict[int, int] = field(default_factory=dict)  # container port -> host port
    network_aliases: list[str] = field(default_factory=list)
    nano_cpus: int | None = None
    labels: dict[str, str] = field(default_factory=dict)
    username: str | None = None
    password: str | None = None
    database_name: str | None = None
    url_params: dict[str, str] = field(default_factory=dict)
    startup_timeout: float | None = None  # seconds
    ready_log_line: str | None = None
    reuse: bool = False
    _started: bool = field(default=False, init=False, repr=False, compare=False)

    # --- State ---

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def network_mode(self) -> NetworkMode:
        return NetworkMode.SHARED if self.network_aliases else NetworkMode.PORT_MAPPED

    @property
    def network_alias(self) -> str | None:
        """First network alias, or None in port-mapped mode."""
        return self.network_aliases[0] if self.network_aliases else None

    def mark_started(self) -> None:
        """Seal the spec. Called by backends once the container is running."""
        self._started = True

    def _ensure_mutable(self) -> None:
        if self._started:
            raise ContainerAlreadyStartedError(f"Container for image {self.image} is already started")

    # --- Ports and network ---

    def with_exposed_ports(self, *ports: int) -> ContainerSpec:
        """Publish container ports on engine-chosen host ports."""
        self._ensure_mutable()
        if self.network_aliases:
            raise ConfigurationConflictError(
                f"Cannot publish ports {list(ports)}: container uses shared network alias {self.network_alias}"
            )
        for port in ports:
            if port not in self.exposed_ports:
                self.exposed_ports.append(port)
        return self

    def with_bind_ports(self, container_port: int, host_port: int) -> ContainerSpec:
        """Publish a container port on a fixed host port."""
        self._ensure_mutable()
        if self.network_aliases:
            raise ConfigurationConflictError(
                f"Cannot bind host port {host_port}: container uses shared network alias {self.network_alias}"
            )
        self.port_bindings[container_port] = host_port
        return self

    def with_shared_network(self, alias: str) -> ContainerSpec:
        """Join the shared network under the given alias."""
        self._ensure_mutable()
        if self.exposed_ports or self.port_bindings:
            raise ConfigurationConflictError(
                f"Cannot join shared network as {alias}: container already publishes host ports"
            )
        self.network_aliases.append(alias)
        return self

    # --- Resources, env and metadata ---

    def with_nano_cpus(self, nano_cpus: int) -> ContainerSpec:
        self._ensure_mutable()
        self.nano_cpus = nano_cpus
        return self

    def with_env(self, key: str, value: str) -> ContainerSpec:
        self._ensure_mutable()
        self.env[key] = value
        return self

    def with_label(self, key: str, value: str) -> ContainerSpec:
        self._ensure_mutable()
        self.labels[key] = value
        return self

    def with_username(self, username: str) -> ContainerSpec:
        self._ensure_mutable()
        self.username = username
        return self

    def with_password(self, password: str) -> ContainerSpec:
        self._ensure_mutable()
        self.password = password
        return self

    def with_database_name(self, database_name: str) -> ContainerSpec:
        self._ensure_mutable()
        self.database_name = database_name
        return self

    def with_url_param(self, key: str, value: str) -> ContainerSpec:
        """Add a query parameter to the connection URL, as given."""
        self._ensure_mutable()
        self.url_params[key] = value
        return self

    def with_startup_timeout(self, seconds: float) -> ContainerSpec:
        self._ensure_mutable()
        self.startup_timeout = seconds
        return self

    def with_ready_log_line(self, line: str) -> ContainerSpec:
        """Consider the container ready once it logs this line."""
        self._ensure_mutable()
        self.ready_log_line = line
        return self

    def with_reuse(self, reuse: bool = True) -> ContainerSpec:
        self._ensure_mutable()
        self.reuse = reuse
        return self

    # --- Reuse ---

    def config_hash(self) -> str:
        """Stable hash of everything that shapes the running container.

        Two specs with the same hash can share one reusable container. Network
        aliases are left out: they are random per launch, and reuse only
        applies to port-mapped containers.
        """
        payload = {
            "image": self.image,
            "env": self.env,
            "exposed_ports": sorted(self.exposed_ports),
            "port_bindings": {str(k): v for k, v in sorted(self.port_bindings.items())},
            "nano_cpus": self.nano_cpus,
            "labels": self.labels,
            "username": self.username,
            "password": self.password,
            "database_name": self.database_name,
        }
        encoded = json.dumps(payload, sort_keys=True).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()


__all__ = [
    "ContainerSpec",
    "NetworkMode",
]
