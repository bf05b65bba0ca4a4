"""Docker backend implementation.

Uses testcontainers (on top of the Docker SDK) to run containers.
"""

from __future__ import annotations

import re
import threading
from datetime import timedelta
from typing import TYPE_CHECKING, Any

import docker
from docker.errors import APIError, DockerException, ImageNotFound, NotFound
from testcontainers.core.config import testcontainers_config
from testcontainers.core.container import DockerContainer
from testcontainers.core.docker_client import DockerClient
from testcontainers.core.network import Network
from testcontainers.core.wait_strategies import LogMessageWaitStrategy

from devservices_oracle.container.defaults import DEFAULT_STARTUP_TIMEOUT_SEC, get_label_name
from devservices_oracle.core.utils import logger
from devservices_oracle.errors import (
    ContainerNotStartedError,
    DevServicesStartupError,
    ImageResolutionError,
    ResourceLimitError,
    StartupTimeoutError,
)
from devservices_oracle.types.container import NetworkMode

if TYPE_CHECKING:
    from docker.models.containers import Container

    from devservices_oracle.types.container import ContainerSpec

HASH_LABEL = get_label_name("hash")

# Engine messages that point at a bad or unreachable image
_IMAGE_ERROR_MARKERS = ("pull access denied", "manifest unknown", "repository does not exist", "invalid reference")
# Engine messages that point at CPU/memory limits
_RESOURCE_ERROR_MARKERS = ("nanocpus", "range of cpus", "memory", "oom")

_shared_network: Network | None = None
_shared_network_lock = threading.Lock()


def get_shared_network() -> Network:
    """Get the process-wide shared network, creating it on first use."""
    global _shared_network

    with _shared_network_lock:
        if _shared_network is None:
            network = Network()
            network.create()
            logger.info(f"Created shared dev-services network: {network.name}")
            _shared_network = network
        return _shared_network


def reaper_disabled() -> bool:
    """Whether testcontainers' Ryuk reaper is off for this process.

    Ryuk removes every container of the session once the process exits, so a
    container can only outlive the process when the reaper is disabled
    (``TESTCONTAINERS_RYUK_DISABLED=true``).
    """
    return bool(testcontainers_config.ryuk_disabled)


def _map_engine_error(exc: Exception, image: str) -> DevServicesStartupError:
    """Translate a container engine error, keeping its message."""
    message = str(exc)
    lowered = message.lower()
    if isinstance(exc, ImageNotFound) or any(marker in lowered for marker in _IMAGE_ERROR_MARKERS):
        return ImageResolutionError(f"Failed to resolve image {image}: {message}")
    if any(marker in lowered for marker in _RESOURCE_ERROR_MARKERS):
        return ResourceLimitError(f"Container resource limits prevented start of {image}: {message}")
    return DevServicesStartupError(f"Failed to start container for image {image}: {message}")


class StartedDockerContainer:
    """A container started through testcontainers."""

    def __init__(self, container: DockerContainer, *, reusable: bool = False) -> None:
        self._container = container
        self._reusable = reusable

    @property
    def container_id(self) -> str:
        return self._container.get_wrapped_container().id

    @property
    def host(self) -> str:
        return self._container.get_container_host_ip()

    @property
    def reused(self) -> bool:
        return False

    @property
    def reusable(self) -> bool:
        return self._reusable

    def get_mapped_port(self, port: int) -> int:
        try:
            return int(self._container.get_exposed_port(port))
        except (NotFound, KeyError, TypeError) as e:
            raise ContainerNotStartedError(f"Port {port} is not published by container {self.container_id}") from e

    def stop(self) -> None:
        self._container.stop()


class ReusedContainer:
    """An already running container picked up for reuse."""

    def __init__(self, container: Container, host: str) -> None:
        self._container = container
        self._host = host

    @property
    def container_id(self) -> str:
        return self._container.id

    @property
    def host(self) -> str:
        return self._host

    @property
    def reused(self) -> bool:
        return True

    @property
    def reusable(self) -> bool:
        return True

    def get_mapped_port(self, port: int) -> int:
        self._container.reload()
        bindings = self._container.attrs["NetworkSettings"]["Ports"].get(f"{port}/tcp") or []
        if not bindings:
            raise ContainerNotStartedError(f"Port {port} is not published by container {self.container_id}")
        return int(bindings[0]["HostPort"])

    def stop(self) -> None:
        self._container.remove(force=True)


class DockerBackend:
    """Docker implementation of ContainerBackend.

    Reuse applies to port-mapped containers only, and only while the Ryuk
    reaper is disabled. Shared-network containers get a fresh alias on every
    launch, so there is nothing stable to reconnect to.

    Args:
        reuse_enabled: Whether containers that ask for reuse may be reused.
            Mirrors the engine-wide opt-in of the container library.
        client: Optional Docker SDK client. Created from the environment on first use.
    """

    def __init__(self, *, reuse_enabled: bool = False, client: docker.DockerClient | None = None) -> None:
        self.reuse_enabled = reuse_enabled
        self._client = client

    @property
    def client(self) -> docker.DockerClient:
        if self._client is None:
            self._client = docker.from_env()
        return self._client

    def start(self, spec: ContainerSpec) -> StartedDockerContainer | ReusedContainer:
        """Start a container from the spec and wait until it is ready."""
        config_hash = None
        if self._reuse_allowed(spec):
            config_hash = spec.config_hash()
            reused = self._find_reusable(config_hash)
            if reused is not None:
                logger.info(f"Reusing running container {reused.container_id} (image: {spec.image})")
                spec.mark_started()
                return reused

        container = self._build_container(spec, config_hash=config_hash)

        logger.info(f"Starting container (image: {spec.image})")
        try:
            container.start()
        except TimeoutError as e:
            oom_killed = self._was_oom_killed(container)
            self._discard(container)
            if oom_killed:
                raise ResourceLimitError(f"Container for image {spec.image} ran out of resources: {e}") from e
            raise StartupTimeoutError(
                f"Container for image {spec.image} did not become ready within {self._timeout(spec)}s: {e}"
            ) from e
        except RuntimeError as e:
            # The wait strategy raises this when the container exits before logging the ready line
            oom_killed = self._was_oom_killed(container)
            self._discard(container)
            if oom_killed:
                raise ResourceLimitError(f"Container for image {spec.image} ran out of resources: {e}") from e
            raise DevServicesStartupError(f"Container for image {spec.image} exited before becoming ready: {e}") from e
        except DockerException as e:
            self._discard(container)
            raise _map_engine_error(e, spec.image) from e

        spec.mark_started()
        return StartedDockerContainer(container, reusable=config_hash is not None)

    def _reuse_allowed(self, spec: ContainerSpec) -> bool:
        if not spec.reuse:
            return False
        if not self.reuse_enabled:
            logger.debug("Container reuse requested but not enabled in the environment (TESTCONTAINERS_REUSE_ENABLE)")
            return False
        if spec.network_mode is NetworkMode.SHARED:
            logger.debug("Container reuse does not apply to shared-network containers, starting a fresh one")
            return False
        if not reaper_disabled():
            logger.warning(
                "Container reuse is enabled but Ryuk would remove the container when this process exits. "
                "Set TESTCONTAINERS_RYUK_DISABLED=true to keep reusable containers; starting a disposable one"
            )
            return False
        return True

    @staticmethod
    def _timeout(spec: ContainerSpec) -> float:
        return spec.startup_timeout if spec.startup_timeout is not None else DEFAULT_STARTUP_TIMEOUT_SEC

    def _build_container(self, spec: ContainerSpec, *, config_hash: str | None) -> DockerContainer:
        container = DockerContainer(spec.image)

        for key, value in spec.env.items():
            container.with_env(key, value)

        if spec.exposed_ports:
            container.with_exposed_ports(*spec.exposed_ports)
        for container_port, host_port in spec.port_bindings.items():
            container.with_bind_ports(container_port, host_port)

        if spec.network_aliases:
            container.with_network(get_shared_network())
            container.with_network_aliases(*spec.network_aliases)

        labels = dict(spec.labels)
        if config_hash is not None:
            labels[HASH_LABEL] = config_hash

        kwargs: dict[str, Any] = {}
        if labels:
            kwargs["labels"] = labels
        if spec.nano_cpus is not None:
            kwargs["nano_cpus"] = spec.nano_cpus
        if kwargs:
            container.with_kwargs(**kwargs)

        if spec.ready_log_line is not None:
            timeout = self._timeout(spec)
            logger.info(f"Container will be ready once it logs {spec.ready_log_line!r} (timeout: {timeout}s)")
            container.waiting_for(
                LogMessageWaitStrategy(re.compile(re.escape(spec.ready_log_line))).with_startup_timeout(
                    timedelta(seconds=timeout)
                )
            )

        return container

    def _find_reusable(self, config_hash: str) -> ReusedContainer | None:
        try:
            matches = self.client.containers.list(filters={"label": f"{HASH_LABEL}={config_hash}", "status": "running"})
        except DockerException as e:
            raise _map_engine_error(e, "reusable container lookup") from e
        if not matches:
            return None
        return ReusedContainer(matches[0], host=DockerClient().host())

    @staticmethod
    def _was_oom_killed(container: DockerContainer) -> bool:
        wrapped = container.get_wrapped_container()
        if wrapped is None:
            return False
        try:
            wrapped.reload()
        except (APIError, NotFound):
            return False
        return bool(wrapped.attrs.get("State", {}).get("OOMKilled"))

    @staticmethod
    def _discard(container: DockerContainer) -> None:
        """Remove a container that failed to become ready."""
        if container.get_wrapped_container() is None:
            return
        try:
            container.stop()
        except DockerException as e:
            logger.warning(f"Could not remove container that failed to start: {e}")


__all__ = [
    "DockerBackend",
    "HASH_LABEL",
    "ReusedContainer",
    "StartedDockerContainer",
    "get_shared_network",
    "reaper_disabled",
]
