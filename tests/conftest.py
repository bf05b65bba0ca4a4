"""Pytest configuration for all tests."""

from __future__ import annotations

import itertools
import logging
import shutil
from collections.abc import Iterator

import pytest

from devservices_oracle import providers
from devservices_oracle.config import DevServicesConfig
from devservices_oracle.core.utils import logger
from devservices_oracle.types.container import ContainerSpec


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "docker: marks tests that require Docker")


class FakeStartedContainer:
    """In-memory stand-in for a running container."""

    def __init__(
        self,
        container_id: str,
        ports: dict[int, int],
        *,
        host: str = "localhost",
        reused: bool = False,
        reusable: bool = False,
    ):
        self.container_id = container_id
        self.host = host
        self.reused = reused
        self.reusable = reusable
        self.ports = ports
        self.stop_calls = 0

    def get_mapped_port(self, port: int) -> int:
        return self.ports[port]

    def stop(self) -> None:
        if self.stop_calls:
            raise RuntimeError(f"Container {self.container_id} is already stopped")
        self.stop_calls += 1


class FakeBackend:
    """Container backend that records specs instead of starting containers.

    Exposed ports get distinct ephemeral host ports, bound ports keep their
    requested host port. With ``keeps_reusable`` set, containers whose spec asks
    for reuse are reported as reusable.
    """

    def __init__(self, fail_with: Exception | None = None, *, keeps_reusable: bool = False) -> None:
        self.fail_with = fail_with
        self.keeps_reusable = keeps_reusable
        self.started: list[tuple[ContainerSpec, FakeStartedContainer]] = []
        self._ids = itertools.count(1)
        self._ephemeral_ports = itertools.count(49153)

    def start(self, spec: ContainerSpec) -> FakeStartedContainer:
        if self.fail_with is not None:
            raise self.fail_with

        ports = dict(spec.port_bindings)
        for port in spec.exposed_ports:
            ports[port] = next(self._ephemeral_ports)

        container = FakeStartedContainer(
            f"fake-{next(self._ids):04d}", ports, reusable=self.keeps_reusable and spec.reuse
        )
        spec.mark_started()
        self.started.append((spec, container))
        return container

    @property
    def last_spec(self) -> ContainerSpec:
        return self.started[-1][0]

    @property
    def last_container(self) -> FakeStartedContainer:
        return self.started[-1][1]


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def reusing_backend() -> FakeBackend:
    """Backend that keeps containers asking for reuse running."""
    return FakeBackend(keeps_reusable=True)


@pytest.fixture
def failing_backend():
    """Factory for backends whose start raises the given exception."""

    def _make(exc: Exception) -> FakeBackend:
        return FakeBackend(fail_with=exc)

    return _make


@pytest.fixture
def config() -> DevServicesConfig:
    """Configuration independent of the developer's environment."""
    return DevServicesConfig()


@pytest.fixture(autouse=True)
def clean_registry() -> Iterator[None]:
    """Isolate provider registrations between tests."""
    saved = providers.list_providers()
    providers._PROVIDERS.clear()
    yield
    providers._PROVIDERS.clear()
    providers._PROVIDERS.update(saved)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog keeps seeing package records."""
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(scope="session")
def docker():
    """Check that docker is available and return the CLI name."""
    if shutil.which("docker") is None:
        pytest.skip("'docker' is missing or not available in PATH.")
    return "docker"
