"""Tests for the Oracle container network/port decisions."""

import logging

import pytest

from devservices_oracle.container.configurator import OracleContainerConfigurator, apply_url_params
from devservices_oracle.container.defaults import ORACLE_NANO_CPUS, ORACLE_PORT
from devservices_oracle.types.container import ContainerSpec, NetworkMode


@pytest.fixture
def spec() -> ContainerSpec:
    return ContainerSpec(image="docker.io/gvenzl/oracle-xe:21-slim-faststart")


def test_ephemeral_port_when_no_fixed_port(spec):
    alias = OracleContainerConfigurator(use_shared_network=False).configure(spec)

    assert alias is None
    assert spec.exposed_ports == [ORACLE_PORT]
    assert spec.port_bindings == {}
    assert spec.network_mode is NetworkMode.PORT_MAPPED


def test_fixed_port_binds_host_port_to_database_port(spec):
    OracleContainerConfigurator(use_shared_network=False, fixed_exposed_port=15210).configure(spec)

    assert spec.port_bindings == {ORACLE_PORT: 15210}
    assert spec.exposed_ports == []


def test_shared_network_assigns_alias_and_publishes_nothing(spec):
    configurator = OracleContainerConfigurator(use_shared_network=True)

    alias = configurator.configure(spec)

    assert alias is not None
    assert alias.startswith("oracle-")
    assert configurator.host_name == alias
    assert spec.network_aliases == [alias]
    assert spec.exposed_ports == []
    assert spec.port_bindings == {}
    assert spec.network_mode is NetworkMode.SHARED


def test_shared_network_takes_precedence_over_fixed_port(spec, caplog):
    configurator = OracleContainerConfigurator(use_shared_network=True, fixed_exposed_port=15210)

    with caplog.at_level(logging.WARNING, logger="DevServices-Oracle"):
        alias = configurator.configure(spec)

    assert spec.network_aliases == [alias]
    assert spec.port_bindings == {}
    assert "Ignoring fixed port 15210" in caplog.text


@pytest.mark.parametrize(
    "use_shared_network, fixed_exposed_port",
    [(False, None), (False, 15210), (True, None), (True, 15210)],
)
def test_cpu_quota_is_always_two_cpus(spec, use_shared_network, fixed_exposed_port):
    OracleContainerConfigurator(
        use_shared_network=use_shared_network, fixed_exposed_port=fixed_exposed_port
    ).configure(spec)

    assert spec.nano_cpus == ORACLE_NANO_CPUS == 2_000_000_000


def test_url_params_are_recorded_unfiltered(spec):
    apply_url_params(spec, {"a": "1", "b": "x y", "": "empty-key"})

    assert spec.url_params == {"a": "1", "b": "x y", "": "empty-key"}
