"""Tests for JDBC connection URL construction."""

import pytest

from devservices_oracle.container.url import build_jdbc_url, format_jdbc_url
from devservices_oracle.errors import ContainerNotStartedError
from devservices_oracle.types.container import ContainerSpec


class _Started:
    host = "docker-host"
    container_id = "abc"
    reused = False

    def __init__(self, ports):
        self.ports = ports

    def get_mapped_port(self, port):
        return self.ports[port]

    def stop(self):
        pass


def _started_spec(**kwargs) -> ContainerSpec:
    spec = ContainerSpec(image="gvenzl/oracle-xe", database_name="quarkusdb", **kwargs)
    spec.mark_started()
    return spec


@pytest.mark.parametrize(
    "host, port, database, params, expected",
    [
        ("localhost", 1521, "quarkusdb", None, "jdbc:oracle:thin:@localhost:1521/quarkusdb"),
        ("db", 32768, "hr", {}, "jdbc:oracle:thin:@db:32768/hr"),
        ("db", 1521, "hr", {"a": "1"}, "jdbc:oracle:thin:@db:1521/hr?a=1"),
        ("db", 1521, "hr", {"b": "2", "a": "1"}, "jdbc:oracle:thin:@db:1521/hr?b=2&a=1"),
    ],
)
def test_format_jdbc_url(host, port, database, params, expected):
    assert format_jdbc_url(host, port, database, params) == expected


def test_shared_network_url_uses_alias_and_container_port():
    spec = _started_spec(network_aliases=["oracle-k3f9a"])

    url = build_jdbc_url(spec, _Started({1521: 49153}))

    assert url == "jdbc:oracle:thin:@oracle-k3f9a:1521/quarkusdb"
    assert "49153" not in url


def test_port_mapped_url_uses_engine_host_and_mapped_port():
    spec = _started_spec(exposed_ports=[1521])

    url = build_jdbc_url(spec, _Started({1521: 49153}))

    assert url == "jdbc:oracle:thin:@docker-host:49153/quarkusdb"


def test_url_params_are_appended_in_both_modes():
    shared = _started_spec(network_aliases=["oracle-k3f9a"], url_params={"a": "1", "b": "2"})
    mapped = _started_spec(exposed_ports=[1521], url_params={"a": "1", "b": "2"})

    assert build_jdbc_url(shared, _Started({})).endswith("/quarkusdb?a=1&b=2")
    assert build_jdbc_url(mapped, _Started({1521: 49153})).endswith("/quarkusdb?a=1&b=2")


def test_url_before_start_raises():
    spec = ContainerSpec(image="gvenzl/oracle-xe", database_name="quarkusdb", exposed_ports=[1521])

    with pytest.raises(ContainerNotStartedError):
        build_jdbc_url(spec, _Started({1521: 49153}))

    spec.mark_started()
    with pytest.raises(ContainerNotStartedError):
        build_jdbc_url(spec, None)
