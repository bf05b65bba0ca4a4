"""JDBC connection URL construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from devservices_oracle.errors import ContainerNotStartedError
from devservices_oracle.types.container import NetworkMode

from .defaults import ORACLE_PORT

if TYPE_CHECKING:
    from devservices_oracle.types.container import ContainerSpec

    from .backend.protocol import StartedContainer

JDBC_PREFIX = "jdbc:oracle:thin:"


def format_jdbc_url(host: str, port: int, database_name: str, url_params: dict[str, str] | None = None) -> str:
    """Format an Oracle thin-driver URL.

    Parameters are appended in insertion order, as given.

    Example:
        >>> format_jdbc_url("localhost", 1521, "quarkusdb", {"a": "1"})
        'jdbc:oracle:thin:@localhost:1521/quarkusdb?a=1'
    """
    url = f"{JDBC_PREFIX}@{host}:{port}/{database_name}"
    if url_params:
        url += "?" + "&".join(f"{key}={value}" for key, value in url_params.items())
    return url


def build_jdbc_url(spec: ContainerSpec, started: StartedContainer | None) -> str:
    """Compute the URL the application should connect with.

    In shared-network mode the alias and the container port are used, since
    the application sits on the same network and does no port translation.
    Otherwise the engine-reported host and mapped port are used.

    Args:
        spec: Spec the container was started from.
        started: The running container.

    Returns:
        JDBC connection string.

    Raises:
        ContainerNotStartedError: If the container has not been started yet.
    """
    if started is None or not spec.is_started:
        raise ContainerNotStartedError("Connection URL is only known once the container is started")

    database_name = spec.database_name or ""
    if spec.network_mode is NetworkMode.SHARED:
        return format_jdbc_url(spec.network_alias or "", ORACLE_PORT, database_name, spec.url_params)

    return format_jdbc_url(started.host, started.get_mapped_port(ORACLE_PORT), database_name, spec.url_params)


__all__ = ["JDBC_PREFIX", "build_jdbc_url", "format_jdbc_url"]
