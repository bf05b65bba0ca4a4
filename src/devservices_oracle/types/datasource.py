"""Datasource request/response types exchanged with the host framework."""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class LaunchMode(StrEnum):
    """Mode the host application was launched in."""

    NORMAL = "normal"
    TEST = "test"
    DEV = "dev"


class DatabaseKind(StrEnum):
    """Database kinds a dev-service provider can be registered for."""

    ORACLE = "oracle"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    MSSQL = "mssql"
    DB2 = "db2"
    H2 = "h2"
    DERBY = "derby"


@runtime_checkable
class Closeable(Protocol):
    """Anything that releases a resource when closed."""

    def close(self) -> None: ...


class DatasourceStartRequest(BaseModel):
    """Everything the framework knows about the datasource it wants started.

    Attributes:
        username: Database user. Provider default applies when omitted.
        password: Database password. Provider default applies when omitted.
        datasource_name: Database name. Provider default applies when omitted.
        image_name: Container image reference. Provider default applies when omitted.
        container_properties: Extra environment variables for the container.
        additional_jdbc_url_properties: Query parameters appended to the JDBC URL.
        fixed_exposed_port: Host port to bind the database port to.
            An ephemeral port is used when omitted.
        launch_mode: Mode the application is being launched in.
        startup_timeout: How long to wait for the database to become ready.
    """

    model_config = ConfigDict(frozen=True)

    username: str | None = Field(default=None, description="Database user")
    password: str | None = Field(default=None, description="Database password")
    datasource_name: str | None = Field(default=None, description="Database name")
    image_name: str | None = Field(default=None, description="Container image reference")
    container_properties: dict[str, str] = Field(
        default_factory=dict, description="Extra environment variables for the container"
    )
    additional_jdbc_url_properties: dict[str, str] = Field(
        default_factory=dict, description="Query parameters appended to the JDBC URL"
    )
    fixed_exposed_port: int | None = Field(default=None, ge=1, le=65535, description="Fixed host port")
    launch_mode: LaunchMode = Field(default=LaunchMode.DEV, description="Application launch mode")
    startup_timeout: timedelta | None = Field(default=None, description="Startup timeout")


class RunningDatasourceDescriptor(BaseModel):
    """A started datasource, as reported back to the framework.

    The framework owns the descriptor and must close it exactly once
    during dev-services teardown. Closing twice is harmless.

    Attributes:
        container_id: Id of the running container.
        jdbc_url: Effective JDBC connection string.
        username: Database user.
        password: Database password.
        shutdown: Handle that stops the container when closed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    container_id: str = Field(description="Id of the running container")
    jdbc_url: str = Field(description="Effective JDBC connection string")
    username: str = Field(description="Database user")
    password: str = Field(description="Database password")
    shutdown: Closeable = Field(description="Handle that stops the container when closed", exclude=True)

    def close(self) -> None:
        """Release the container through the shutdown handle."""
        self.shutdown.close()

    def __enter__(self) -> RunningDatasourceDescriptor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "Closeable",
    "DatabaseKind",
    "DatasourceStartRequest",
    "LaunchMode",
    "RunningDatasourceDescriptor",
]
