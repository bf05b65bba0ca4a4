"""Oracle dev-service provider.

Starts a disposable ``gvenzl/oracle-xe`` container for development and test
launches and reports its connection coordinates back to the framework.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from devservices_oracle.config import DevServicesConfig
from devservices_oracle.container.backend import ContainerBackend, get_default_backend
from devservices_oracle.container.configurator import OracleContainerConfigurator, apply_url_params
from devservices_oracle.container.defaults import (
    DEFAULT_DATABASE_NAME,
    DEFAULT_DATABASE_PASSWORD,
    DEFAULT_DATABASE_USER,
    ORACLE_READY_LOG_LINE,
    get_default_image_name_for,
    get_label_name,
)
from devservices_oracle.container.image import ImageName
from devservices_oracle.container.shutdown import ContainerShutdownCloseable
from devservices_oracle.container.url import build_jdbc_url
from devservices_oracle.core.utils import logger
from devservices_oracle.errors import InvalidCredentialsError
from devservices_oracle.types.container import ContainerSpec
from devservices_oracle.types.datasource import DatabaseKind, RunningDatasourceDescriptor

if TYPE_CHECKING:
    from devservices_oracle.types.datasource import DatasourceStartRequest

FRIENDLY_NAME = "Oracle"


def resolve_oracle_image(image_name: str | None, default_override: str | None = None) -> ImageName:
    """Resolve the image to run. Any image may replace the default oracle-xe one.

    Raises:
        ImageResolutionError: If the reference is malformed.
    """
    reference = image_name or get_default_image_name_for(DatabaseKind.ORACLE, override=default_override)
    return ImageName.parse(reference)


def apply_oracle_environment(spec: ContainerSpec) -> None:
    """Translate credentials into the environment the Oracle image reads at boot."""
    spec.with_env("ORACLE_PASSWORD", spec.password or "")
    spec.with_env("APP_USER", spec.username or "")
    spec.with_env("APP_USER_PASSWORD", spec.password or "")
    spec.with_env("ORACLE_DATABASE", spec.database_name or "")


def _validate_credentials(spec: ContainerSpec) -> None:
    for field_name, value in (
        ("username", spec.username),
        ("password", spec.password),
        ("database name", spec.database_name),
    ):
        if not value:
            raise InvalidCredentialsError(f"Oracle {field_name} cannot be empty")


class OracleDevServicesProvider:
    """Dev-service provider for the ``oracle`` database kind.

    Args:
        use_shared_network: Whether dev services run on a shared network.
            Defaults to the ``shared_network`` configuration value.
        backend: Container backend. Defaults to Docker.
        config: Configuration. Defaults to ``DevServicesConfig.from_env()``.

    Example:
        >>> provider = OracleDevServicesProvider()
        >>> with provider.start_database(DatasourceStartRequest()) as datasource:
        ...     print(datasource.jdbc_url)
    """

    def __init__(
        self,
        *,
        use_shared_network: bool | None = None,
        backend: ContainerBackend | None = None,
        config: DevServicesConfig | None = None,
    ) -> None:
        self.config = config or DevServicesConfig.from_env()
        self.use_shared_network = self.config.shared_network if use_shared_network is None else use_shared_network
        self.backend = backend or get_default_backend(reuse_enabled=self.config.reuse_enabled)

    def start_database(self, request: DatasourceStartRequest) -> RunningDatasourceDescriptor:
        """Start an Oracle container and describe how to reach it.

        Args:
            request: Datasource settings from the framework.

        Returns:
            RunningDatasourceDescriptor owning the started container.

        Raises:
            ImageResolutionError: If the image reference is invalid or cannot be pulled.
            InvalidCredentialsError: If a credential is given but empty.
            StartupTimeoutError: If the database is not ready within the startup timeout.
            ResourceLimitError: If resource limits kept the database from booting.
            DevServicesStartupError: For any other engine failure.
        """
        image = resolve_oracle_image(request.image_name, self.config.default_image)
        spec = ContainerSpec(image=image.canonical_name)

        configurator = OracleContainerConfigurator(
            use_shared_network=self.use_shared_network,
            fixed_exposed_port=request.fixed_exposed_port,
        )
        configurator.configure(spec)

        if request.startup_timeout is not None:
            spec.with_startup_timeout(request.startup_timeout.total_seconds())
        else:
            spec.with_startup_timeout(self.config.startup_timeout_sec)

        spec.with_username(DEFAULT_DATABASE_USER if request.username is None else request.username)
        spec.with_password(DEFAULT_DATABASE_PASSWORD if request.password is None else request.password)
        spec.with_database_name(DEFAULT_DATABASE_NAME if request.datasource_name is None else request.datasource_name)
        spec.with_reuse(True)
        _validate_credentials(spec)

        # Credentials are applied last so the descriptor always matches the container
        for key, value in request.container_properties.items():
            spec.with_env(key, value)
        apply_oracle_environment(spec)

        spec.with_ready_log_line(ORACLE_READY_LOG_LINE)
        spec.with_label(get_label_name("kind"), DatabaseKind.ORACLE.value)
        spec.with_label(get_label_name("launch-mode"), request.launch_mode.value)
        apply_url_params(spec, request.additional_jdbc_url_properties)

        started = self.backend.start(spec)

        logger.info("Dev Services for Oracle started.")

        return RunningDatasourceDescriptor(
            container_id=started.container_id,
            jdbc_url=build_jdbc_url(spec, started),
            username=spec.username or "",
            password=spec.password or "",
            shutdown=ContainerShutdownCloseable(
                started,
                FRIENDLY_NAME,
                reusable=started.reusable,
            ),
        )


__all__ = [
    "FRIENDLY_NAME",
    "OracleDevServicesProvider",
    "apply_oracle_environment",
    "resolve_oracle_image",
]
