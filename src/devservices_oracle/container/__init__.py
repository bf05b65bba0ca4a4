"""Container configuration for dev-service databases.

This package decides how a dev-service container is networked, which ports
it publishes, how its connection URL looks, and how it is shut down.
"""

from .configurator import OracleContainerConfigurator, apply_url_params
from .defaults import (
    DEFAULT_DATABASE_NAME,
    DEFAULT_DATABASE_PASSWORD,
    DEFAULT_DATABASE_USER,
    DEFAULT_IMAGES,
    ORACLE_IMAGE,
    ORACLE_NANO_CPUS,
    ORACLE_PORT,
    get_default_image_name_for,
)
from .image import ImageName
from .network import configure_shared_network
from .shutdown import ContainerShutdownCloseable
from .url import build_jdbc_url, format_jdbc_url

__all__ = [
    "DEFAULT_DATABASE_NAME",
    "DEFAULT_DATABASE_PASSWORD",
    "DEFAULT_DATABASE_USER",
    "DEFAULT_IMAGES",
    "ORACLE_IMAGE",
    "ORACLE_NANO_CPUS",
    "ORACLE_PORT",
    "ContainerShutdownCloseable",
    "ImageName",
    "OracleContainerConfigurator",
    "apply_url_params",
    "build_jdbc_url",
    "configure_shared_network",
    "format_jdbc_url",
    "get_default_image_name_for",
]
