"""Default container settings for dev-service databases.

This module provides the default image per database kind and the fixed
settings of the Oracle dev-service container. Image defaults can be
overridden through ``DevServicesConfig``.
"""

from __future__ import annotations

from devservices_oracle.types.datasource import DatabaseKind

# Image family of the default Oracle image
ORACLE_IMAGE = "gvenzl/oracle-xe"

# Port the database listens on inside the container
ORACLE_PORT = 1521

DEFAULT_DATABASE_USER = "quarkus"
DEFAULT_DATABASE_PASSWORD = "quarkus"
DEFAULT_DATABASE_NAME = "quarkusdb"

# 2 CPUs. The image ships a hardcoded memory configuration that may not be
# enough to boot the database under unconstrained CPU shares.
# See https://github.com/gvenzl/oci-oracle-xe/issues/64
ORACLE_NANO_CPUS = 2_000_000_000

# Line logged by the image once the database accepts connections
ORACLE_READY_LOG_LINE = "DATABASE IS READY TO USE!"

DEFAULT_STARTUP_TIMEOUT_SEC = 240

# Prefix of labels attached to dev-service containers
LABEL_PREFIX = "devservices"

# Default images for all database kinds
DEFAULT_IMAGES: dict[DatabaseKind, str] = {
    DatabaseKind.ORACLE: f"docker.io/{ORACLE_IMAGE}:21-slim-faststart",
    DatabaseKind.POSTGRESQL: "docker.io/postgres:17",
    DatabaseKind.MYSQL: "docker.io/mysql:8.4",
    DatabaseKind.MARIADB: "docker.io/mariadb:11.4",
    DatabaseKind.MSSQL: "mcr.microsoft.com/mssql/server:2022-latest",
    DatabaseKind.DB2: "icr.io/db2_community/db2:11.5.9.0",
}


def get_default_image_name_for(kind: str | DatabaseKind, override: str | None = None) -> str:
    """Get the default image for a database kind, using override if provided.

    Args:
        kind: Database kind (e.g., "oracle").
        override: Optional user-provided image reference.

    Returns:
        Image reference for the database kind.

    Raises:
        ValueError: If the kind has no containerized default and no override is given.
    """
    if override:
        return override

    try:
        db_kind = DatabaseKind(kind)
    except ValueError:
        db_kind = None

    if db_kind is None or db_kind not in DEFAULT_IMAGES:
        raise ValueError(f"No default container image for database kind {kind}. Kind may not support Dev Services.")

    return DEFAULT_IMAGES[db_kind]


def get_label_name(suffix: str) -> str:
    """Get full label name: {prefix}.{suffix}.

    Args:
        suffix: Label suffix (e.g., "kind", "hash").

    Returns:
        Full label name (e.g., "devservices.kind").
    """
    return f"{LABEL_PREFIX}.{suffix}"


__all__ = [
    "DEFAULT_DATABASE_NAME",
    "DEFAULT_DATABASE_PASSWORD",
    "DEFAULT_DATABASE_USER",
    "DEFAULT_IMAGES",
    "DEFAULT_STARTUP_TIMEOUT_SEC",
    "LABEL_PREFIX",
    "ORACLE_IMAGE",
    "ORACLE_NANO_CPUS",
    "ORACLE_PORT",
    "ORACLE_READY_LOG_LINE",
    "get_default_image_name_for",
    "get_label_name",
]
