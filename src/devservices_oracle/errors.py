"""Exceptions raised while provisioning dev-service containers."""

from __future__ import annotations


class DevServicesError(Exception):
    """Base error for dev-service provisioning."""


class DevServicesStartupError(DevServicesError):
    """Raised when a dev-service container could not be started.

    The container engine's own message is kept and the engine exception is
    chained as ``__cause__``.
    """


class ImageResolutionError(DevServicesStartupError):
    """Raised when an image reference is malformed or cannot be pulled."""


class StartupTimeoutError(DevServicesStartupError):
    """Raised when the container did not become ready in time."""


class ResourceLimitError(DevServicesStartupError):
    """Raised when CPU or memory limits prevented the database from booting."""


class InvalidCredentialsError(DevServicesStartupError):
    """Raised when a username, password or database name is empty."""


class ConfigurationConflictError(DevServicesError, ValueError):
    """Raised when a container spec would mix shared-network and port-mapped modes."""


class ContainerAlreadyStartedError(DevServicesError, RuntimeError):
    """Raised when a started container spec is modified."""


class ContainerNotStartedError(DevServicesError, RuntimeError):
    """Raised when runtime information is requested before the container started."""


__all__ = [
    "ConfigurationConflictError",
    "ContainerAlreadyStartedError",
    "ContainerNotStartedError",
    "DevServicesError",
    "DevServicesStartupError",
    "ImageResolutionError",
    "InvalidCredentialsError",
    "ResourceLimitError",
    "StartupTimeoutError",
]
