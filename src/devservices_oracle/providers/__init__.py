"""Dev-service providers and their registry.

Providers are registered explicitly under a database kind and looked up by
the host framework when it wires datasources for a dev or test launch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from devservices_oracle.types.datasource import DatabaseKind

from .base import DevServicesDatasourceProvider
from .oracle import OracleDevServicesProvider

if TYPE_CHECKING:
    from devservices_oracle.config import DevServicesConfig
    from devservices_oracle.container.backend import ContainerBackend
    from devservices_oracle.types.datasource import DatasourceStartRequest, RunningDatasourceDescriptor

logger = logging.getLogger(__name__)

# Registry mapping database kinds to their providers
_PROVIDERS: dict[str, DevServicesDatasourceProvider] = {}


class FunctionProvider:
    """Adapts a plain ``start_database``-shaped function to the provider contract."""

    def __init__(self, func: Callable[[DatasourceStartRequest], RunningDatasourceDescriptor]) -> None:
        self.func = func

    def start_database(self, request: DatasourceStartRequest) -> RunningDatasourceDescriptor:
        return self.func(request)


def register_provider(
    kind: str | DatabaseKind,
    provider: DevServicesDatasourceProvider | Callable[[DatasourceStartRequest], RunningDatasourceDescriptor],
) -> None:
    """Register a provider for a database kind, replacing any previous one.

    Args:
        kind: Database kind (e.g., "oracle").
        provider: Provider implementing ``start_database``, or a plain
            function taking a request and returning a descriptor.

    Raises:
        TypeError: If the provider is neither a provider nor callable.
    """
    if not isinstance(provider, DevServicesDatasourceProvider):
        if not callable(provider):
            raise TypeError(f"Provider for {kind} must implement start_database(request)")
        provider = FunctionProvider(provider)
    key = str(kind)
    if key in _PROVIDERS:
        logger.debug("Replacing dev-service provider for: %s", key)
    _PROVIDERS[key] = provider


def unregister_provider(kind: str | DatabaseKind) -> None:
    """Remove the provider for a database kind, if any."""
    _PROVIDERS.pop(str(kind), None)


def get_provider(kind: str | DatabaseKind) -> DevServicesDatasourceProvider:
    """Get the provider registered for a database kind.

    Args:
        kind: Database kind name.

    Returns:
        The registered provider.

    Raises:
        ValueError: If no provider is registered for the kind.
    """
    key = str(kind)
    if key not in _PROVIDERS:
        logger.error("No dev-service provider for database kind: %s", key)
        raise ValueError(f"No dev-service provider for database kind: {key}. Available kinds: {list(_PROVIDERS)}")

    logger.debug("Returning dev-service provider for: %s", key)
    return _PROVIDERS[key]


def list_providers() -> dict[str, DevServicesDatasourceProvider]:
    """Get a copy of the registered providers.

    Returns:
        Dict mapping database kinds to their providers.
    """
    return dict(_PROVIDERS)


def setup_oracle(
    *,
    use_shared_network: bool | None = None,
    backend: ContainerBackend | None = None,
    config: DevServicesConfig | None = None,
) -> OracleDevServicesProvider:
    """Create the Oracle provider and register it under ``oracle``.

    Args:
        use_shared_network: Whether dev services run on a shared network.
        backend: Optional container backend override.
        config: Optional configuration override.

    Returns:
        The registered provider.
    """
    provider = OracleDevServicesProvider(use_shared_network=use_shared_network, backend=backend, config=config)
    register_provider(DatabaseKind.ORACLE, provider)
    return provider


__all__ = [
    "DevServicesDatasourceProvider",
    "FunctionProvider",
    "OracleDevServicesProvider",
    "get_provider",
    "list_providers",
    "register_provider",
    "setup_oracle",
    "unregister_provider",
]
