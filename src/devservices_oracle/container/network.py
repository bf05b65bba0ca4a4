"""Shared-network aliasing for dev-service containers.

When dev services run on a shared network, the application and every
dev-service container join one virtual network and reach each other by
alias on the container port, without host port mapping.
"""

from __future__ import annotations

import random

from devservices_oracle.types.container import ContainerSpec

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
ALIAS_SUFFIX_LENGTH = 5


def random_base58(length: int) -> str:
    """Return a random string of Base58 characters."""
    return "".join(random.choice(BASE58_ALPHABET) for _ in range(length))


def configure_shared_network(spec: ContainerSpec, host_name_prefix: str) -> str:
    """Put the container on the shared network and give it a fresh alias.

    Args:
        spec: Container spec to configure.
        host_name_prefix: Alias prefix, usually the database kind.

    Returns:
        The assigned alias (e.g., "oracle-k3f9a").
    """
    host_name = f"{host_name_prefix}-{random_base58(ALIAS_SUFFIX_LENGTH)}".lower()
    spec.with_shared_network(host_name)
    return host_name


__all__ = ["configure_shared_network", "random_base58"]
