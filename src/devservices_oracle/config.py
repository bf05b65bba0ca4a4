"""Configuration management for dev-service provisioning."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class DevServicesConfig:
    """Configuration for dev-service containers.

    All values can be overridden via environment variables.
    """

    reuse_enabled: bool = False  # TESTCONTAINERS_REUSE_ENABLE
    shared_network: bool = False  # DEVSERVICES_SHARED_NETWORK
    default_image: Optional[str] = None  # DEVSERVICES_ORACLE_IMAGE
    startup_timeout_sec: int = 240  # DEVSERVICES_STARTUP_TIMEOUT_SEC
    log_level: str = "INFO"  # DEVSERVICES_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "DevServicesConfig":
        """Load configuration from environment variables with defaults."""

        def get_bool(env_var: str, default: bool) -> bool:
            val = os.environ.get(env_var)
            if val is None:
                return default
            return val.strip().lower() in _TRUE_VALUES

        def get_int(env_var: str, default: int) -> int:
            val = os.environ.get(env_var)
            if val is not None:
                try:
                    return int(val)
                except ValueError:
                    pass
            return default

        return cls(
            reuse_enabled=get_bool("TESTCONTAINERS_REUSE_ENABLE", cls.reuse_enabled),
            shared_network=get_bool("DEVSERVICES_SHARED_NETWORK", cls.shared_network),
            default_image=os.environ.get("DEVSERVICES_ORACLE_IMAGE") or None,
            startup_timeout_sec=get_int("DEVSERVICES_STARTUP_TIMEOUT_SEC", cls.startup_timeout_sec),
            log_level=os.environ.get("DEVSERVICES_LOG_LEVEL", cls.log_level),
        )


def get_config() -> DevServicesConfig:
    """Read configuration from environment variables."""
    return DevServicesConfig.from_env()


__all__ = ["DevServicesConfig", "get_config"]
