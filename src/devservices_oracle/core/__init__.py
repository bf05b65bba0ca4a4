"""Core modules for devservices_oracle."""

from .utils.logging import setup_devservices_logging

__all__ = [
    "setup_devservices_logging",
]
