from .logging import logger, setup_devservices_logging

__all__ = [
    "logger",
    "setup_devservices_logging",
]
