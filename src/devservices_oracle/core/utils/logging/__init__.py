"""Logging utilities for devservices_oracle package."""

import logging
import sys

# Create global logger instance
logger = logging.getLogger("DevServices-Oracle")


def setup_devservices_logging(level: int | str = logging.INFO) -> None:
    """
    Setup logging with a clean format for the devservices_oracle package.

    Args:
        level: Logging level, as a number or a name such as "DEBUG" (default: INFO)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    # Use stdout stream handler to ensure logs are dumped to stdout
    logging_handler = logging.StreamHandler(sys.stdout)
    logging_formatter = logging.Formatter("[DevServices] [%(levelname)s] %(message)s")

    logging_handler.setFormatter(logging_formatter)
    logger.addHandler(logging_handler)
    logger.setLevel(level)
    logger.propagate = False  # Don't propagate to root logger


__all__ = [
    "logger",
    "setup_devservices_logging",
]
