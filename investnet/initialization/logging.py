"""
Logging initialization.

Configures loguru logger for the application.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from investnet.config.settings import settings


def setup_logging() -> None:
    """Configure logger with stderr and rotating file sinks."""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.add(
        settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        level=settings.log_level,
        encoding="utf-8",
    )

    logger.info("Logging configured", extra={"environment": settings.environment})
