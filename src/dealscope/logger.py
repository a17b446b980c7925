"""
Logging configuration for DealScope.
"""
import logging
import os
import sys
from typing import Optional

from .config import LOG_FORMAT

PACKAGE_LOGGER = "dealscope"


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a logger with consistent formatting.

    Args:
        name: Logger name (the package logger by default)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    level = level or os.getenv("LOG_LEVEL", "INFO")
    format_string = format_string or LOG_FORMAT

    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    # Console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(format_string))

    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


# Create default logger for the package
logger = setup_logger()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Module loggers have no handler of their own; records propagate to the
    package logger configured above.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
