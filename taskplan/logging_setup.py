"""Logging configuration.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``configure_logging`` once to attach a handler to the package logger.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "taskplan"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Setup and configure the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)

    Returns:
        The configured "taskplan" logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.addHandler(handler)

    return logger
