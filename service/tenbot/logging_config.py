"""
Logging configuration for tenbot.
"""

import logging
import sys


def setup_logging(level: str | int = logging.DEBUG) -> logging.Logger:
    """Setup the package logger with proper format and handlers."""

    # Create logger
    logger = logging.getLogger("tenbot")
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # Create console handler with formatting
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger
