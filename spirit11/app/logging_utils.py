"""Logging utilities for the application."""

import logging


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure logging for the application.

    Returns:
        Logger for the spirit11 package.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("spirit11")
