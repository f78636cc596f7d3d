"""
Logging configuration and utilities.

Streamlit re-executes scripts on every interaction, so setup is idempotent:
handlers are attached once per process.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str = "INFO", logger_name: str = "healthdiary") -> logging.Logger:
    """
    Set up logging for the application.

    Args:
        level: Log level name (DEBUG, INFO, ...).
        logger_name: Logger to configure; children inherit its handler.

    Returns:
        Configured logger instance.
    """
    global _configured
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not _configured:
        logger.handlers.clear()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _configured = True

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance by name (typically ``__name__``)."""
    return logging.getLogger(name)
