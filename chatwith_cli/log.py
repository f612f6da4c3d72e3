"""Diagnostic logging for the chatwith CLI."""

from __future__ import annotations

import logging

LOGGER_NAME = "chatwith"


def create_logger(log_level: str = "WARNING", logger_name: str = LOGGER_NAME) -> logging.Logger:
    """
    Create a logger that writes diagnostics to stderr.

    Args:
        log_level (str): Logging level name (e.g. "INFO", "DEBUG").
        logger_name (str): Name for the logger instance.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    if not logger.handlers:  # Prevent handler duplication
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
