"""Logging configuration for the application."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from storeorder.infrastructure.config import Settings, get_settings


def setup_logger(
    name: str = "storeorder",
    log_file: Optional[str] = None,
    level: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> logging.Logger:
    """
    Setup a logger with console and optional file handlers.

    Modules log through ``logging.getLogger(__name__)``, so configuring
    the ``storeorder`` logger once covers the whole package.

    Args:
        name: Logger name
        log_file: Optional log file path (defaults to the configured one)
        level: Optional log level (overrides config)
        settings: Settings to use instead of the cached environment ones

    Returns:
        Configured logger instance
    """
    settings = settings or get_settings()

    logger = logging.getLogger(name)
    log_level = getattr(logging, (level or settings.log_level).upper())
    logger.setLevel(log_level)

    # Prevent duplicate handlers; a repeat call only moves the console level
    if logger.handlers:
        for handler in logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(log_level)
        return logger

    formatter = logging.Formatter(settings.log_format)

    # Console goes to stderr so CLI output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = log_file or settings.log_file
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
