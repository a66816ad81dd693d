"""
Logging Configuration Module

Provides consistent logging setup across the retrieval engine packages.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGERS = ("chunking", "embedding", "vector_store", "retrieval")


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> list[logging.Logger]:
    """
    Configure logging for the retrieval engine.

    Args:
        level: Logging level (default: INFO); names like "DEBUG" are accepted
        log_file: Optional path to log file
        format_string: Optional custom format string

    Returns:
        The configured package loggers
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    file_handler = None
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)

    loggers = []
    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()
        logger.addHandler(console_handler)
        if file_handler:
            logger.addHandler(file_handler)
        loggers.append(logger)

    return loggers


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
