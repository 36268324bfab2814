"""Logging configuration for eslsp.

stdout carries the LSP transport in stdio mode, so log output goes to
stderr or to a file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_ROOT_LOGGER = "eslsp"


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure logging for eslsp.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs to stderr.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(log_level)
    logger.handlers.clear()

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(formatter)
    handler.setLevel(log_level)
    logger.addHandler(handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name under the eslsp namespace.

    Args:
        name: Logger name (will be prefixed with 'eslsp.').

    Returns:
        Logger instance.
    """
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
