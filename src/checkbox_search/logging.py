"""
Logging utilities for checkbox-search.

Every module logs through a child of the ``checkbox_search`` package logger
so a host application can silence or redirect the prompt in one place.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("checkbox_search")


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the prompt engine.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs

    Example:
        from checkbox_search.logging import setup_logging

        # Keep the terminal clean, send traces to a file
        setup_logging("DEBUG", file="checkbox-search.log")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    _root_logger.addHandler(stream_handler)

    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "source", "prompt")

    Returns:
        Logger instance
    """
    if name.startswith("checkbox_search."):
        return logging.getLogger(name)
    return logging.getLogger(f"checkbox_search.{name}")


def set_level(level: str | int) -> None:
    """
    Change the prompt's log level without replacing its handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _root_logger.setLevel(level)
    for handler in _root_logger.handlers:
        handler.setLevel(level)


def disable() -> None:
    """Silence all prompt logging, e.g. while a full-screen host owns stderr."""
    _root_logger.disabled = True


def enable() -> None:
    """Re-enable prompt logging after :func:`disable`."""
    _root_logger.disabled = False
