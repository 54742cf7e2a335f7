"""Structured logging configuration.

This module initializes structlog with a stable JSON line format.
Warnings raised by the pairing engine flow through these loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_DEFAULT_LEVEL = logging.INFO


def configure_logging(level: str | int = _DEFAULT_LEVEL) -> None:
    """Configure structlog processors and minimum level.

    Args:
        level: Level name (``"debug"``, ``"warning"``) or stdlib level number.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger bound to the module name.
    """
    return structlog.get_logger(name)


def _stderr_logger_factory(*args: Any) -> Any:
    """Create a print logger bound to the current ``sys.stderr``."""
    return structlog.PrintLogger(file=sys.stderr)


def _resolve_level(level: str | int) -> int:
    """Translate a level name into a stdlib level number."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if isinstance(resolved, int):
        return resolved
    return _DEFAULT_LEVEL


configure_logging()
