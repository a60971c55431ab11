"""Structured logging configuration.

This module initializes structlog with a stable JSON-lines format.
Log events go to stderr so stdout carries only graph output.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output on stderr.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger(name)


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    """Bind output to the current ``sys.stderr`` at log time."""
    return structlog.PrintLogger(file=sys.stderr)
