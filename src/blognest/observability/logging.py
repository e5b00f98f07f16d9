"""Structured logging configuration with session ID support.

This module sets up structured logging using structlog on top of the standard
library logging module. Logs are written to stderr so they never interleave
with the interactive menu on stdout.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any, Optional

import structlog

# Context variable holding the id of the current CLI run
session_id_var: ContextVar[Optional[str]] = ContextVar("session_id", default=None)


def add_session_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add session ID to log event if available.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with session_id
    """
    session_id = session_id_var.get()
    if session_id:
        event_dict["session_id"] = session_id
    return event_dict


def setup_logging(log_level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output logs in JSON format; otherwise use console format

    Raises:
        ValueError: If log_level is not a known level name

    Example:
        >>> setup_logging(log_level="INFO")
        >>> logger = get_logger(__name__)
        >>> logger.info("posts_loaded", count=3)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_session_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=shared_processors + renderers,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def set_session_id(session_id: str) -> None:
    """Set the session ID for the current context.

    Example:
        >>> set_session_id("run-1234")
        >>> logger.info("menu_started")  # Will include session_id
    """
    session_id_var.set(session_id)


def clear_session_id() -> None:
    """Clear the session ID from the current context."""
    session_id_var.set(None)
