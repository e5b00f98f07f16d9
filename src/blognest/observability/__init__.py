"""Observability module for BlogNest.

Provides structured logging with a per-run session ID.
"""

from blognest.observability.logging import (
    clear_session_id,
    get_logger,
    set_session_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_session_id",
    "clear_session_id",
]
