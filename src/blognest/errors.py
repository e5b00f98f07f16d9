"""Custom exceptions for BlogNest.

This module defines the exception hierarchy for post management errors,
providing structured error handling with error codes and context.
"""

from pathlib import Path
from typing import Any, Optional, Union


class BlogNestError(Exception):
    """Base exception for all BlogNest errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context information about the error
    """

    def __init__(
        self, message: str, error_code: str, context: Optional[dict[str, Any]] = None
    ) -> None:
        """Initialize BlogNest error.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code
            context: Optional additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class PersistenceError(BlogNestError):
    """Raised when the backing file cannot be read or written.

    The in-memory store is never modified by the gateway when this is raised,
    so callers can report it and carry on.
    """

    def __init__(self, path: Union[str, Path], operation: str, reason: str) -> None:
        """Initialize persistence error.

        Args:
            path: Path of the backing file
            operation: Either "load" or "save"
            reason: Description of the underlying cause
        """
        super().__init__(
            message=reason,
            error_code="persistence_failed",
            context={"path": str(path), "operation": operation},
        )
        self.path = Path(path)
        self.operation = operation
        self.reason = reason


class ExportError(BlogNestError):
    """Raised when the text export cannot be written."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        """Initialize export error.

        Args:
            path: Requested export path
            reason: Description of the underlying cause
        """
        super().__init__(
            message=reason,
            error_code="export_failed",
            context={"path": str(path)},
        )
        self.path = Path(path)
        self.reason = reason


class InvalidInputError(BlogNestError):
    """Raised when user input is rejected before any state change."""

    def __init__(self, field: str, reason: str) -> None:
        """Initialize invalid input error.

        Args:
            field: Name of the offending input
            reason: Why the input was rejected
        """
        super().__init__(
            message=reason,
            error_code="invalid_input",
            context={"field": field},
        )
        self.field = field
        self.reason = reason
