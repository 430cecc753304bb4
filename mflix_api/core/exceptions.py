"""
Exception hierarchy for the mflix API.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class MflixError(Exception):
    """Base exception for all mflix API errors."""

    http_status: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidIdentifierError(MflixError):
    """Raised when an identifier does not have the 24-hex-character shape."""

    http_status = 400

    def __init__(self, raw: Any, field: str = "id") -> None:
        """
        Initialize invalid identifier error.

        Args:
            raw: The rejected identifier value
            field: Name of the parameter or document field carrying it
        """
        super().__init__(f"Invalid {field}: {raw!r}", {"field": field})
        self.raw = raw
        self.field = field


class InvalidParameterError(MflixError):
    """Raised when pagination or sort parameters are out of range."""

    http_status = 400

    def __init__(self, message: str, parameter: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["parameter"] = parameter
        super().__init__(message, details)
        self.parameter = parameter


class ValidationError(MflixError):
    """Raised when input validation fails."""

    http_status = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class NotFoundError(MflixError):
    """Raised when no record matches, after any identifier fallback."""

    http_status = 404

    def __init__(self, resource: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"{resource} not found", details)
        self.resource = resource


class DatabaseConnectionError(MflixError, ConnectionError):
    """Raised when the store is unreachable or rejects the credentials."""

    http_status = 500
