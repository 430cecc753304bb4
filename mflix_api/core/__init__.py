"""Core domain layer: exception taxonomy."""

from mflix_api.core.exceptions import (
    DatabaseConnectionError,
    InvalidIdentifierError,
    InvalidParameterError,
    MflixError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "DatabaseConnectionError",
    "InvalidIdentifierError",
    "InvalidParameterError",
    "MflixError",
    "NotFoundError",
    "ValidationError",
]
