"""
Resource error handling utilities.

Provides a decorator for consistent error handling across resource
endpoints: every failure is logged with context and answered with an
error envelope.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status

from mflix_api.api.routers.router_utils.responses import error_response
from mflix_api.core.exceptions import (
    DatabaseConnectionError,
    InvalidIdentifierError,
    InvalidParameterError,
    MflixError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


def error_kind(error: Exception) -> str:
    """Short error name exposed to clients, e.g. NotFound."""
    name = type(error).__name__
    return name[: -len("Error")] if name.endswith("Error") else name


def handle_resource_errors(func: F) -> F:
    """
    Decorator to turn resource errors into error envelopes.

    This centralizes:
    - Logging of errors with context at the right level
    - Mapping each error kind to its HTTP status
    - Hiding internal details of unexpected failures
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except NotFoundError as e:
            logger.warning(
                "Resource not found",
                extra={"resource": e.resource, "details": e.details},
            )
            return error_response(e.http_status, e.message, error_kind(e))

        except (InvalidIdentifierError, InvalidParameterError, ValidationError) as e:
            logger.warning(
                "Invalid request",
                extra={"error_type": type(e).__name__, "details": e.details},
            )
            return error_response(e.http_status, e.message, error_kind(e))

        except DatabaseConnectionError as e:
            logger.error(
                "Database unavailable",
                extra={"details": e.details},
            )
            return error_response(e.http_status, e.message, error_kind(e))

        except MflixError as e:
            logger.error(
                "Resource operation failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            return error_response(e.http_status, e.message, error_kind(e))

        except Exception as e:
            logger.exception(
                "Unexpected failure in resource operation",
                extra={"error_type": type(e).__name__},
            )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                INTERNAL_ERROR_MESSAGE,
                "InternalServerError",
            )

    return wrapper  # type: ignore
