"""
Global exception handlers.

Covers failures raised outside route bodies (dependencies, body parsing)
so they are answered with the same envelope as route errors.

Dependencies: fastapi, mflix_api.core.exceptions
System role: App-wide error to envelope mapping
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from mflix_api.api.routers.router_utils.error_handling import (
    INTERNAL_ERROR_MESSAGE,
    error_kind,
)
from mflix_api.api.routers.router_utils.responses import error_response
from mflix_api.core.exceptions import MflixError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_mflix_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_mflix_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MflixError)
    async def mflix_error_handler(request: Request, exc: MflixError):
        """Handle domain errors raised in dependencies, e.g. on connect."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"path": request.url.path, "details": exc.details},
        )
        return error_response(exc.http_status, exc.message, error_kind(exc))


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies and parameters are client errors (400)."""
        errors = exc.errors()
        logger.warning(
            f"Validation error on {request.url.path}",
            extra={"errors": [{"loc": e.get("loc"), "msg": e.get("msg")} for e in errors]},
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            _validation_message(errors),
            "Validation",
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {type(exc).__name__}",
            exc_info=True,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_ERROR_MESSAGE,
            "InternalServerError",
        )


def _validation_message(errors: list[dict]) -> str:
    if not errors:
        return "Invalid request data"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    if location:
        return f"Invalid request data: {location}: {message}"
    return f"Invalid request data: {message}"
