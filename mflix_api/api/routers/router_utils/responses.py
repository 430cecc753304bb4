"""
Response shaping utilities.

Wraps results and errors in the uniform response envelope so every
endpoint answers with the same top-level structure.

Dependencies: fastapi, mflix_api.models.common
System role: Envelope construction for HTTP responses
"""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from mflix_api.boundary.db.CRUD.base_crud import BulkOutcome, UpdateOutcome
from mflix_api.boundary.db.query_builder import PaginationResult
from mflix_api.models.common import Envelope, PaginationLinks, PaginationMeta


def envelope_response(envelope: Envelope) -> JSONResponse:
    return JSONResponse(status_code=envelope.status, content=envelope.to_content())


def success_response(
    data: Any = None,
    message: str | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Build a success envelope.

    Args:
        data: Payload (record, list of records or plain dict)
        message: Optional human-readable message
        status_code: HTTP status (200 unless overridden)

    Returns:
        JSONResponse: Envelope with status, message and data
    """
    return envelope_response(Envelope(status=status_code, message=message, data=data))


def created_response(data: Any, message: str | None = None) -> JSONResponse:
    return success_response(data, message, status_code=status.HTTP_201_CREATED)


def paginated_response(
    items: list[Any],
    pagination: PaginationResult,
    message: str | None = None,
) -> JSONResponse:
    """
    Build a listing envelope with meta and links.

    Args:
        items: Records of the current page
        pagination: Page metadata and navigation links
        message: Optional message

    Returns:
        JSONResponse: Envelope with data, meta and links
    """
    envelope = Envelope(
        status=status.HTTP_200_OK,
        message=message,
        data=items,
        meta=PaginationMeta.model_validate(pagination.meta()),
        links=PaginationLinks(**pagination.links.as_dict()),
    )
    return envelope_response(envelope)


def update_response(data: Any, outcome: UpdateOutcome | BulkOutcome, message: str) -> JSONResponse:
    """Success envelope carrying matchedCount and modifiedCount."""
    envelope = Envelope(
        status=status.HTTP_200_OK,
        message=message,
        data=data,
        matched_count=outcome.matched_count,
        modified_count=outcome.modified_count,
    )
    return envelope_response(envelope)


def delete_response(deleted_count: int, message: str) -> JSONResponse:
    envelope = Envelope(
        status=status.HTTP_200_OK,
        message=message,
        deleted_count=deleted_count,
    )
    return envelope_response(envelope)


def error_response(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    """
    Build an error envelope.

    Args:
        status_code: HTTP status
        message: Human-readable message, safe to show to clients
        error: Short machine-readable error kind

    Returns:
        JSONResponse: Envelope with status, message and error
    """
    return envelope_response(Envelope(status=status_code, message=message, error=error))


def listing_base_url(request: Request) -> str:
    """Request URL without its query string, used as the base of pagination links."""
    return str(request.url.replace(query=""))
