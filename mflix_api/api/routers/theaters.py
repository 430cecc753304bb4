"""
Theater API endpoints.

Routes:
- GET /theaters - List theaters (page, limit, search)
- POST /theaters - Create theater
- GET /theaters/{theater_id} - Get single theater
- PUT /theaters/{theater_id} - Update theater
- DELETE /theaters/{theater_id} - Delete theater

Dependencies: mflix_api.application.services, mflix_api.models
System role: Theater management HTTP API
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from mflix_api.api.deps.dependencies import get_theater_service
from mflix_api.api.routers.router_utils import (
    created_response,
    delete_response,
    handle_resource_errors,
    listing_base_url,
    paginated_response,
    success_response,
    update_response,
)
from mflix_api.api.routers.router_utils.resource_responses import (
    map_theater_to_response,
    map_theaters_to_response,
)
from mflix_api.application.services.theater_service import TheaterService
from mflix_api.models.theater import CreateTheaterRequest, UpdateTheaterRequest

router = APIRouter(prefix="/theaters", tags=["theaters"])


@router.get("")
@handle_resource_errors
async def list_theaters(
    request: Request,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    search: str | None = Query(None, description="Case-insensitive name substring"),
    theater_service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    """List theaters sorted by name."""
    theaters, pagination = await theater_service.list_theaters(
        base_url=listing_base_url(request),
        page=page,
        limit=limit,
        search=search,
    )
    return paginated_response(map_theaters_to_response(theaters), pagination)


@router.post("", status_code=201)
@handle_resource_errors
async def create_theater(
    body: CreateTheaterRequest,
    theater_service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    """
    Create a theater.

    Raises:
        400: name missing
    """
    theater = await theater_service.create_theater(body.model_dump(exclude_none=True))
    return created_response(map_theater_to_response(theater), "Theater created successfully")


@router.get("/{theater_id}")
@handle_resource_errors
async def get_theater(
    theater_id: str,
    theater_service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    theater = await theater_service.get_theater(theater_id)
    return success_response(map_theater_to_response(theater))


@router.put("/{theater_id}")
@handle_resource_errors
async def update_theater(
    theater_id: str,
    body: UpdateTheaterRequest,
    theater_service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    """
    Update theater fields.

    Raises:
        400: Malformed theater_id or empty body
        404: Theater not found
    """
    outcome = await theater_service.update_theater(theater_id, body.model_dump(exclude_unset=True))
    return update_response(
        map_theater_to_response(outcome.record) if outcome.record else None,
        outcome,
        "Theater updated successfully",
    )


@router.delete("/{theater_id}")
@handle_resource_errors
async def delete_theater(
    theater_id: str,
    theater_service: TheaterService = Depends(get_theater_service),
) -> JSONResponse:
    deleted = await theater_service.delete_theater(theater_id)
    return delete_response(deleted, "Theater deleted successfully")
