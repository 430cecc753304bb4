"""
Movie API endpoints.

Routes:
- GET /movies - List movies (page, limit, search, sortField, sortOrder)
- POST /movies - Create movie
- PUT /movies - Bulk update movies matching a filter
- DELETE /movies - Bulk delete movies matching a filter
- GET /movies/{movie_id} - Get single movie
- PUT /movies/{movie_id} - Update movie
- DELETE /movies/{movie_id} - Delete movie

Dependencies: mflix_api.application.services, mflix_api.models
System role: Movie management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from mflix_api.api.deps.dependencies import get_movie_service
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
    map_movie_to_response,
    map_movies_to_response,
)
from mflix_api.application.services.movie_service import MovieService
from mflix_api.models.common import BulkDeleteRequest, BulkUpdateRequest
from mflix_api.models.movie import CreateMovieRequest, UpdateMovieRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("")
@handle_resource_errors
async def list_movies(
    request: Request,
    page: str | None = Query(None, description="1-based page number"),
    limit: str | None = Query(None, description="Page size, 1 to 50"),
    search: str | None = Query(None, description="Case-insensitive title substring"),
    sort_field: str | None = Query(None, alias="sortField"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    movie_service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    """
    List movies with pagination.

    Args:
        request: Incoming request, used for navigation links
        page: Page number (default 1)
        limit: Page size (default 10)
        search: Title filter
        sort_field: Field to sort on (default title)
        sort_order: asc or desc
        movie_service: Injected MovieService

    Returns:
        JSONResponse: Envelope with data, meta and links

    Raises:
        400: page or limit invalid
    """
    movies, pagination = await movie_service.list_movies(
        base_url=listing_base_url(request),
        page=page,
        limit=limit,
        search=search,
        sort_field=sort_field,
        sort_order=sort_order,
    )
    logger.info(
        "Movies retrieved successfully",
        extra={"count": len(movies), "page": pagination.current_page},
    )
    return paginated_response(map_movies_to_response(movies), pagination)


@router.post("", status_code=201)
@handle_resource_errors
async def create_movie(
    body: CreateMovieRequest,
    movie_service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    """
    Create a movie.

    Raises:
        400: title missing
    """
    movie = await movie_service.create_movie(body.model_dump(exclude_none=True))
    return created_response(map_movie_to_response(movie), "Movie created successfully")


@router.put("")
@handle_resource_errors
async def bulk_update_movies(
    body: BulkUpdateRequest,
    movie_service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    """Set the given fields on every movie matching filter."""
    outcome = await movie_service.bulk_update_movies(body.filter, body.update)
    return update_response(
        None,
        outcome,
        f"{outcome.modified_count} movie(s) updated",
    )


@router.delete("")
@handle_resource_errors
async def bulk_delete_movies(
    body: BulkDeleteRequest,
    movie_service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    """Delete every movie matching filter."""
    deleted = await movie_service.bulk_delete_movies(body.filter)
    return delete_response(deleted, f"{deleted} movie(s) deleted")


@router.get("/{movie_id}")
@handle_resource_errors
async def get_movie(
    movie_id: str,
    movie_service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    """
    Get movie by ID.

    Raises:
        400: Malformed movie_id
        404: Movie not found
    """
    movie = await movie_service.get_movie(movie_id)
    return success_response(map_movie_to_response(movie))


@router.put("/{movie_id}")
@handle_resource_errors
async def update_movie(
    movie_id: str,
    body: UpdateMovieRequest,
    movie_service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    """
    Update movie fields.

    Raises:
        400: Malformed movie_id or empty body
        404: Movie not found
    """
    outcome = await movie_service.update_movie(movie_id, body.model_dump(exclude_unset=True))
    return update_response(
        map_movie_to_response(outcome.record) if outcome.record else None,
        outcome,
        "Movie updated successfully",
    )


@router.delete("/{movie_id}")
@handle_resource_errors
async def delete_movie(
    movie_id: str,
    movie_service: MovieService = Depends(get_movie_service),
) -> JSONResponse:
    """
    Delete movie.

    Raises:
        400: Malformed movie_id
        404: Movie not found
    """
    deleted = await movie_service.delete_movie(movie_id)
    return delete_response(deleted, "Movie deleted successfully")
