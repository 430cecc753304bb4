"""
Comment API endpoints.

Routes:
- GET /comments - List comments, optionally for one movie (movie_id)
- POST /comments - Create comment
- GET /comments/{comment_id} - Get single comment
- PUT /comments/{comment_id} - Update comment
- DELETE /comments/{comment_id} - Delete comment
- GET /movies/{movie_id}/comments - List comments of a movie
- POST /movies/{movie_id}/comments - Create comment on a movie
- GET /movies/{movie_id}/comments/{comment_id} - Get comment of a movie
- PUT /movies/{movie_id}/comments/{comment_id} - Update comment of a movie
- DELETE /movies/{movie_id}/comments/{comment_id} - Delete comment of a movie

Dependencies: mflix_api.application.services, mflix_api.models
System role: Comment management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from mflix_api.api.deps.dependencies import get_comment_service
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
    map_comment_to_response,
    map_comments_to_response,
)
from mflix_api.application.services.comment_service import CommentService
from mflix_api.models.comment import CreateCommentRequest, UpdateCommentRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["comments"])


@router.get("/comments")
@handle_resource_errors
async def list_comments(
    request: Request,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    search: str | None = Query(None, description="Case-insensitive text substring"),
    sort_field: str | None = Query(None, alias="sortField"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    movie_id: str | None = Query(None, description="Restrict to one movie"),
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    """
    List comments with pagination.

    Raises:
        400: page, limit or movie_id invalid
    """
    comments, pagination = await comment_service.list_comments(
        base_url=listing_base_url(request),
        page=page,
        limit=limit,
        search=search,
        sort_field=sort_field,
        sort_order=sort_order,
        movie_id=movie_id,
    )
    return paginated_response(map_comments_to_response(comments), pagination)


@router.post("/comments", status_code=201)
@handle_resource_errors
async def create_comment(
    body: CreateCommentRequest,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    """
    Create a comment; name, email, text and movie_id are required.

    Raises:
        400: Missing field or malformed movie_id
    """
    comment = await comment_service.create_comment(
        body.model_dump(exclude_none=True), require_email=True
    )
    return created_response(map_comment_to_response(comment), "Comment created successfully")


@router.get("/comments/{comment_id}")
@handle_resource_errors
async def get_comment(
    comment_id: str,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    comment = await comment_service.get_comment(comment_id)
    return success_response(map_comment_to_response(comment))


@router.put("/comments/{comment_id}")
@handle_resource_errors
async def update_comment(
    comment_id: str,
    body: UpdateCommentRequest,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    """
    Update comment fields; movie_id and date are never changed.

    Raises:
        400: Malformed comment_id or empty body
        404: Comment not found
    """
    outcome = await comment_service.update_comment(comment_id, body.model_dump(exclude_unset=True))
    return update_response(
        map_comment_to_response(outcome.record) if outcome.record else None,
        outcome,
        "Comment updated successfully",
    )


@router.delete("/comments/{comment_id}")
@handle_resource_errors
async def delete_comment(
    comment_id: str,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    deleted = await comment_service.delete_comment(comment_id)
    return delete_response(deleted, "Comment deleted successfully")


@router.get("/movies/{movie_id}/comments")
@handle_resource_errors
async def list_movie_comments(
    movie_id: str,
    request: Request,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    search: str | None = Query(None),
    sort_field: str | None = Query(None, alias="sortField"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    """
    List the comments of a movie.

    The movie is not looked up; an unknown movie yields an empty page.

    Raises:
        400: Malformed movie_id, page or limit
    """
    comments, pagination = await comment_service.list_movie_comments(
        movie_id,
        base_url=listing_base_url(request),
        page=page,
        limit=limit,
        search=search,
        sort_field=sort_field,
        sort_order=sort_order,
    )
    logger.info(
        "Movie comments retrieved",
        extra={"movie_id": movie_id, "count": len(comments)},
    )
    return paginated_response(map_comments_to_response(comments), pagination)


@router.post("/movies/{movie_id}/comments", status_code=201)
@handle_resource_errors
async def create_movie_comment(
    movie_id: str,
    body: CreateCommentRequest,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    """
    Create a comment on a movie; the movie_id in the path wins over the body.

    Raises:
        400: Missing name/text or malformed movie_id
    """
    comment = await comment_service.create_movie_comment(
        movie_id, body.model_dump(exclude_none=True)
    )
    return created_response(map_comment_to_response(comment), "Comment created successfully")


@router.get("/movies/{movie_id}/comments/{comment_id}")
@handle_resource_errors
async def get_movie_comment(
    movie_id: str,
    comment_id: str,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    comment = await comment_service.get_movie_comment(movie_id, comment_id)
    return success_response(map_comment_to_response(comment))


@router.put("/movies/{movie_id}/comments/{comment_id}")
@handle_resource_errors
async def update_movie_comment(
    movie_id: str,
    comment_id: str,
    body: UpdateCommentRequest,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    """
    Update a comment of a movie.

    Raises:
        400: Malformed identifier or empty body
        404: No identifier representation matched
    """
    outcome = await comment_service.update_movie_comment(
        movie_id, comment_id, body.model_dump(exclude_unset=True)
    )
    return update_response(
        map_comment_to_response(outcome.record) if outcome.record else None,
        outcome,
        "Comment updated successfully",
    )


@router.delete("/movies/{movie_id}/comments/{comment_id}")
@handle_resource_errors
async def delete_movie_comment(
    movie_id: str,
    comment_id: str,
    comment_service: CommentService = Depends(get_comment_service),
) -> JSONResponse:
    deleted = await comment_service.delete_movie_comment(movie_id, comment_id)
    return delete_response(deleted, "Comment deleted successfully")
