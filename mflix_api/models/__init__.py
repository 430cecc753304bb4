"""Pydantic request/response schemas."""

from mflix_api.models.comment import CommentResponse, CreateCommentRequest, UpdateCommentRequest
from mflix_api.models.common import (
    BulkDeleteRequest,
    BulkUpdateRequest,
    Envelope,
    PaginationLinks,
    PaginationMeta,
)
from mflix_api.models.movie import CreateMovieRequest, MovieResponse, UpdateMovieRequest
from mflix_api.models.theater import (
    CreateTheaterRequest,
    TheaterResponse,
    UpdateTheaterRequest,
)

__all__ = [
    "BulkDeleteRequest",
    "BulkUpdateRequest",
    "CommentResponse",
    "CreateCommentRequest",
    "CreateMovieRequest",
    "CreateTheaterRequest",
    "Envelope",
    "MovieResponse",
    "PaginationLinks",
    "PaginationMeta",
    "TheaterResponse",
    "UpdateCommentRequest",
    "UpdateMovieRequest",
    "UpdateTheaterRequest",
]
