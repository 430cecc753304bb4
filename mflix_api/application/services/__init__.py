"""Application services: use case orchestration per resource."""

from mflix_api.application.services.comment_service import CommentService
from mflix_api.application.services.movie_service import MovieService
from mflix_api.application.services.theater_service import TheaterService

__all__ = ["CommentService", "MovieService", "TheaterService"]
