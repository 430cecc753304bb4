"""
Resource response mapping utilities.

Transforms service-layer dictionaries into Pydantic response models.

Dependencies: mflix_api.models
System role: Resource response transformation
"""

from typing import Any

from mflix_api.models.comment import CommentResponse
from mflix_api.models.movie import MovieResponse
from mflix_api.models.theater import TheaterResponse


def map_movie_to_response(movie_data: dict[str, Any]) -> MovieResponse:
    """
    Transform movie data dictionary into MovieResponse.

    Args:
        movie_data: Dictionary with id, title, year, plot, genres, cast,
            directors, created_at, updated_at

    Returns:
        MovieResponse: Pydantic model for API response
    """
    return MovieResponse(**movie_data)


def map_movies_to_response(movies_data: list[dict[str, Any]]) -> list[MovieResponse]:
    return [map_movie_to_response(movie) for movie in movies_data]


def map_comment_to_response(comment_data: dict[str, Any]) -> CommentResponse:
    """
    Transform comment data dictionary into CommentResponse.

    Args:
        comment_data: Dictionary with id, name, email, text, parent_id, date

    Returns:
        CommentResponse: Pydantic model for API response
    """
    return CommentResponse(**comment_data)


def map_comments_to_response(comments_data: list[dict[str, Any]]) -> list[CommentResponse]:
    return [map_comment_to_response(comment) for comment in comments_data]


def map_theater_to_response(theater_data: dict[str, Any]) -> TheaterResponse:
    """
    Transform theater data dictionary into TheaterResponse.

    Args:
        theater_data: Dictionary with id, name, address, location, timestamps

    Returns:
        TheaterResponse: Pydantic model for API response
    """
    return TheaterResponse(**theater_data)


def map_theaters_to_response(theaters_data: list[dict[str, Any]]) -> list[TheaterResponse]:
    return [map_theater_to_response(theater) for theater in theaters_data]
