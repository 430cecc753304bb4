"""
CRUD operations for the document collections.

Exports base CRUD class and collection-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from mflix_api.boundary.db.CRUD import movie_crud

    movie = await movie_crud.get(db, {"_id": movie_id})
"""

from mflix_api.boundary.db.CRUD.base_crud import BaseCRUD, BulkOutcome, UpdateOutcome
from mflix_api.boundary.db.CRUD.comment_crud import CommentCRUD, comment_crud
from mflix_api.boundary.db.CRUD.movie_crud import MovieCRUD, movie_crud
from mflix_api.boundary.db.CRUD.theater_crud import TheaterCRUD, theater_crud

__all__ = [
    "BaseCRUD",
    "BulkOutcome",
    "UpdateOutcome",
    "CommentCRUD",
    "comment_crud",
    "MovieCRUD",
    "movie_crud",
    "TheaterCRUD",
    "theater_crud",
]
