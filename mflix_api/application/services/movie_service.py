"""
Movie service orchestrator.

Coordinates movie listing, lookups and mutations.

Dependencies: mflix_api.boundary.db
System role: Movie use case orchestration
"""

import logging
from typing import Any, Mapping

from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.application.services.service_utils import (
    mapped_outcome,
    matched,
    require_changes,
    require_filter,
)
from mflix_api.boundary.db.CRUD.base_crud import BulkOutcome, UpdateOutcome
from mflix_api.boundary.db.CRUD.movie_crud import movie_crud
from mflix_api.boundary.db.identifiers import identifier_resolver, validate
from mflix_api.boundary.db.query_builder import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    PaginationResult,
    QueryBuilder,
    paginate,
)
from mflix_api.core.exceptions import MflixError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class MovieService:
    """Movie service orchestrator."""

    def __init__(
        self,
        db: AsyncDatabase,
        max_limit: int = MAX_LIMIT,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        """
        Initialize movie service with the shared database handle.

        Args:
            db: Async pymongo database
            max_limit: Largest accepted page size
            default_limit: Page size when none is requested
        """
        self.db = db
        self.query_builder = QueryBuilder(
            search_field="title",
            default_sort_field="title",
            max_limit=max_limit,
            default_limit=default_limit,
        )

    async def list_movies(
        self,
        base_url: str,
        page: int | str | None = 1,
        limit: int | str | None = None,
        search: str | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
    ) -> tuple[list[dict], PaginationResult]:
        """
        Get one page of movies.

        Args:
            base_url: Listing URL used for navigation links
            page: 1-based page number
            limit: Page size
            search: Case-insensitive substring matched against title
            sort_field: Field to sort on (default title)
            sort_order: "asc" or "desc"

        Returns:
            tuple[list[dict], PaginationResult]: Movies and page metadata

        Raises:
            InvalidParameterError: page or limit out of range
        """
        descriptor = self.query_builder.build_list_query(
            page=page,
            limit=limit,
            search=search,
            sort_field=sort_field,
            sort_order=sort_order,
        )
        try:
            records, total = await movie_crud.list(self.db, descriptor)
        except Exception as e:
            logger.error("Failed to list movies", extra={"error": str(e)})
            raise

        pagination = paginate(
            descriptor,
            total,
            base_url,
            {"search": search, "sortField": sort_field, "sortOrder": sort_order},
        )
        return [movie_crud.to_response(record) for record in records], pagination

    async def get_movie(self, movie_id: str) -> dict:
        """
        Get movie by ID.

        Raises:
            InvalidIdentifierError: movie_id is malformed
            NotFoundError: No such movie
        """
        identifier = validate(movie_id, "movie_id")
        record = await movie_crud.get(self.db, {"_id": identifier.as_object_id()})
        return movie_crud.to_response(record)

    async def create_movie(self, fields: Mapping[str, Any]) -> dict:
        """
        Create a movie.

        Raises:
            ValidationError: title missing
        """
        try:
            record = await movie_crud.create(self.db, fields)
        except MflixError:
            raise
        except Exception as e:
            logger.error(
                "Failed to create movie",
                extra={"error": str(e), "title": fields.get("title")},
            )
            raise
        logger.info("Movie created", extra={"movie_id": str(record["_id"])})
        return movie_crud.to_response(record)

    async def update_movie(self, movie_id: str, delta: Mapping[str, Any] | None) -> UpdateOutcome:
        """
        Update a movie, retrying with the raw identifier when the canonical one misses.

        Returns:
            UpdateOutcome: Counts and the updated movie in its external shape

        Raises:
            InvalidIdentifierError: movie_id is malformed
            ValidationError: Nothing to update
            NotFoundError: No representation of movie_id matched
        """
        identifier = validate(movie_id, "movie_id")
        changes = movie_crud.normalize_delta(require_changes(movie_crud, delta))

        async def attempt(filter_: dict) -> UpdateOutcome:
            return await movie_crud.update(self.db, filter_, changes)

        resolution = await identifier_resolver.resolve_single_for_update(
            identifier.raw, "_id", attempt, count=matched
        )
        if resolution is None:
            raise NotFoundError("Movie", {"movie_id": movie_id})
        return mapped_outcome(movie_crud, resolution.outcome)

    async def delete_movie(self, movie_id: str) -> int:
        """
        Delete a movie by its canonical identifier.

        Raises:
            InvalidIdentifierError: movie_id is malformed
            NotFoundError: Nothing was deleted
        """
        identifier = validate(movie_id, "movie_id")
        deleted = await movie_crud.delete(self.db, {"_id": identifier.as_object_id()})
        if deleted == 0:
            raise NotFoundError("Movie", {"movie_id": movie_id})
        logger.info("Movie deleted", extra={"movie_id": str(identifier)})
        return deleted

    async def bulk_update_movies(
        self,
        filter: Mapping[str, Any] | None,
        update: Mapping[str, Any] | None,
    ) -> BulkOutcome:
        """Apply update to every movie matching filter."""
        predicate = require_filter(filter)
        if not update:
            raise ValidationError("An update object is required", field="update")
        changes = movie_crud.normalize_delta(require_changes(movie_crud, update))
        return await movie_crud.bulk_update(self.db, predicate, changes)

    async def bulk_delete_movies(self, filter: Mapping[str, Any] | None) -> int:
        """Delete every movie matching filter."""
        return await movie_crud.bulk_delete(self.db, require_filter(filter))
