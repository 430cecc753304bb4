"""
Comment service orchestrator.

Coordinates comment operations, both standalone and scoped to a movie.
Comments scoped to a movie are mutated through the identifier resolver,
because the stored _id and movie_id may each be canonical or raw.

Dependencies: mflix_api.boundary.db
System role: Comment use case orchestration
"""

import logging
from dataclasses import replace
from typing import Any, Mapping

from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.application.services.service_utils import (
    mapped_outcome,
    matched,
    require_changes,
)
from mflix_api.boundary.db.CRUD.base_crud import UpdateOutcome
from mflix_api.boundary.db.CRUD.comment_crud import PARENT_FIELD, comment_crud
from mflix_api.boundary.db.identifiers import identifier_resolver, validate
from mflix_api.boundary.db.query_builder import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    PaginationResult,
    QueryBuilder,
    paginate,
)
from mflix_api.core.exceptions import MflixError, NotFoundError

logger = logging.getLogger(__name__)

STANDALONE_REQUIRED = ("name", "email", "text", PARENT_FIELD)


class CommentService:
    """Comment service orchestrator."""

    def __init__(
        self,
        db: AsyncDatabase,
        max_limit: int = MAX_LIMIT,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.db = db
        self.query_builder = QueryBuilder(
            search_field="text",
            default_sort_field="date",
            max_limit=max_limit,
            default_limit=default_limit,
        )

    async def _list(
        self,
        base_url: str,
        page: int | str | None,
        limit: int | str | None,
        search: str | None,
        sort_field: str | None,
        sort_order: str | None,
        movie_id: str | None,
        link_params: dict[str, Any],
    ) -> tuple[list[dict], PaginationResult]:
        descriptor = self.query_builder.build_list_query(
            page=page,
            limit=limit,
            search=search,
            sort_field=sort_field,
            sort_order=sort_order,
        )
        if movie_id is not None:
            scope = self.query_builder.build_scoped_filter(
                PARENT_FIELD, validate(movie_id, PARENT_FIELD)
            )
            descriptor = replace(descriptor, filter={**descriptor.filter, **scope})

        try:
            records, total = await comment_crud.list(self.db, descriptor)
        except Exception as e:
            logger.error(
                "Failed to list comments",
                extra={"error": str(e), "movie_id": movie_id},
            )
            raise

        params = {"search": search, "sortField": sort_field, "sortOrder": sort_order, **link_params}
        pagination = paginate(descriptor, total, base_url, params)
        return [comment_crud.to_response(record) for record in records], pagination

    async def list_comments(
        self,
        base_url: str,
        page: int | str | None = 1,
        limit: int | str | None = None,
        search: str | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
        movie_id: str | None = None,
    ) -> tuple[list[dict], PaginationResult]:
        """
        Get one page of comments, optionally restricted to one movie.

        movie_id is repeated as a query parameter on the navigation links.

        Raises:
            InvalidParameterError: page or limit out of range
            InvalidIdentifierError: movie_id is malformed
        """
        return await self._list(
            base_url, page, limit, search, sort_field, sort_order,
            movie_id, {"movie_id": movie_id},
        )

    async def list_movie_comments(
        self,
        movie_id: str,
        base_url: str,
        page: int | str | None = 1,
        limit: int | str | None = None,
        search: str | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
    ) -> tuple[list[dict], PaginationResult]:
        """Get one page of the comments of a movie; the movie itself is not checked."""
        return await self._list(
            base_url, page, limit, search, sort_field, sort_order, movie_id, {},
        )

    async def get_comment(self, comment_id: str) -> dict:
        """
        Get comment by ID.

        Raises:
            InvalidIdentifierError: comment_id is malformed
            NotFoundError: No such comment
        """
        identifier = validate(comment_id, "comment_id")
        record = await comment_crud.get(self.db, {"_id": identifier.as_object_id()})
        return comment_crud.to_response(record)

    async def get_movie_comment(self, movie_id: str, comment_id: str) -> dict:
        """Get a comment that belongs to movie_id."""
        parent = validate(movie_id, PARENT_FIELD)
        identifier = validate(comment_id, "comment_id")
        record = await comment_crud.get(
            self.db,
            {"_id": identifier.as_object_id(), PARENT_FIELD: parent.as_object_id()},
        )
        return comment_crud.to_response(record)

    async def create_comment(self, fields: Mapping[str, Any], require_email: bool = False) -> dict:
        """
        Create a comment.

        The movie_id reference is stored without checking that the movie exists.

        Args:
            fields: name, email, text, movie_id
            require_email: Also require email (standalone endpoint)

        Raises:
            ValidationError: A required field is missing
            InvalidIdentifierError: movie_id is malformed
        """
        required = STANDALONE_REQUIRED if require_email else None
        try:
            record = await comment_crud.create(self.db, fields, required=required)
        except MflixError:
            raise
        except Exception as e:
            logger.error("Failed to create comment", extra={"error": str(e)})
            raise
        logger.info(
            "Comment created",
            extra={"comment_id": str(record["_id"]), "movie_id": str(record.get(PARENT_FIELD))},
        )
        return comment_crud.to_response(record)

    async def create_movie_comment(self, movie_id: str, fields: Mapping[str, Any]) -> dict:
        """Create a comment under the movie named in the path."""
        validate(movie_id, PARENT_FIELD)
        return await self.create_comment({**fields, PARENT_FIELD: movie_id})

    async def update_comment(self, comment_id: str, delta: Mapping[str, Any] | None) -> UpdateOutcome:
        """
        Update a comment by its own identifier, falling back to the raw form.

        Raises:
            InvalidIdentifierError: comment_id is malformed
            ValidationError: Nothing to update
            NotFoundError: No representation matched
        """
        identifier = validate(comment_id, "comment_id")
        changes = require_changes(comment_crud, delta)

        async def attempt(filter_: dict) -> UpdateOutcome:
            return await comment_crud.update(self.db, filter_, changes)

        resolution = await identifier_resolver.resolve_single_for_update(
            identifier.raw, "_id", attempt, count=matched
        )
        if resolution is None:
            raise NotFoundError("Comment", {"comment_id": comment_id})
        return mapped_outcome(comment_crud, resolution.outcome)

    async def update_movie_comment(
        self,
        movie_id: str,
        comment_id: str,
        delta: Mapping[str, Any] | None,
    ) -> UpdateOutcome:
        """
        Update a comment of a movie, trying every identifier representation pair.

        Raises:
            InvalidIdentifierError: Either identifier is malformed
            ValidationError: Nothing to update
            NotFoundError: No representation pair matched
        """
        validate(comment_id, "comment_id")
        validate(movie_id, PARENT_FIELD)
        changes = require_changes(comment_crud, delta)

        async def attempt(filter_: dict) -> UpdateOutcome:
            return await comment_crud.update(self.db, filter_, changes)

        resolution = await identifier_resolver.resolve_for_mutation(
            comment_id, "_id", movie_id, PARENT_FIELD, attempt, count=matched
        )
        if resolution is None:
            raise NotFoundError("Comment", {"comment_id": comment_id, "movie_id": movie_id})
        return mapped_outcome(comment_crud, resolution.outcome)

    async def delete_comment(self, comment_id: str) -> int:
        """
        Delete a comment by its canonical identifier.

        Raises:
            InvalidIdentifierError: comment_id is malformed
            NotFoundError: Nothing was deleted
        """
        identifier = validate(comment_id, "comment_id")
        deleted = await comment_crud.delete(self.db, {"_id": identifier.as_object_id()})
        if deleted == 0:
            raise NotFoundError("Comment", {"comment_id": comment_id})
        return deleted

    async def delete_movie_comment(self, movie_id: str, comment_id: str) -> int:
        """Delete a comment of a movie, trying every identifier representation pair."""
        validate(comment_id, "comment_id")
        validate(movie_id, PARENT_FIELD)

        async def attempt(filter_: dict) -> int:
            return await comment_crud.delete(self.db, filter_)

        resolution = await identifier_resolver.resolve_for_mutation(
            comment_id, "_id", movie_id, PARENT_FIELD, attempt
        )
        if resolution is None:
            raise NotFoundError("Comment", {"comment_id": comment_id, "movie_id": movie_id})
        logger.info(
            "Comment deleted",
            extra={"comment_id": comment_id, "movie_id": movie_id},
        )
        return resolution.outcome
