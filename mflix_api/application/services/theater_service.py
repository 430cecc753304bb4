"""
Theater service orchestrator.

Dependencies: mflix_api.boundary.db
System role: Theater use case orchestration
"""

import logging
from typing import Any, Mapping

from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.application.services.service_utils import (
    mapped_outcome,
    matched,
    require_changes,
)
from mflix_api.boundary.db.CRUD.base_crud import UpdateOutcome
from mflix_api.boundary.db.CRUD.theater_crud import theater_crud
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


class TheaterService:
    """Theater service orchestrator."""

    def __init__(
        self,
        db: AsyncDatabase,
        max_limit: int = MAX_LIMIT,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.db = db
        self.query_builder = QueryBuilder(
            search_field="name",
            default_sort_field="name",
            max_limit=max_limit,
            default_limit=default_limit,
        )

    async def list_theaters(
        self,
        base_url: str,
        page: int | str | None = 1,
        limit: int | str | None = None,
        search: str | None = None,
    ) -> tuple[list[dict], PaginationResult]:
        """
        Get one page of theaters sorted by name.

        Raises:
            InvalidParameterError: page or limit out of range
        """
        descriptor = self.query_builder.build_list_query(page=page, limit=limit, search=search)
        try:
            records, total = await theater_crud.list(self.db, descriptor)
        except Exception as e:
            logger.error("Failed to list theaters", extra={"error": str(e)})
            raise
        pagination = paginate(descriptor, total, base_url, {"search": search})
        return [theater_crud.to_response(record) for record in records], pagination

    async def get_theater(self, theater_id: str) -> dict:
        identifier = validate(theater_id, "theater_id")
        record = await theater_crud.get(self.db, {"_id": identifier.as_object_id()})
        return theater_crud.to_response(record)

    async def create_theater(self, fields: Mapping[str, Any]) -> dict:
        """
        Create a theater.

        Raises:
            ValidationError: name missing
        """
        try:
            record = await theater_crud.create(self.db, fields)
        except MflixError:
            raise
        except Exception as e:
            logger.error(
                "Failed to create theater",
                extra={"error": str(e), "theater_name": fields.get("name")},
            )
            raise
        logger.info("Theater created", extra={"theater_id": str(record["_id"])})
        return theater_crud.to_response(record)

    async def update_theater(self, theater_id: str, delta: Mapping[str, Any] | None) -> UpdateOutcome:
        """
        Update a theater, retrying with the raw identifier when the canonical one misses.

        The identifier is validated before the body or the store are touched.

        Raises:
            InvalidIdentifierError: theater_id is malformed
            ValidationError: Nothing to update
            NotFoundError: No representation matched
        """
        identifier = validate(theater_id, "theater_id")
        changes = require_changes(theater_crud, delta)

        async def attempt(filter_: dict) -> UpdateOutcome:
            return await theater_crud.update(self.db, filter_, changes)

        resolution = await identifier_resolver.resolve_single_for_update(
            identifier.raw, "_id", attempt, count=matched
        )
        if resolution is None:
            raise NotFoundError("Theater", {"theater_id": theater_id})
        return mapped_outcome(theater_crud, resolution.outcome)

    async def delete_theater(self, theater_id: str) -> int:
        """Delete a theater by its canonical identifier."""
        identifier = validate(theater_id, "theater_id")
        deleted = await theater_crud.delete(self.db, {"_id": identifier.as_object_id()})
        if deleted == 0:
            raise NotFoundError("Theater", {"theater_id": theater_id})
        logger.info("Theater deleted", extra={"theater_id": str(identifier)})
        return deleted
