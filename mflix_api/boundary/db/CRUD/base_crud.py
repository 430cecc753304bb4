"""
Base CRUD operations for MongoDB collections.

Provides generic get/list/create/update/delete and bulk operations that
model-specific repositories inherit and extend with field normalization.

Dependencies: pymongo
System role: Foundation for all document CRUD operations
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.boundary.db.query_builder import QueryDescriptor
from mflix_api.core.exceptions import NotFoundError, ValidationError
from mflix_api.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UpdateOutcome:
    matched_count: int
    modified_count: int
    record: dict | None


@dataclass(frozen=True)
class BulkOutcome:
    matched_count: int
    modified_count: int


def as_text(value: Any) -> str | None:
    """Stored scalars may be any BSON type; responses expose them as strings."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return value if isinstance(value, str) else str(value)


def as_text_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [text for text in (as_text(item) for item in value) if text is not None]


def as_datetime(value: Any) -> datetime | None:
    return value if isinstance(value, datetime) else None


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, (str, list, dict)) and not value)


class BaseCRUD:
    """
    Generic CRUD operations against one collection.

    Subclasses set the class attributes and may override build_document()
    to normalize incoming fields before insertion.

    Attributes:
        collection_name: MongoDB collection
        resource_name: Human-readable name used in errors
        required_fields: Fields that must be present and non-empty on create
        protected_fields: Fields never written by update()
        created_field: Field stamped with the creation time
    """

    collection_name: str = ""
    resource_name: str = "Record"
    required_fields: tuple[str, ...] = ()
    parent_field: str | None = None
    created_field: str = "created_at"
    updated_field: str = "updated_at"

    @property
    def protected_fields(self) -> frozenset[str]:
        fields = {"_id", "id", self.created_field}
        if self.parent_field:
            fields.add(self.parent_field)
        return frozenset(fields)

    def _collection(self, db: AsyncDatabase):
        return db[self.collection_name]

    def check_required(self, fields: Mapping[str, Any], required: tuple[str, ...] | None = None) -> None:
        """
        Raise ValidationError naming every absent required field.

        Args:
            fields: Incoming fields
            required: Override of required_fields
        """
        required = self.required_fields if required is None else required
        missing = [name for name in required if _is_missing(fields.get(name))]
        if missing:
            raise ValidationError(
                f"Missing required field(s): {', '.join(missing)}",
                field=missing[0],
                details={"missing": missing},
            )

    def build_document(self, fields: Mapping[str, Any]) -> dict:
        """Normalize incoming fields into a storable document."""
        return {key: value for key, value in fields.items() if key not in ("_id", "id")}

    def strip_protected(self, delta: Mapping[str, Any]) -> dict:
        """Drop identifier, parent reference and creation timestamp."""
        return {key: value for key, value in delta.items() if key not in self.protected_fields}

    async def find_one(self, db: AsyncDatabase, filter: Mapping[str, Any]) -> dict | None:
        return await self._collection(db).find_one(dict(filter))

    async def get(self, db: AsyncDatabase, filter: Mapping[str, Any]) -> dict:
        """
        Retrieve a single record.

        Args:
            db: Database from the shared connection handle
            filter: MongoDB predicate

        Returns:
            dict: Stored document

        Raises:
            NotFoundError: No record matches
        """
        record = await self.find_one(db, filter)
        if record is None:
            raise NotFoundError(self.resource_name)
        return record

    async def list(self, db: AsyncDatabase, descriptor: QueryDescriptor) -> tuple[list[dict], int]:
        """
        Retrieve one page of records and the total match count.

        The count runs as a separate query on the same filter, so the two
        may disagree under concurrent writes.

        Args:
            db: Database from the shared connection handle
            descriptor: Filter, sort and paging

        Returns:
            tuple[list[dict], int]: Records of the page and total matches
        """
        log_with_context(
            logger,
            logging.DEBUG,
            "Listing records",
            collection=self.collection_name,
            filter=descriptor.filter,
            skip=descriptor.skip,
            limit=descriptor.limit,
        )
        collection = self._collection(db)
        total = await collection.count_documents(descriptor.filter)

        cursor = collection.find(descriptor.filter)
        if descriptor.sort:
            cursor = cursor.sort(list(descriptor.sort))
        cursor = cursor.skip(descriptor.skip).limit(descriptor.limit)
        records = await cursor.to_list(length=descriptor.limit)
        return records, total

    async def create(
        self,
        db: AsyncDatabase,
        fields: Mapping[str, Any],
        required: tuple[str, ...] | None = None,
    ) -> dict:
        """
        Insert a new record.

        Args:
            db: Database from the shared connection handle
            fields: Incoming fields
            required: Override of required_fields

        Returns:
            dict: Inserted document with generated _id and creation timestamp

        Raises:
            ValidationError: A required field is absent or empty
        """
        self.check_required(fields, required)
        document = self.build_document(fields)
        document[self.created_field] = utcnow()

        result = await self._collection(db).insert_one(document)
        logger.info(
            "Record created",
            extra={"collection": self.collection_name, "record_id": str(result.inserted_id)},
        )
        created = await self.find_one(db, {"_id": result.inserted_id})
        return created if created is not None else {**document, "_id": result.inserted_id}

    async def update(
        self,
        db: AsyncDatabase,
        filter: Mapping[str, Any],
        delta: Mapping[str, Any],
    ) -> UpdateOutcome:
        """
        Apply delta to the first matching record.

        Protected fields are removed from delta first. A zero matched_count
        is returned as-is so the caller can try identifier fallbacks.

        Returns:
            UpdateOutcome: Counts and the updated document (None when unmatched)
        """
        changes = self.strip_protected(delta)
        changes[self.updated_field] = utcnow()

        result = await self._collection(db).update_one(dict(filter), {"$set": changes})
        record = None
        if result.matched_count > 0:
            record = await self.find_one(db, filter)
        return UpdateOutcome(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            record=record,
        )

    async def delete(self, db: AsyncDatabase, filter: Mapping[str, Any]) -> int:
        """
        Delete the first matching record.

        Returns:
            int: Deleted count, 0 when nothing matched
        """
        result = await self._collection(db).delete_one(dict(filter))
        return result.deleted_count

    async def bulk_update(
        self,
        db: AsyncDatabase,
        filter: Mapping[str, Any],
        delta: Mapping[str, Any],
    ) -> BulkOutcome:
        """Apply delta to every record matching a caller-supplied predicate."""
        changes = self.strip_protected(delta)
        changes[self.updated_field] = utcnow()
        result = await self._collection(db).update_many(dict(filter), {"$set": changes})
        logger.info(
            "Bulk update applied",
            extra={
                "collection": self.collection_name,
                "matched_count": result.matched_count,
                "modified_count": result.modified_count,
            },
        )
        return BulkOutcome(matched_count=result.matched_count, modified_count=result.modified_count)

    async def bulk_delete(self, db: AsyncDatabase, filter: Mapping[str, Any]) -> int:
        """Delete every record matching a caller-supplied predicate."""
        result = await self._collection(db).delete_many(dict(filter))
        logger.info(
            "Bulk delete applied",
            extra={"collection": self.collection_name, "deleted_count": result.deleted_count},
        )
        return result.deleted_count

    def to_response(self, document: Mapping[str, Any]) -> dict:
        """Map a stored document to its external shape."""
        data = {key: value for key, value in document.items() if key != "_id"}
        data["id"] = str(document.get("_id"))
        return data
