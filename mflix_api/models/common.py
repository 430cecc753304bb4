"""
Common response models and utilities.

Uniform response envelope shared by every endpoint.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PaginationMeta(BaseModel):
    """Page metadata of a listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class PaginationLinks(BaseModel):
    """Navigation links of a listing; absent neighbours are null."""

    first: str
    last: str | None = None
    next: str | None = None
    prev: str | None = None


class Envelope(BaseModel):
    """Uniform response wrapper."""

    model_config = ConfigDict(populate_by_name=True)

    status: int
    message: str | None = None
    data: Any = None
    meta: PaginationMeta | None = None
    links: PaginationLinks | None = None
    error: str | None = None
    matched_count: int | None = Field(default=None, alias="matchedCount")
    modified_count: int | None = Field(default=None, alias="modifiedCount")
    deleted_count: int | None = Field(default=None, alias="deletedCount")

    def to_content(self) -> dict:
        """
        JSON-ready body.

        Top-level keys that are unset are omitted; nulls inside links are kept.
        """
        content = self.model_dump(mode="json", by_alias=True)
        return {key: value for key, value in content.items() if value is not None}


class BulkUpdateRequest(BaseModel):
    """Request schema for filter-based bulk updates."""

    filter: dict[str, Any] | None = Field(None, description="MongoDB predicate")
    update: dict[str, Any] | None = Field(None, description="Fields to set on every match")


class BulkDeleteRequest(BaseModel):
    """Request schema for filter-based bulk deletes."""

    filter: dict[str, Any] | None = Field(None, description="MongoDB predicate")
