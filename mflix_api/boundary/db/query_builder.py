"""
Query and pagination builder.

Turns listing request parameters into a transport-independent
QueryDescriptor and computes page metadata and navigation links.
Validation happens here, before any store access.

Dependencies: bson (pymongo)
System role: Filter/sort/pagination descriptor construction
"""

import math
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping
from urllib.parse import urlencode

from mflix_api.boundary.db.identifiers import Identifier, validate
from mflix_api.core.exceptions import InvalidParameterError

MAX_LIMIT = 50
DEFAULT_LIMIT = 10


class SortDirection(IntEnum):
    """MongoDB sort directions."""

    ASCENDING = 1
    DESCENDING = -1

    @classmethod
    def from_order(cls, order: str | None) -> "SortDirection":
        """'desc' (any case) is descending, anything else ascending."""
        if order and order.strip().lower() == "desc":
            return cls.DESCENDING
        return cls.ASCENDING


@dataclass(frozen=True)
class QueryDescriptor:
    """
    Structured listing query.

    Attributes:
        filter: MongoDB predicate
        sort: Ordered (field, direction) pairs
        skip: Records to skip, (page - 1) * limit
        limit: Page size in [1, MAX_LIMIT]
    """

    filter: dict
    sort: tuple[tuple[str, int], ...]
    skip: int
    limit: int

    @property
    def page(self) -> int:
        return self.skip // self.limit + 1


@dataclass(frozen=True)
class PaginationLinks:
    first: str
    last: str | None
    next: str | None
    prev: str | None

    def as_dict(self) -> dict[str, str | None]:
        return {"first": self.first, "last": self.last, "next": self.next, "prev": self.prev}


@dataclass(frozen=True)
class PaginationResult:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    links: PaginationLinks

    def meta(self) -> dict[str, int]:
        """Envelope meta block."""
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
        }


def _parse_int(value: Any, parameter: str, default: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise InvalidParameterError(f'"{parameter}" must be an integer', parameter)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidParameterError(
            f'"{parameter}" must be an integer', parameter, {"value": str(value)}
        ) from None


def total_pages_for(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit) if total_items > 0 else 0


def compute_links(
    base_url: str,
    page: int,
    total_pages: int,
    limit: int,
    extra_params: Mapping[str, Any] | None = None,
) -> PaginationLinks:
    """
    Build first/last/next/prev links for a listing.

    Args:
        base_url: Listing URL without query string
        page: Current page
        total_pages: Total page count (0 for an empty result)
        limit: Page size, repeated on every link
        extra_params: Additional query params carried verbatim (None values dropped)

    Returns:
        PaginationLinks: last is None for an empty result, next/prev None at the edges
    """
    extras = {key: value for key, value in (extra_params or {}).items() if value is not None}

    def link(target: int) -> str:
        return f"{base_url}?{urlencode({'page': target, 'limit': limit, **extras})}"

    return PaginationLinks(
        first=link(1),
        last=link(total_pages) if total_pages > 0 else None,
        next=link(page + 1) if page < total_pages else None,
        prev=link(page - 1) if page > 1 else None,
    )


def paginate(
    descriptor: QueryDescriptor,
    total_items: int,
    base_url: str,
    extra_params: Mapping[str, Any] | None = None,
) -> PaginationResult:
    """Combine a descriptor and a total count into page metadata."""
    total_pages = total_pages_for(total_items, descriptor.limit)
    return PaginationResult(
        current_page=descriptor.page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=descriptor.limit,
        links=compute_links(base_url, descriptor.page, total_pages, descriptor.limit, extra_params),
    )


def build_scoped_filter(parent_field: str, parent_id: Identifier | str) -> dict:
    """
    Filter restricting a listing to children of one parent record.

    Raises:
        InvalidIdentifierError: parent_id is malformed
    """
    identifier = parent_id if isinstance(parent_id, Identifier) else validate(parent_id, parent_field)
    return {parent_field: identifier.as_object_id()}


@dataclass(frozen=True)
class QueryBuilder:
    """
    Listing query builder for one collection.

    Attributes:
        search_field: Text field matched by the search parameter
        default_sort_field: Field sorted on when none is requested
        max_limit: Upper bound for limit
        default_limit: Limit used when none is given
    """

    search_field: str
    default_sort_field: str
    max_limit: int = MAX_LIMIT
    default_limit: int = DEFAULT_LIMIT

    def build_list_query(
        self,
        page: int | str | None = 1,
        limit: int | str | None = None,
        search: str | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
        base_filter: Mapping[str, Any] | None = None,
    ) -> QueryDescriptor:
        """
        Build a descriptor from request parameters.

        Raises:
            InvalidParameterError: limit outside [1, max_limit], page < 1,
                or either not an integer
        """
        limit_value = _parse_int(limit, "limit", self.default_limit)
        if limit_value < 1 or limit_value > self.max_limit:
            raise InvalidParameterError(
                f'"limit" must be a number between 1 and {self.max_limit}',
                "limit",
                {"value": limit_value},
            )

        page_value = _parse_int(page, "page", 1)
        if page_value < 1:
            raise InvalidParameterError(
                '"page" must be a positive number', "page", {"value": page_value}
            )

        filter_: dict = dict(base_filter or {})
        if search and search.strip():
            filter_[self.search_field] = {"$regex": re.escape(search.strip()), "$options": "i"}

        sort_key = sort_field.strip() if sort_field and sort_field.strip() else self.default_sort_field
        direction = SortDirection.from_order(sort_order)

        return QueryDescriptor(
            filter=filter_,
            sort=((sort_key, int(direction)),),
            skip=(page_value - 1) * limit_value,
            limit=limit_value,
        )

    def build_scoped_filter(self, parent_field: str, parent_id: Identifier | str) -> dict:
        return build_scoped_filter(parent_field, parent_id)
