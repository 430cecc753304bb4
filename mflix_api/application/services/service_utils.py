"""
Helpers shared by the resource services.

Dependencies: mflix_api.boundary.db.CRUD
System role: Request-level validation common to every resource
"""

from typing import Any, Mapping

from mflix_api.boundary.db.CRUD.base_crud import BaseCRUD, BulkOutcome, UpdateOutcome
from mflix_api.core.exceptions import ValidationError


def require_changes(crud: BaseCRUD, delta: Mapping[str, Any] | None) -> dict:
    """
    Return the writable part of an update body.

    Raises:
        ValidationError: Nothing writable remains once protected fields are dropped
    """
    changes = crud.strip_protected(delta or {})
    if not changes:
        raise ValidationError("Update body must contain at least one field", field="body")
    return changes


def require_filter(filter: Mapping[str, Any] | None) -> dict:
    """
    Bulk predicates are mandatory; an empty dict is allowed and matches everything.

    Raises:
        ValidationError: filter missing or not an object
    """
    if filter is None or not isinstance(filter, Mapping):
        raise ValidationError("A filter object is required", field="filter")
    return dict(filter)


def matched(outcome: UpdateOutcome | BulkOutcome) -> int:
    return outcome.matched_count


def mapped_outcome(crud: BaseCRUD, outcome: UpdateOutcome) -> UpdateOutcome:
    """Replace the stored record on outcome with its external shape."""
    record = crud.to_response(outcome.record) if outcome.record is not None else None
    return UpdateOutcome(
        matched_count=outcome.matched_count,
        modified_count=outcome.modified_count,
        record=record,
    )
