"""
Movie CRUD operations.

Normalizes movie fields on insert and maps stored movies to the
external movie shape.

Dependencies: pymongo, mflix_api.boundary.db.CRUD.base_crud
System role: Movie persistence operations
"""

from typing import Any, Mapping

from mflix_api.boundary.db.CRUD.base_crud import BaseCRUD, as_datetime, as_text, as_text_list
from mflix_api.core.exceptions import ValidationError

LIST_FIELDS = ("genres", "cast", "directors")


def parse_year(value: Any) -> int | None:
    """Coerce a year to int, None when absent or not numeric."""
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip()[:4])
    except ValueError:
        return None


class MovieCRUD(BaseCRUD):
    """CRUD operations for the movies collection."""

    collection_name = "movies"
    resource_name = "Movie"
    required_fields = ("title",)

    def build_document(self, fields: Mapping[str, Any]) -> dict:
        document = super().build_document(fields)
        document["title"] = as_text(fields.get("title"))
        document["year"] = parse_year(fields.get("year"))
        document["plot"] = as_text(fields.get("plot")) or ""
        for name in LIST_FIELDS:
            value = fields.get(name)
            document[name] = list(value) if isinstance(value, (list, tuple)) else []
        return document

    def normalize_delta(self, delta: Mapping[str, Any]) -> dict:
        """Apply the insert-time coercions to the fields present in delta."""
        changes = dict(delta)
        if "year" in changes:
            changes["year"] = parse_year(changes["year"])
        if "title" in changes:
            changes["title"] = as_text(changes["title"])
            if not changes["title"]:
                raise ValidationError("Title must be a non-empty string", field="title")
        if "plot" in changes:
            changes["plot"] = as_text(changes["plot"]) or ""
        for name in LIST_FIELDS:
            if name in changes and not isinstance(changes[name], (list, tuple)):
                changes[name] = []
        return changes

    def to_response(self, document: Mapping[str, Any]) -> dict:
        # Stored movies predate this API; coerce rather than trust their types.
        return {
            "id": str(document.get("_id")),
            "title": as_text(document.get("title")),
            "year": parse_year(document.get("year")),
            "plot": as_text(document.get("plot")),
            "genres": as_text_list(document.get("genres")),
            "cast": as_text_list(document.get("cast")),
            "directors": as_text_list(document.get("directors")),
            "created_at": as_datetime(document.get("created_at")),
            "updated_at": as_datetime(document.get("updated_at")),
        }


movie_crud = MovieCRUD()
