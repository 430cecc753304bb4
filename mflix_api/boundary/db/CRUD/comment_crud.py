"""
Comment CRUD operations.

Comments reference their movie through movie_id. The reference is stored
as given and never checked against the movies collection.

Dependencies: pymongo, mflix_api.boundary.db
System role: Comment persistence operations
"""

from typing import Any, Mapping

from mflix_api.boundary.db.CRUD.base_crud import BaseCRUD, as_datetime, as_text
from mflix_api.boundary.db.identifiers import validate

PARENT_FIELD = "movie_id"


class CommentCRUD(BaseCRUD):
    """CRUD operations for the comments collection."""

    collection_name = "comments"
    resource_name = "Comment"
    required_fields = ("name", "text", PARENT_FIELD)
    parent_field = PARENT_FIELD
    created_field = "date"

    def build_document(self, fields: Mapping[str, Any]) -> dict:
        """
        Build a comment document.

        Raises:
            InvalidIdentifierError: movie_id is malformed
        """
        return {
            "name": fields.get("name"),
            "email": fields.get("email"),
            "text": fields.get("text"),
            PARENT_FIELD: validate(fields.get(PARENT_FIELD), PARENT_FIELD).as_object_id(),
        }

    def to_response(self, document: Mapping[str, Any]) -> dict:
        parent = document.get(PARENT_FIELD)
        return {
            "id": str(document.get("_id")),
            "name": as_text(document.get("name")),
            "email": as_text(document.get("email")),
            "text": as_text(document.get("text")),
            "parent_id": str(parent) if parent is not None else None,
            "date": as_datetime(document.get("date")),
        }


comment_crud = CommentCRUD()
