"""
Comment domain models and schemas.

Dependencies: pydantic
System role: Comment API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateCommentRequest(BaseModel):
    """Request schema for creating a comment."""

    name: str | None = Field(None, description="Author name")
    email: str | None = Field(None, description="Author email")
    text: str | None = Field(None, description="Comment body")
    movie_id: str | None = Field(None, description="Movie the comment belongs to")


class UpdateCommentRequest(BaseModel):
    """Request schema for updating a comment; movie_id, date and id are ignored."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    email: str | None = None
    text: str | None = None


class CommentResponse(BaseModel):
    """Response schema for comment operations."""

    id: str
    name: str | None = None
    email: str | None = None
    text: str | None = None
    parent_id: str | None = None
    date: datetime | None = None
