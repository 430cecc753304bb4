"""
Movie domain models and schemas.

Request/response schemas for movie operations.

Dependencies: pydantic
System role: Movie API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateMovieRequest(BaseModel):
    """Request schema for creating a movie. Required fields are checked by the service."""

    title: str | None = Field(None, description="Movie title")
    year: int | str | None = Field(None, description="Release year")
    plot: str | None = Field(None, description="Plot summary")
    genres: list[str] | None = None
    cast: list[str] | None = None
    directors: list[str] | None = None


class UpdateMovieRequest(BaseModel):
    """Request schema for updating a movie; unknown fields are set as given."""

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    year: int | str | None = None
    plot: str | None = None
    genres: list[str] | None = None
    cast: list[str] | None = None
    directors: list[str] | None = None


class MovieResponse(BaseModel):
    """Response schema for movie operations."""

    id: str
    title: str | None = None
    year: int | None = None
    plot: str | None = None
    genres: list[str] = Field(default_factory=list)
    cast: list[str] = Field(default_factory=list)
    directors: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
