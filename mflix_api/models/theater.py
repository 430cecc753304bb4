"""
Theater domain models and schemas.

Dependencies: pydantic
System role: Theater API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Postal address block."""

    model_config = ConfigDict(extra="allow")

    street1: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None


class GeoLocation(BaseModel):
    """GeoJSON point."""

    type: str = "Point"
    coordinates: list[float] = Field(default_factory=list)


class CreateTheaterRequest(BaseModel):
    """Request schema for creating a theater."""

    name: str | None = Field(None, description="Theater name")
    address: Address | None = None
    location: GeoLocation | None = None


class UpdateTheaterRequest(BaseModel):
    """Request schema for updating a theater; unknown fields are set as given."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    address: Address | None = None
    location: GeoLocation | None = None


class TheaterResponse(BaseModel):
    """Response schema for theater operations."""

    id: str
    name: str | None = None
    address: Address = Field(default_factory=Address)
    location: GeoLocation | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
