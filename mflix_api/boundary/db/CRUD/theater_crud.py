"""
Theater CRUD operations.

Documents written by this API keep address and location at the top level.
Older records nest both under location as {address, geo}; to_response
reads either layout.

Dependencies: pymongo, mflix_api.boundary.db.CRUD.base_crud
System role: Theater (location record) persistence operations
"""

from numbers import Real
from typing import Any, Mapping

from mflix_api.boundary.db.CRUD.base_crud import BaseCRUD, as_datetime, as_text

ADDRESS_FIELDS = ("street1", "city", "state", "zipcode")


def _mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def map_geo_point(location: Any) -> dict | None:
    """Return {type, coordinates} or None unless both are usable."""
    location = _mapping(location)
    if "geo" in location and "type" not in location:
        location = _mapping(location["geo"])
    kind = as_text(location.get("type"))
    coordinates = location.get("coordinates")
    if not kind or not isinstance(coordinates, (list, tuple)):
        return None
    if not all(isinstance(value, Real) and not isinstance(value, bool) for value in coordinates):
        return None
    return {"type": kind, "coordinates": [float(value) for value in coordinates]}


class TheaterCRUD(BaseCRUD):
    """CRUD operations for the theaters collection."""

    collection_name = "theaters"
    resource_name = "Theater"
    required_fields = ("name",)

    def build_document(self, fields: Mapping[str, Any]) -> dict:
        address = fields.get("address")
        return {
            "name": fields.get("name"),
            "address": dict(address) if isinstance(address, Mapping) else {},
            "location": fields.get("location") or None,
        }

    def to_response(self, document: Mapping[str, Any]) -> dict:
        location = document.get("location")
        address = _mapping(document.get("address")) or _mapping(_mapping(location).get("address"))
        return {
            "id": str(document.get("_id")),
            "name": as_text(document.get("name")),
            "address": {name: as_text(address.get(name)) for name in ADDRESS_FIELDS},
            "location": map_geo_point(location),
            "created_at": as_datetime(document.get("created_at")),
            "updated_at": as_datetime(document.get("updated_at")),
        }


theater_crud = TheaterCRUD()
