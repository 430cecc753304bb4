"""Shared router helpers: envelopes, response mapping and error handling."""

from mflix_api.api.routers.router_utils.error_handling import handle_resource_errors
from mflix_api.api.routers.router_utils.responses import (
    created_response,
    delete_response,
    error_response,
    listing_base_url,
    paginated_response,
    success_response,
    update_response,
)

__all__ = [
    "created_response",
    "delete_response",
    "error_response",
    "listing_base_url",
    "handle_resource_errors",
    "paginated_response",
    "success_response",
    "update_response",
]
