"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_comment_service,
    get_connection_manager,
    get_database,
    get_movie_service,
    get_settings_dependency,
    get_theater_service,
)

__all__ = [
    "get_comment_service",
    "get_connection_manager",
    "get_database",
    "get_movie_service",
    "get_settings_dependency",
    "get_theater_service",
]
