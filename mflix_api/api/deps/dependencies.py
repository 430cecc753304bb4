"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: mflix_api.configs, mflix_api.application, mflix_api.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Request
from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.application.services import CommentService, MovieService, TheaterService
from mflix_api.boundary.db.connection import ConnectionManager
from mflix_api.configs import Settings, get_settings


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_connection_manager(request: Request) -> ConnectionManager:
    """
    Get the connection manager owned by the application.

    Args:
        request: Current request (carries the app state)

    Returns:
        ConnectionManager: Shared manager created at app construction
    """
    return request.app.state.connection_manager


async def get_database(
    manager: ConnectionManager = Depends(get_connection_manager),
) -> AsyncDatabase:
    """
    Get the shared database, connecting on first use.

    Raises:
        DatabaseConnectionError: Store unreachable
    """
    handle = await manager.acquire()
    return handle.database


def get_movie_service(
    db: AsyncDatabase = Depends(get_database),
    settings: Settings = Depends(get_settings_dependency),
) -> MovieService:
    """
    Get movie service instance.

    Args:
        db: Shared database (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        MovieService: Movie service instance
    """
    return MovieService(
        db=db,
        max_limit=settings.api.max_page_size,
        default_limit=settings.api.default_page_size,
    )


def get_comment_service(
    db: AsyncDatabase = Depends(get_database),
    settings: Settings = Depends(get_settings_dependency),
) -> CommentService:
    """Get comment service instance."""
    return CommentService(
        db=db,
        max_limit=settings.api.max_page_size,
        default_limit=settings.api.default_page_size,
    )


def get_theater_service(
    db: AsyncDatabase = Depends(get_database),
    settings: Settings = Depends(get_settings_dependency),
) -> TheaterService:
    """Get theater service instance."""
    return TheaterService(
        db=db,
        max_limit=settings.api.max_page_size,
        default_limit=settings.api.default_page_size,
    )
