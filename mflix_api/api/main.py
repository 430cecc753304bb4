"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, mflix_api.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mflix_api import __version__
from mflix_api.boundary.db.connection import ConnectionManager
from mflix_api.configs import Settings, get_settings
from mflix_api.observability import configure_logging, get_logger
from mflix_api.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .error_handlers import register_error_handlers
from .routers import (
    comments_router,
    health_router,
    movies_router,
    theaters_router,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    The client connects lazily on the first request that needs it and is
    closed on shutdown.
    """
    logger.info("Starting mflix API", extra={"version": __version__})

    yield

    await app.state.connection_manager.close()
    logger.info("Database connection released")


def create_app(
    settings: Settings | None = None,
    connection_manager: ConnectionManager | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Application settings (defaults to the cached singleton)
        connection_manager: Manager to share across requests (built from settings if omitted)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Mflix API",
        description="REST API over the movies, comments and theaters collections",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.connection_manager = connection_manager or ConnectionManager(settings.database)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_error_handlers(app)

    # Register all routers under the configured prefix
    app.include_router(health_router, prefix=settings.api.prefix)
    app.include_router(movies_router, prefix=settings.api.prefix)
    app.include_router(comments_router, prefix=settings.api.prefix)
    app.include_router(theaters_router, prefix=settings.api.prefix)

    return app


configure_logging(get_settings().log_level)
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "mflix_api.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
