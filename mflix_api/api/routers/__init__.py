"""API routers."""

from .comments import router as comments_router
from .health import router as health_router
from .movies import router as movies_router
from .theaters import router as theaters_router

__all__ = [
    "comments_router",
    "health_router",
    "movies_router",
    "theaters_router",
]
