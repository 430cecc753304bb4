"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: mflix_api.boundary
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mflix_api.api.deps.dependencies import get_connection_manager
from mflix_api.api.routers.router_utils import handle_resource_errors, success_response
from mflix_api.boundary.db.connection import ConnectionManager

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> JSONResponse:
    """Basic health check."""
    return success_response({"status": "healthy"}, "Server Healthy")


@router.get("/db")
@handle_resource_errors
async def health_check_db(
    manager: ConnectionManager = Depends(get_connection_manager),
) -> JSONResponse:
    """Database health check: connect if needed, ping and list collections."""
    collections = await manager.describe()
    return success_response(
        {"status": "healthy", "collections": collections},
        "Database connection OK",
    )
