"""
API routes module.

FastAPI routers, dependencies and error handlers for all HTTP endpoints.
The application itself is built by mflix_api.api.main.create_app().
"""
