"""
Database boundary layer: connection management, query building,
identifier resolution and CRUD operations.

Exports:
  - ConnectionManager, ConnectionHandle: Shared client lifecycle
  - QueryBuilder, QueryDescriptor: Listing descriptors and pagination
  - IdentifierResolver, validate: Identifier validation and fallback
  - movie_crud, comment_crud, theater_crud: CRUD operation singletons

Dependencies: pymongo, mflix_api.configs
System role: Database adapter for the movies, comments and theaters collections
"""

from mflix_api.boundary.db.connection import ConnectionHandle, ConnectionManager, ConnectionState
from mflix_api.boundary.db.identifiers import (
    Identifier,
    IdentifierResolver,
    Representation,
    Resolution,
    identifier_resolver,
    validate,
)
from mflix_api.boundary.db.query_builder import QueryBuilder, QueryDescriptor, paginate
from mflix_api.boundary.db.CRUD import comment_crud, movie_crud, theater_crud

__all__ = [
    # Connection
    "ConnectionHandle",
    "ConnectionManager",
    "ConnectionState",
    # Identifiers
    "Identifier",
    "IdentifierResolver",
    "Representation",
    "Resolution",
    "identifier_resolver",
    "validate",
    # Queries
    "QueryBuilder",
    "QueryDescriptor",
    "paginate",
    # CRUD singletons
    "comment_crud",
    "movie_crud",
    "theater_crud",
]
