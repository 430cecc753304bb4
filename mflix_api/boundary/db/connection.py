"""
Database connection management.

Owns the process-lifetime MongoDB client. The client is created lazily on
the first acquire(), pinged, cached, and shared read-only by every request
until the application lifespan closes it.

Dependencies: pymongo, mflix_api.configs
System role: Database connection lifecycle management
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from mflix_api.configs.database import MongoSettings
from mflix_api.core.exceptions import DatabaseConnectionError
from mflix_api.observability.log_utils import redact_uri

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]


class ConnectionState(str, Enum):
    """Lifecycle of the shared connection."""

    UNCONNECTED = "unconnected"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass(frozen=True)
class ConnectionHandle:
    """
    Opaque handle to the store.

    Attributes:
        client: Connected AsyncMongoClient
        database: Database all collections are read from
    """

    client: Any
    database: AsyncDatabase

    def collection(self, name: str) -> AsyncCollection:
        """Return a collection of the bound database."""
        return self.database[name]


class ConnectionManager:
    """
    Single-flight owner of the MongoDB connection.

    Concurrent first callers of acquire() wait on one lock; only the first
    one through builds the client, the rest reuse its handle.
    """

    def __init__(
        self,
        settings: MongoSettings,
        client_factory: ClientFactory = AsyncMongoClient,
    ) -> None:
        """
        Initialize manager without connecting.

        Args:
            settings: MongoDB connection settings
            client_factory: Callable building the client from (uri, **options)
        """
        self._settings = settings
        self._client_factory = client_factory
        self._handle: ConnectionHandle | None = None
        self._state = ConnectionState.UNCONNECTED
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ConnectionState:
        """Current lifecycle state."""
        return self._state

    async def acquire(self) -> ConnectionHandle:
        """
        Return the shared handle, connecting on first use.

        Returns:
            ConnectionHandle: Cached handle

        Raises:
            DatabaseConnectionError: Store unreachable, auth failure, bad URI,
                or manager already closed
        """
        handle = self._handle
        if handle is not None:
            return handle

        async with self._lock:
            if self._handle is not None:
                return self._handle
            if self._state is ConnectionState.CLOSED:
                raise DatabaseConnectionError("Connection manager is closed")

            self._handle = await self._connect()
            self._state = ConnectionState.CONNECTED
            return self._handle

    async def _connect(self) -> ConnectionHandle:
        settings = self._settings
        safe_uri = redact_uri(settings.uri)
        logger.info(
            "Connecting to MongoDB",
            extra={"uri": safe_uri, "db_name": settings.db},
        )

        options = settings.client_options()
        if settings.server_api_version:
            options["server_api"] = ServerApi(settings.server_api_version)

        client = None
        try:
            client = self._client_factory(settings.uri, **options)
            database = client[settings.db]
            await database.command("ping")
            await self._ensure_collections(database)
        except PyMongoError as e:
            logger.error(
                "MongoDB connection failed",
                extra={"uri": safe_uri, "error_type": type(e).__name__},
            )
            if client is not None:
                await client.close()
            raise DatabaseConnectionError(
                "Unable to connect to the database",
                {"uri": safe_uri, "error_type": type(e).__name__},
            ) from e

        logger.info("Connected to MongoDB", extra={"uri": safe_uri, "db_name": settings.db})
        return ConnectionHandle(client=client, database=database)

    async def _ensure_collections(self, database: AsyncDatabase) -> None:
        """Create required collections that do not exist yet."""
        if not self._settings.required_collections:
            return
        existing = set(await database.list_collection_names())
        for name in self._settings.required_collections:
            if name not in existing:
                logger.info("Creating missing collection", extra={"collection": name})
                await database.create_collection(name)

    async def describe(self) -> list[str]:
        """
        Ping the store and list its collections.

        Returns:
            list[str]: Collection names of the bound database

        Raises:
            DatabaseConnectionError: Store unreachable
        """
        handle = await self.acquire()
        try:
            await handle.database.command("ping")
            return sorted(await handle.database.list_collection_names())
        except PyMongoError as e:
            raise DatabaseConnectionError(
                "Database health check failed",
                {"error_type": type(e).__name__},
            ) from e

    async def close(self) -> None:
        """Close the client. Safe to call more than once."""
        async with self._lock:
            if self._state is ConnectionState.CLOSED:
                return
            handle, self._handle = self._handle, None
            self._state = ConnectionState.CLOSED
        if handle is not None:
            await handle.client.close()
            logger.info("MongoDB connection closed")
