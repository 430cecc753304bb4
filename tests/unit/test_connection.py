"""
Test suite for ConnectionManager lifecycle.

Uses the in-memory FakeClient in place of AsyncMongoClient.

System role: Verification of single-flight init, failure mapping and close
"""

import asyncio
import functools
import logging

import pytest
from pymongo.errors import CollectionInvalid, InvalidName, OperationFailure, ServerSelectionTimeoutError
from pymongo.server_api import ServerApi

from mflix_api.boundary.db.connection import ConnectionManager, ConnectionState
from mflix_api.configs.database import MongoSettings
from mflix_api.core.exceptions import DatabaseConnectionError


class TestAcquire:
    """Test suite for ConnectionManager.acquire()."""

    @pytest.mark.asyncio
    async def test_concurrent_first_acquire_builds_one_client(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        # Arrange
        manager = ConnectionManager(mongo_settings, client_factory=fake_client_factory)

        # Act
        handles = await asyncio.gather(*(manager.acquire() for _ in range(10)))

        # Assert
        assert len(fake_client_factory.instances) == 1
        assert all(handle is handles[0] for handle in handles)
        assert manager.state is ConnectionState.CONNECTED

    @pytest.mark.asyncio
    async def test_client_receives_configured_options(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        manager = ConnectionManager(mongo_settings, client_factory=fake_client_factory)

        handle = await manager.acquire()

        client = fake_client_factory.instances[0]
        assert client.uri == mongo_settings.uri
        assert client.options["appname"] == "films-api"
        assert client.options["maxPoolSize"] == 10
        assert client.options["serverSelectionTimeoutMS"] == 30000
        assert isinstance(client.options["server_api"], ServerApi)
        assert handle.database.name == "sample_mflix"

    @pytest.mark.asyncio
    async def test_missing_required_collections_are_created(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        manager = ConnectionManager(mongo_settings, client_factory=fake_client_factory)

        handle = await manager.acquire()

        assert "theaters" in await handle.database.list_collection_names()
        assert handle.collection("movies").name == "movies"

    @pytest.mark.asyncio
    async def test_auth_failure_raises_without_leaking_password(
        self, mongo_settings: MongoSettings, fake_client_factory, caplog
    ) -> None:
        # Arrange
        caplog.set_level(logging.DEBUG)
        factory = functools.partial(
            fake_client_factory,
            ping_error=OperationFailure("Authentication failed.", code=18),
        )
        manager = ConnectionManager(mongo_settings, client_factory=factory)

        # Act
        with pytest.raises(DatabaseConnectionError) as exc_info:
            await manager.acquire()

        # Assert
        assert isinstance(exc_info.value.__cause__, OperationFailure)
        assert fake_client_factory.instances[0].closed is True
        assert manager.state is ConnectionState.UNCONNECTED
        assert "s3cr3t-pass" not in str(exc_info.value)
        assert caplog.records
        for record in caplog.records:
            assert "s3cr3t-pass" not in record.getMessage()
            assert "s3cr3t-pass" not in str(vars(record))

    @pytest.mark.asyncio
    async def test_unreachable_server_raises_connection_error(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        factory = functools.partial(
            fake_client_factory, ping_error=ServerSelectionTimeoutError("no servers")
        )
        manager = ConnectionManager(mongo_settings, client_factory=factory)

        with pytest.raises(ConnectionError):
            await manager.acquire()

    @pytest.mark.asyncio
    async def test_invalid_database_name_closes_client(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        factory = functools.partial(
            fake_client_factory, db_error=InvalidName("database names cannot contain the character '$'")
        )
        manager = ConnectionManager(mongo_settings, client_factory=factory)

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await manager.acquire()

        assert isinstance(exc_info.value.__cause__, InvalidName)
        assert fake_client_factory.instances[0].closed is True
        assert manager.state is ConnectionState.UNCONNECTED

    @pytest.mark.asyncio
    async def test_collection_create_race_is_wrapped(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        async def lost_race(name):
            raise CollectionInvalid(f"collection {name} already exists")

        def factory(uri, **options):
            client = fake_client_factory(uri, **options)
            client.database.create_collection = lost_race
            return client

        manager = ConnectionManager(mongo_settings, client_factory=factory)

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await manager.acquire()

        assert isinstance(exc_info.value.__cause__, CollectionInvalid)
        assert fake_client_factory.instances[0].closed is True

    @pytest.mark.asyncio
    async def test_failed_connect_can_be_retried(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        failing = functools.partial(
            fake_client_factory, ping_error=ServerSelectionTimeoutError("no servers")
        )
        manager = ConnectionManager(mongo_settings, client_factory=failing)
        with pytest.raises(DatabaseConnectionError):
            await manager.acquire()

        manager._client_factory = fake_client_factory
        handle = await manager.acquire()

        assert handle is not None
        assert manager.state is ConnectionState.CONNECTED


class TestDescribeAndClose:
    @pytest.mark.asyncio
    async def test_describe_lists_sorted_collections(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        manager = ConnectionManager(mongo_settings, client_factory=fake_client_factory)
        handle = await manager.acquire()
        handle.collection("movies")
        handle.collection("comments")

        assert await manager.describe() == ["comments", "movies", "theaters"]

    @pytest.mark.asyncio
    async def test_close_is_idempotent(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        manager = ConnectionManager(mongo_settings, client_factory=fake_client_factory)
        await manager.acquire()

        await manager.close()
        await manager.close()

        assert fake_client_factory.instances[0].closed is True
        assert manager.state is ConnectionState.CLOSED

    @pytest.mark.asyncio
    async def test_acquire_after_close_raises(
        self, mongo_settings: MongoSettings, fake_client_factory
    ) -> None:
        manager = ConnectionManager(mongo_settings, client_factory=fake_client_factory)
        await manager.close()

        with pytest.raises(DatabaseConnectionError):
            await manager.acquire()
        assert fake_client_factory.instances == []
