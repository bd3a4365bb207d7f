"""Unit tests for MongoConnectionManager."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ConfigurationError

from bsonx.exceptions import MongoConnectionError
from bsonx.mongo import MongoConnectionManager, MongoDB


@pytest.fixture
def mock_client(monkeypatch):
    """Patch Motor's client class; return the instance connect() will get."""
    import motor.motor_asyncio

    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    factory = MagicMock(return_value=client)
    monkeypatch.setattr(motor.motor_asyncio, "AsyncIOMotorClient", factory)
    client.factory = factory
    return client


class TestConnect:
    """Tests for client creation."""

    async def test_connect_passes_configuration(self, mock_client):
        mgr = MongoConnectionManager(
            "mongodb://db:27017",
            database="app",
            server_selection_timeout_ms=100,
            connect_timeout_ms=200,
            appname="bsonx-tests",
        )
        client = await mgr.connect()

        assert client is mock_client
        mock_client.factory.assert_called_once_with(
            "mongodb://db:27017",
            serverSelectionTimeoutMS=100,
            connectTimeoutMS=200,
            appname="bsonx-tests",
        )

    async def test_multiple_connect_calls(self, mock_client):
        mgr = MongoConnectionManager()
        client1 = await mgr.connect()
        client2 = await mgr.connect()

        assert client1 is client2
        mock_client.factory.assert_called_once()

    async def test_connect_failure(self, monkeypatch):
        import motor.motor_asyncio

        def broken(*args, **kwargs):
            raise ConnectionError("Connection failed")

        monkeypatch.setattr(motor.motor_asyncio, "AsyncIOMotorClient", broken)
        mgr = MongoConnectionManager("mongodb://invalid:99999")

        with pytest.raises(MongoConnectionError, match="Connection failed"):
            await mgr.connect()

    def test_client_before_connect_raises(self):
        with pytest.raises(MongoConnectionError, match="Not connected"):
            _ = MongoConnectionManager().client


class TestDatabase:
    """Tests for database resolution."""

    async def test_configured_database(self, mock_client):
        mgr = MongoConnectionManager(database="app")
        await mgr.connect()

        db = mgr.database()

        mock_client.get_database.assert_called_once_with("app")
        assert db is mock_client.get_database.return_value

    async def test_default_database_from_url(self, mock_client):
        mgr = MongoConnectionManager("mongodb://db:27017/fromurl")
        await mgr.connect()

        assert mgr.database() is mock_client.get_default_database.return_value

    async def test_no_database_anywhere(self, mock_client):
        mock_client.get_default_database.side_effect = ConfigurationError(
            "No default database defined"
        )
        mgr = MongoConnectionManager()
        await mgr.connect()

        with pytest.raises(MongoConnectionError, match="No database configured"):
            mgr.database()


class TestLifecycle:
    """Tests for close and health checks."""

    async def test_close(self, mock_client):
        mgr = MongoConnectionManager()
        await mgr.connect()
        mgr.close()

        mock_client.close.assert_called_once()
        with pytest.raises(MongoConnectionError):
            _ = mgr.client

    def test_close_when_not_connected_is_noop(self):
        MongoConnectionManager().close()

    async def test_health_check_healthy(self, mock_client):
        mgr = MongoConnectionManager()
        await mgr.connect()

        assert await mgr.health_check() is True
        mock_client.admin.command.assert_awaited_once_with("ping")

    async def test_health_check_unreachable(self, mock_client):
        mock_client.admin.command = AsyncMock(side_effect=Exception("down"))
        mgr = MongoConnectionManager()
        await mgr.connect()

        assert await mgr.health_check() is False

    async def test_health_check_not_connected(self):
        assert await MongoConnectionManager().health_check() is False

    async def test_facade_builds_its_own_connection(self, mock_client):
        db = MongoDB("mongodb://db:27017", "app")
        await db.connect()

        coll = db.collection("users")

        mock_client.get_database.assert_called_once_with("app")
        mock_client.get_database.return_value.get_collection.assert_called_once_with(
            "users"
        )
        assert coll.name == "users"
        db.close()
        mock_client.close.assert_called_once()
