"""Motor client ownership for the bsonx adapter: connect once, pick a database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from motor import motor_asyncio
from pymongo.errors import ConfigurationError

from ..exceptions import MongoConnectionError

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger("bsonx.mongo.connection")


class MongoConnectionManager:
    """
    Owns one lazily created Motor client.

    Timeouts and any extra keyword arguments are handed to
    ``AsyncIOMotorClient`` unchanged. ``database`` names the database that
    collections are looked up in; when omitted, the one named in ``url`` is
    used.
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        *,
        database: str | None = None,
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
        **kwargs: Any,
    ) -> None:
        self._url = url
        self._database_name = database
        self._client_options: dict[str, Any] = {
            "serverSelectionTimeoutMS": server_selection_timeout_ms,
            "connectTimeoutMS": connect_timeout_ms,
            **kwargs,
        }
        self._client: AsyncIOMotorClient[Any] | None = None

    async def connect(self) -> AsyncIOMotorClient[Any]:
        """Return the client, creating it on first use."""
        if self._client is None:
            try:
                self._client = motor_asyncio.AsyncIOMotorClient(
                    self._url, **self._client_options
                )
            except Exception as e:
                raise MongoConnectionError(str(e)) from e
            logger.debug("Motor client created (database=%r)", self._database_name)
        return self._client

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        if self._client is None:
            raise MongoConnectionError("Not connected; call connect() first")
        return self._client

    def database(self) -> AsyncIOMotorDatabase[Any]:
        """Return the configured database, falling back to the URL's default."""
        client = self.client
        if self._database_name is not None:
            return client.get_database(self._database_name)
        try:
            return client.get_default_database()
        except ConfigurationError as e:
            raise MongoConnectionError(
                "No database configured and the URL names none"
            ) from e

    def close(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            client.close()
            logger.debug("Motor client closed")

    async def health_check(self) -> bool:
        """``True`` when a ``ping`` round-trip succeeds."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except Exception:  # noqa: BLE001
            logger.debug("MongoDB ping failed", exc_info=True)
            return False
        return True
