"""Thin MongoDB facade that executes compiled bsonx documents through Motor."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from pymongo.errors import PyMongoError

from ..compile import compile_match
from ..exceptions import MongoQueryError, ValidationError
from ..update import compile_update
from .connection import MongoConnectionManager
from .serialization import to_document

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pydantic import BaseModel

    from ..expr import Expr
    from ..update import Update

logger = logging.getLogger("bsonx.mongo.collection")


class DocumentStore(Protocol):
    """Capabilities a document store must offer to run bsonx queries."""

    async def find(
        self, expr: Expr | None = None, **options: Any
    ) -> list[dict[str, Any]]: ...

    async def find_one(self, expr: Expr, **options: Any) -> dict[str, Any] | None: ...

    async def update(
        self, expr: Expr, updates: Sequence[Update] | Mapping[str, Any]
    ) -> int: ...

    async def insert(self, doc: BaseModel | Mapping[str, Any]) -> Any: ...


class TypedCollection:
    """
    A Motor collection that speaks bsonx expressions.

    Expressions and updates are compiled here; everything in ``options``
    (``projection``, ``sort``, ``limit``, ``skip``...) is passed to the
    driver verbatim.
    """

    def __init__(self, collection: Any, name: str) -> None:
        self._collection = collection
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def find(
        self, expr: Expr | None = None, **options: Any
    ) -> list[dict[str, Any]]:
        """Return every document matching ``expr`` (all documents if omitted)."""
        filter_doc = compile_match(expr) if expr is not None else {}
        logger.debug("find on %s: %s", self.name, filter_doc)
        try:
            cursor = self._collection.find(filter_doc, **options)
            return [doc async for doc in cursor]
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e

    async def find_one(self, expr: Expr, **options: Any) -> dict[str, Any] | None:
        """Return the first document matching ``expr``, or ``None``."""
        filter_doc = compile_match(expr)
        logger.debug("find_one on %s: %s", self.name, filter_doc)
        try:
            doc = await self._collection.find_one(filter_doc, **options)
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return dict(doc) if doc is not None else None

    async def update(
        self, expr: Expr, updates: Sequence[Update] | Mapping[str, Any]
    ) -> int:
        """
        Apply ``updates`` to every document matching ``expr``.

        ``updates`` is either a sequence of update nodes, compiled with
        :func:`~bsonx.update.compile_update`, or a ready update document.
        Returns the number of modified documents.
        """
        filter_doc = compile_match(expr)
        if isinstance(updates, Mapping):
            update_doc = dict(updates)
        else:
            update_doc = compile_update(updates)
        if not update_doc:
            raise ValidationError("Update document is empty", path=self.name)
        logger.debug(
            "update_many on %s: filter=%s update=%s", self.name, filter_doc, update_doc
        )
        try:
            result = await self._collection.update_many(filter_doc, update_doc)
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return int(result.modified_count)

    async def insert(self, doc: BaseModel | Mapping[str, Any]) -> Any:
        """Insert one document (mapping or pydantic model); return its ``_id``."""
        document = to_document(doc)
        try:
            result = await self._collection.insert_one(document)
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        logger.debug("inserted %r into %s", result.inserted_id, self.name)
        return result.inserted_id


class MongoDB:
    """
    Entry point: a connection plus typed collections.

    Example::

        db = await MongoDB("mongodb://localhost:27017", "app").connect()
        users = db.collection("users")
        adults = await users.find(gte(column("age"), 18))
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        database: str | None = None,
        *,
        connection: MongoConnectionManager | None = None,
        **kwargs: Any,
    ) -> None:
        self._connection = connection or MongoConnectionManager(
            url, database=database, **kwargs
        )

    @property
    def connection(self) -> MongoConnectionManager:
        return self._connection

    async def connect(self) -> MongoDB:
        await self._connection.connect()
        return self

    def collection(self, name: str) -> TypedCollection:
        return TypedCollection(
            self._connection.database().get_collection(name), name
        )

    def close(self) -> None:
        self._connection.close()
