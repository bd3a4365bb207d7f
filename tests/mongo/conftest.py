"""Test configuration for the MongoDB adapter."""

import pytest

from bsonx.mongo import MongoConnectionManager, MongoDB

PEOPLE = [
    {"_id": 1, "name": "Alice", "age": 28, "status": "active", "score": 90,
     "address": {"city": "Athens"}},
    {"_id": 2, "name": "Bob", "age": 45, "status": "inactive", "score": 60,
     "address": {"city": "Berlin"}},
    {"_id": 3, "name": "Carol", "age": 70, "status": "active", "score": 40,
     "address": {"city": "Athens"}},
    {"_id": 4, "name": "Dan", "age": 16, "status": "pending", "score": 80,
     "address": {"city": "Lisbon"}},
]  # fmt: skip


@pytest.fixture
async def mongo_connection():
    """Create a MongoDB connection for testing."""
    # Use mongomock for unit tests to avoid real database dependency
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")

    connection = MongoConnectionManager("mongodb://mock:27017", database="test_db")
    connection._client = AsyncMongoMockClient()
    return connection


@pytest.fixture
async def db(mongo_connection):
    """MongoDB facade over the mocked connection."""
    return await MongoDB(connection=mongo_connection).connect()


@pytest.fixture
async def people(db):
    """A seeded ``people`` collection."""
    collection = db.collection("people")
    for doc in PEOPLE:
        await collection.insert(doc)
    return collection
