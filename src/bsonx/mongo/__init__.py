"""MongoDB driver adapter for bsonx.

The core compilers never touch the network; this package hands their
documents to Motor.
"""

from __future__ import annotations

from .collection import DocumentStore, MongoDB, TypedCollection
from .connection import MongoConnectionManager
from .serialization import to_document

__all__ = [
    "DocumentStore",
    "MongoConnectionManager",
    "MongoDB",
    "TypedCollection",
    "to_document",
]
