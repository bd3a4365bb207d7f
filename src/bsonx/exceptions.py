"""
bsonx exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``BsonxError`` and provide ``to_dict()``
for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from enum import Enum
from typing import Any


class BsonxError(Exception):
    """Base exception for all bsonx errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(BsonxError):
    """An AST node or compiler input violates its structural contract."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class _UnknownNodeError(BsonxError):
    """Shared shape for nodes outside a closed variant set."""

    code = "UNKNOWN_NODE"
    family = "node"

    def __init__(self, node: Any, valid_kinds: list[str]) -> None:
        self.node = node
        kind = getattr(node, "kind", None)
        self.kind = kind.value if isinstance(kind, Enum) else kind
        self.valid_kinds = valid_kinds
        self.suggestions: list[str] = []
        if isinstance(self.kind, str):
            self.suggestions = get_close_matches(
                self.kind, valid_kinds, n=3, cutoff=0.6
            )

        if self.kind is None:
            message = f"Not an {self.family} node: {type(node).__name__}."
        else:
            message = f"Unknown {self.family} kind: '{self.kind}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid kinds: {', '.join(sorted(valid_kinds))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "kind": None if self.kind is None else str(self.kind),
            "node_type": type(self.node).__name__,
            "suggestions": self.suggestions,
            "valid_kinds": sorted(self.valid_kinds),
        }


class UnknownExpressionError(_UnknownNodeError):
    """The match compiler was handed something that is not an expression variant."""

    code = "UNKNOWN_EXPRESSION"
    family = "expression"


class UnknownUpdateError(_UnknownNodeError):
    """The update compiler was handed something that is not an update variant."""

    code = "UNKNOWN_UPDATE"
    family = "update"


class FieldNotFoundError(BsonxError):
    """
    Path step names a field the schema does not declare.

    Uses fuzzy matching to suggest similar valid field names.

    Example error message::

        Invalid field 'adress' on 'User'.
        Did you mean one of these?
          • address

        Available fields: address, age, name
    """

    def __init__(
        self,
        invalid_field: str,
        schema_name: str,
        available_fields: list[str],
        full_path: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.schema_name = schema_name
        self.available_fields = available_fields
        self.full_path = full_path or invalid_field

        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )

        message = self._build_message()
        super().__init__(message)

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.schema_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "schema": self.schema_name,
            "full_path": self.full_path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class PathTraversalError(ValidationError):
    """
    Error when a path step cannot be taken from the current position.

    Happens when a path like ``age.something`` is built but ``age`` is a
    scalar field, or when the step key is neither a string nor an integer.
    """

    def __init__(
        self,
        field: str,
        schema_name: str,
        full_path: str | None = None,
        reason: str = "it is not a nested document",
    ) -> None:
        self.field = field
        self.schema_name = schema_name
        self.full_path = full_path or field
        self.reason = reason

        message = (
            f"Cannot traverse '{field}' on '{schema_name}': "
            f"{reason}. Full path: '{self.full_path}'"
        )
        super().__init__(message, path=full_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "PATH_TRAVERSAL_ERROR",
            "field": self.field,
            "schema": self.schema_name,
            "full_path": self.full_path,
        }


class MongoPersistenceError(BsonxError):
    """Base for MongoDB adapter errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when connection to MongoDB fails."""


class MongoQueryError(MongoPersistenceError):
    """Raised when the driver rejects or fails a compiled query."""
