"""Pydantic model / mapping -> BSON-ready document conversion (UUID, Decimal)."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, cast
from uuid import UUID

from bson import Decimal128
from pydantic import BaseModel

from ..exceptions import MongoPersistenceError


def _serialize_value(value: Any) -> Any:
    """Convert Python types to BSON-safe types."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, Mapping):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value


def to_document(
    doc: BaseModel | Mapping[str, Any], *, id_field: str | None = "id"
) -> dict[str, Any]:
    """Convert a Pydantic model or mapping to a BSON-ready document.

    For models, ``id_field`` (if present) becomes the document ``_id``.
    A model field left as ``None`` under that name is dropped so the
    driver assigns an ObjectId.
    """
    if isinstance(doc, BaseModel):
        try:
            data = doc.model_dump()
        except Exception as e:
            raise MongoPersistenceError(str(e)) from e
        if id_field is not None and id_field in data:
            ident = data.pop(id_field)
            if ident is not None:
                data["_id"] = ident
    elif isinstance(doc, Mapping):
        data = dict(doc)
    else:
        raise MongoPersistenceError(
            f"Document must be a mapping or pydantic model, got {type(doc).__name__}"
        )
    return cast("dict[str, Any]", _serialize_value(data))
