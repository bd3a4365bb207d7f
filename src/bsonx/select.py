"""Projection compiler: output-field shape → MongoDB projection document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .column import Column, as_column
from .exceptions import ValidationError
from .schema import SchemaPath

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .column import ColumnLike


def select(shape: Mapping[str, ColumnLike[Any]]) -> dict[str, str]:
    """
    Build a projection mapping each output field to ``"$" + column.path``.

    Suitable for a ``$project`` stage or an expression projection::

        select({"firstName": users.name.first, "age": column("metadata.age")})
        # -> {"firstName": "$name.first", "age": "$metadata.age"}

    Raises:
        ValidationError: a value is missing or is not a column/accessor.
    """
    projection: dict[str, str] = {}
    for output_field, ref in shape.items():
        if not isinstance(ref, (Column, SchemaPath)):
            raise ValidationError(
                f"Projection field '{output_field}' needs a column, "
                f"got {type(ref).__name__}",
                path=output_field,
            )
        col = as_column(ref)
        if not isinstance(col.path, str):
            raise ValidationError(
                f"Projection field '{output_field}' has no column path",
                path=output_field,
            )
        projection[output_field] = f"${col.path}"
    return projection
