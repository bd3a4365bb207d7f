"""Column references: typed pointers to a document field path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .exceptions import ValidationError
from .schema import SchemaPath, path_of

T = TypeVar("T")


@dataclass(frozen=True)
class Column(Generic[T]):
    """
    A dot-separated field path tagged with the field's value type.

    ``T`` only exists for static checking; at runtime a column is nothing
    but its path, and two columns with the same path are equal.
    """

    path: str

    def __repr__(self) -> str:
        return f"Column({self.path!r})"


ColumnLike = Union[Column[T], SchemaPath]


def column(path: str) -> Column[Any]:
    """
    Create a column for ``path``.

    No validation is performed: empty strings and malformed dotted paths
    are accepted as-is.
    """
    return Column(path)


def as_column(ref: Any) -> Column[Any]:
    """Return ``ref`` as a :class:`Column`, extracting the path of accessors."""
    if isinstance(ref, Column):
        return ref

    if isinstance(ref, SchemaPath):
        path = path_of(ref)
        if not path:
            raise ValidationError(
                "Cannot use the schema root as a column; access a field first",
                path="<root>",
            )
        return Column(path)

    raise ValidationError(
        f"Expected a Column or schema accessor, got {type(ref).__name__}"
    )
