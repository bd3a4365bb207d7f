"""Update AST and its compiler: field mutations → MongoDB update document."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, Union

from .column import Column, as_column
from .exceptions import UnknownUpdateError
from .operators import UpdateKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .column import ColumnLike

T = TypeVar("T")


@dataclass(frozen=True)
class Set(Generic[T]):
    kind: ClassVar[UpdateKind] = UpdateKind.SET

    col: Column[T]
    val: T


@dataclass(frozen=True)
class Inc:
    kind: ClassVar[UpdateKind] = UpdateKind.INC

    col: Column[float]
    val: float


Update = Union[Set[Any], Inc]

_OPERATORS: dict[type, str] = {
    Set: "$set",
    Inc: "$inc",
}

_VALID_KINDS: list[str] = [k.value for k in UpdateKind]


def set_(col: ColumnLike[T], val: T) -> Set[T]:
    """Assign ``val`` to the field."""
    return Set(as_column(col), val)


def inc(col: ColumnLike[float], val: float) -> Inc:
    """Increment the numeric field by ``val``."""
    return Inc(as_column(col), val)


def compile_update(updates: Iterable[Update]) -> dict[str, Any]:
    """
    Reduce update descriptors into a single MongoDB update document.

    Behaviour:
    - ``set`` nodes land in ``$set[path]``, ``inc`` nodes in ``$inc[path]``.
    - Within one operator the last node targeting a path wins. Operators
      are independent: a ``set`` and an ``inc`` on the same path coexist.
    - An operator key is present only if some node used it, so an empty
      input yields ``{}``.

    Example::

        compile_update([set_(column("name"), "Alice"), inc(column("visits"), 1)])
        # -> {"$set": {"name": "Alice"}, "$inc": {"visits": 1}}

    Raises:
        UnknownUpdateError: an element is not a ``Set`` or ``Inc`` node.
    """
    document: dict[str, Any] = {}
    for upd in updates:
        operator = _OPERATORS.get(type(upd))
        if operator is None:
            raise UnknownUpdateError(upd, _VALID_KINDS)
        document.setdefault(operator, {})[upd.col.path] = copy.deepcopy(upd.val)
    return document
