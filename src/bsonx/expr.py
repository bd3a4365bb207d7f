"""
Expression AST: predicates over columns.

Eight frozen variants form a closed set. Comparison variants hold a column
and a value; ``And``/``Or`` hold an ordered tuple of child expressions::

    adults = and_(gte(users.age, 18), lt(users.age, 65))
    either = eq(users.status, "active") | gt(users.score, 75)

Constructors only stamp the kind and store their arguments; nothing is
evaluated and nothing is validated beyond the shape of ``in_array`` values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, Union

from .column import Column, as_column
from .exceptions import ValidationError
from .operators import ExprKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .column import ColumnLike

T = TypeVar("T")


class _ExprOps:
    """Logical operator sugar shared by all expression variants."""

    __slots__ = ()

    def __and__(self, other: Expr) -> And:
        if type(other) not in _VARIANTS:
            return NotImplemented
        return And((self, other))  # type: ignore[arg-type]

    def __or__(self, other: Expr) -> Or:
        if type(other) not in _VARIANTS:
            return NotImplemented
        return Or((self, other))  # type: ignore[arg-type]


@dataclass(frozen=True)
class Eq(_ExprOps, Generic[T]):
    kind: ClassVar[ExprKind] = ExprKind.EQ

    col: Column[T]
    val: T


@dataclass(frozen=True)
class Gt(_ExprOps):
    kind: ClassVar[ExprKind] = ExprKind.GT

    col: Column[float]
    val: float


@dataclass(frozen=True)
class Gte(_ExprOps):
    kind: ClassVar[ExprKind] = ExprKind.GTE

    col: Column[float]
    val: float


@dataclass(frozen=True)
class Lt(_ExprOps):
    kind: ClassVar[ExprKind] = ExprKind.LT

    col: Column[float]
    val: float


@dataclass(frozen=True)
class Lte(_ExprOps):
    kind: ClassVar[ExprKind] = ExprKind.LTE

    col: Column[float]
    val: float


@dataclass(frozen=True)
class In(_ExprOps, Generic[T]):
    kind: ClassVar[ExprKind] = ExprKind.IN

    col: Column[T]
    val: tuple[T, ...]


@dataclass(frozen=True)
class And(_ExprOps):
    kind: ClassVar[ExprKind] = ExprKind.AND

    exprs: tuple[Expr, ...]


@dataclass(frozen=True)
class Or(_ExprOps):
    kind: ClassVar[ExprKind] = ExprKind.OR

    exprs: tuple[Expr, ...]


Expr = Union[Eq[Any], Gt, Gte, Lt, Lte, In[Any], And, Or]

_VARIANTS: frozenset[type] = frozenset((Eq, Gt, Gte, Lt, Lte, In, And, Or))


# -- constructors -------------------------------------------------------------


def eq(col: ColumnLike[T], val: T) -> Eq[T]:
    """Equality: ``col == val``. Any value type, including ``None``."""
    return Eq(as_column(col), val)


def gt(col: ColumnLike[float], val: float) -> Gt:
    """Greater than: ``col > val``."""
    return Gt(as_column(col), val)


def gte(col: ColumnLike[float], val: float) -> Gte:
    """Greater than or equal: ``col >= val``."""
    return Gte(as_column(col), val)


def lt(col: ColumnLike[float], val: float) -> Lt:
    """Less than: ``col < val``."""
    return Lt(as_column(col), val)


def lte(col: ColumnLike[float], val: float) -> Lte:
    """Less than or equal: ``col <= val``."""
    return Lte(as_column(col), val)


def in_array(col: ColumnLike[T], vals: Sequence[T]) -> In[T]:
    """
    Membership: the column's value is one of ``vals``.

    ``vals`` must be a list or tuple; order is preserved and nothing is
    deduplicated. Strings, sets, mappings and iterators are rejected.
    """
    target = as_column(col)
    if not isinstance(vals, (list, tuple)):
        raise ValidationError(
            f"in_array expects a list or tuple of values, got {type(vals).__name__}",
            path=target.path,
        )
    return In(target, tuple(vals))


def and_(*exprs: Expr) -> And:
    """
    Logical conjunction of ``exprs`` in the given order.

    ``and_()`` builds an empty conjunction, which compiles to a filter that
    matches every document.
    """
    return And(exprs)


def or_(*exprs: Expr) -> Or:
    """
    Logical disjunction of ``exprs`` in the given order.

    ``or_()`` builds an empty disjunction, which compiles to a filter that
    matches no document.
    """
    return Or(exprs)
