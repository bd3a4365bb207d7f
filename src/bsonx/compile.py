"""Match compiler: expression AST → MongoDB filter document."""

from __future__ import annotations

import copy
from typing import Any

from .exceptions import UnknownExpressionError, ValidationError
from .expr import And, Eq, Expr, Gt, Gte, In, Lt, Lte, Or
from .operators import ExprKind

_MONGO_OP_MAP: dict[type, str] = {
    Gt: "$gt",
    Gte: "$gte",
    Lt: "$lt",
    Lte: "$lte",
}

_VALID_KINDS: list[str] = [k.value for k in ExprKind]


def compile_match(expr: Expr) -> dict[str, Any]:
    """
    Compile an expression into a filter for ``find`` or a ``$match`` stage.

    ========  ============================================
    kind      output
    ========  ============================================
    eq        ``{path: val}``
    gt/gte    ``{path: {"$gt"/"$gte": val}}``
    lt/lte    ``{path: {"$lt"/"$lte": val}}``
    in        ``{path: {"$in": [vals...]}}``
    and       ``{"$and": [compiled children...]}``
    or        ``{"$or": [compiled children...]}``
    ========  ============================================

    Compounds are compiled structurally and never flattened. An empty
    ``and`` compiles to ``{}`` (matches everything) and an empty ``or`` to
    ``{"$nor": [{}]}`` (matches nothing).

    Raises:
        UnknownExpressionError: ``expr`` (or any descendant) is not one of
            the eight expression variants.
        ValidationError: an ``in`` node carries something other than a
            list or tuple.
    """
    # Exact type match: subclasses of a variant are not variants
    node_type = type(expr)

    if node_type is Eq:
        return {expr.col.path: copy.deepcopy(expr.val)}

    mongo_op = _MONGO_OP_MAP.get(node_type)
    if mongo_op:
        return {expr.col.path: {mongo_op: copy.deepcopy(expr.val)}}

    if node_type is In:
        if not isinstance(expr.val, (list, tuple)):
            raise ValidationError(
                f"'in' expects a list or tuple of values, "
                f"got {type(expr.val).__name__}",
                path=expr.col.path,
            )
        return {expr.col.path: {"$in": copy.deepcopy(list(expr.val))}}

    if node_type is And:
        if not expr.exprs:
            return {}
        return {"$and": [compile_match(child) for child in expr.exprs]}

    if node_type is Or:
        if not expr.exprs:
            # MongoDB rejects an empty $or array
            return {"$nor": [{}]}
        return {"$or": [compile_match(child) for child in expr.exprs]}

    raise UnknownExpressionError(expr, _VALID_KINDS)
