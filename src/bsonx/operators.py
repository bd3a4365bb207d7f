from enum import Enum


class ExprKind(str, Enum):
    """Tags of the expression variants accepted by the match compiler."""

    # Comparison
    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"

    # Logical
    AND = "and"
    OR = "or"


class UpdateKind(str, Enum):
    """Tags of the update variants accepted by the update compiler."""

    SET = "set"
    INC = "inc"
