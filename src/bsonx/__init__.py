from .column import Column, ColumnLike, as_column, column
from .compile import compile_match
from .exceptions import (
    BsonxError,
    FieldNotFoundError,
    MongoConnectionError,
    MongoPersistenceError,
    MongoQueryError,
    PathTraversalError,
    UnknownExpressionError,
    UnknownUpdateError,
    ValidationError,
)
from .expr import (
    And,
    Eq,
    Expr,
    Gt,
    Gte,
    In,
    Lt,
    Lte,
    Or,
    and_,
    eq,
    gt,
    gte,
    in_array,
    lt,
    lte,
    or_,
)
from .operators import ExprKind, UpdateKind
from .schema import SchemaPath, define_schema, path_of
from .select import select
from .update import Inc, Set, Update, compile_update, inc, set_

__all__ = [
    # Columns and paths
    "Column",
    "ColumnLike",
    "column",
    "as_column",
    "SchemaPath",
    "define_schema",
    "path_of",
    # Expressions
    "ExprKind",
    "Expr",
    "Eq",
    "Gt",
    "Gte",
    "Lt",
    "Lte",
    "In",
    "And",
    "Or",
    "eq",
    "gt",
    "gte",
    "lt",
    "lte",
    "in_array",
    "and_",
    "or_",
    # Updates
    "UpdateKind",
    "Update",
    "Set",
    "Inc",
    "set_",
    "inc",
    # Compilers
    "compile_match",
    "compile_update",
    "select",
    # Exceptions
    "BsonxError",
    "ValidationError",
    "UnknownExpressionError",
    "UnknownUpdateError",
    "FieldNotFoundError",
    "PathTraversalError",
    "MongoPersistenceError",
    "MongoConnectionError",
    "MongoQueryError",
]
