"""
Typed path accessors for building dot-separated field paths.

``define_schema(User)`` returns an immutable :class:`SchemaPath` rooted at
the document. Every attribute or item step returns a *new* accessor whose
path is the parent's path, a literal ``.``, and the accessed key::

    class Address(BaseModel):
        city: str

    class User(BaseModel):
        name: str
        address: Address
        tags: list[str]

    users = define_schema(User)
    path_of(users.address.city)     # -> "address.city"
    path_of(users.tags[0])          # -> "tags.0"
    users.adress                    # FieldNotFoundError (did you mean 'address'?)

When a schema type is given, the accessible names are enumerated from its
annotations (pydantic ``model_fields``, or ``typing.get_type_hints`` for
dataclasses and ``TypedDict``). Without one, the accessor accepts any name.

Keys containing ``.`` are inserted verbatim; callers that need unambiguous
paths must not use such names.
"""

from __future__ import annotations

import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, is_dataclass
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    Literal,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

from pydantic import BaseModel

from .exceptions import FieldNotFoundError, PathTraversalError, ValidationError

_GENERIC_NAME = "<schema>"


# ---------------------------------------------------------------------------
# Shapes: what the schema says about the current position
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _ModelShape:
    model: type[Any]

    @property
    def name(self) -> str:
        return self.model.__name__

    def fields(self) -> dict[str, Any]:
        return _fields_of(self.model)


@dataclass(frozen=True)
class _SequenceShape:
    item: _Shape


@dataclass(frozen=True)
class _MappingShape:
    value: _Shape


@dataclass(frozen=True)
class _LeafShape:
    name: str


# ``None`` means "unknown": any key is accepted.
_Shape = Union[_ModelShape, _SequenceShape, _MappingShape, _LeafShape, None]


@lru_cache(maxsize=256)
def _fields_of(model: type[Any]) -> dict[str, Any]:
    if issubclass(model, BaseModel):
        return {name: info.annotation for name, info in model.model_fields.items()}
    return get_type_hints(model)


def _is_model(tp: type[Any]) -> bool:
    return issubclass(tp, BaseModel) or is_dataclass(tp) or is_typeddict(tp)


def _shape_for(tp: Any) -> _Shape:
    """Resolve a type annotation to the shape of the value it describes."""
    if tp is Any or tp is None:
        return None

    origin = get_origin(tp)
    if origin is Literal:
        return _LeafShape("Literal")
    if origin is Annotated:
        return _shape_for(get_args(tp)[0])
    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(tp) if a is not type(None)]
        # Optional[X] unwraps to X; wider unions are left unchecked
        return _shape_for(members[0]) if len(members) == 1 else None

    if origin is not None and isinstance(origin, type):
        args = get_args(tp)
        if issubclass(origin, Mapping):
            return _MappingShape(_shape_for(args[1]) if len(args) == 2 else None)
        if issubclass(origin, (Sequence, set, frozenset)) and not issubclass(
            origin, (str, bytes)
        ):
            return _SequenceShape(_shape_for(args[0]) if args else None)
        return _LeafShape(origin.__name__)

    if isinstance(tp, type):
        if _is_model(tp):
            return _ModelShape(tp)
        if issubclass(tp, Mapping):
            return _MappingShape(None)
        if issubclass(tp, (list, tuple, set, frozenset)):
            return _SequenceShape(None)
        return _LeafShape(tp.__name__)

    return None


# ---------------------------------------------------------------------------
# Accessor
# ---------------------------------------------------------------------------


class SchemaPath:
    """
    Immutable accessor carrying an accumulated field path.

    Attribute access (``users.address``) and item access
    (``users["address"]``, ``users.items[0]``) both take one step. Names
    starting with ``_`` are never attribute steps; use item access for them.
    Read the path with :func:`path_of` or turn it into a column with
    :func:`bsonx.column.as_column`.
    """

    __slots__ = ("_path", "_shape")

    _path: str
    _shape: _Shape

    def __init__(self, path: str = "", shape: _Shape = None) -> None:
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_shape", shape)

    def __getattr__(self, name: str) -> SchemaPath:
        if name.startswith("_"):
            raise AttributeError(name)
        return _step(self, name)

    def __getitem__(self, key: str | int) -> SchemaPath:
        return _step(self, key)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("SchemaPath is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("SchemaPath is immutable")

    def __iter__(self) -> Any:
        # Without this, __getitem__ would make every accessor an endless iterable
        raise TypeError("SchemaPath is not iterable")

    def __copy__(self) -> SchemaPath:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> SchemaPath:
        return self

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        if isinstance(self._shape, _ModelShape):
            names.update(self._shape.fields())
        return sorted(names)

    def __repr__(self) -> str:
        return f"SchemaPath({self._path!r})"


def _schema_name(shape: _Shape) -> str:
    if isinstance(shape, (_ModelShape, _LeafShape)):
        return shape.name
    return _GENERIC_NAME


def _step(parent: SchemaPath, key: Any) -> SchemaPath:
    path = parent._path
    shape = parent._shape

    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise PathTraversalError(
            repr(key),
            _schema_name(shape),
            full_path=path or None,
            reason="keys must be strings or integers",
        )

    name = str(key)
    new_path = f"{path}.{name}" if path else name

    if isinstance(shape, _SequenceShape):
        if isinstance(key, int) or name.isdigit():
            return SchemaPath(new_path, shape.item)
        # Implicit array traversal: items.name addresses every element's name
        return _step(SchemaPath(path, shape.item), key)

    child: _Shape
    if shape is None:
        child = None
    elif isinstance(shape, _MappingShape):
        child = shape.value
    elif isinstance(shape, _ModelShape):
        fields = shape.fields()
        if name not in fields:
            raise FieldNotFoundError(
                name, shape.name, list(fields), full_path=new_path
            )
        child = _shape_for(fields[name])
    else:
        last = path.rsplit(".", 1)[-1]
        raise PathTraversalError(last or name, shape.name, full_path=new_path)

    return SchemaPath(new_path, child)


def define_schema(model: type[Any] | None = None) -> SchemaPath:
    """
    Create the root accessor for documents shaped like ``model``.

    ``model`` may be a pydantic model, a dataclass, a ``TypedDict``, or a
    mapping type. Pass nothing to get an unchecked string-path builder.
    """
    if model is None:
        return SchemaPath()
    shape = _shape_for(model)
    if isinstance(shape, (_LeafShape, _SequenceShape)):
        name = getattr(model, "__name__", model)
        raise ValidationError(
            f"Schema must describe a document, got {name!r}",
            path="<root>",
        )
    return SchemaPath("", shape)


def path_of(accessor: SchemaPath) -> str:
    """
    Return the path accumulated by ``accessor``.

    Reading the path never mutates or invalidates the accessor.
    """
    if not isinstance(accessor, SchemaPath):
        raise ValidationError(
            f"Expected a schema accessor, got {type(accessor).__name__}"
        )
    return accessor._path
