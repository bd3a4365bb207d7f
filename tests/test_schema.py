"""Tests for typed path accessors."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Optional, TypedDict

import pytest
from pydantic import BaseModel

from bsonx import (
    Column,
    FieldNotFoundError,
    PathTraversalError,
    SchemaPath,
    ValidationError,
    as_column,
    column,
    define_schema,
    path_of,
)


class Geo(BaseModel):
    lat: float
    lng: float


class Address(BaseModel):
    city: str
    zip_code: str | None = None
    geo: Optional[Geo] = None


class Order(BaseModel):
    sku: str
    qty: int


class User(BaseModel):
    name: str
    age: int
    address: Address
    tags: list[str] = []
    orders: list[Order] = []
    meta: dict[str, Any] = {}
    scores: dict[str, int] = {}


@dataclass
class Point:
    x: float
    y: float


class Canvas(TypedDict):
    title: str
    origin: Point


@pytest.fixture
def users() -> SchemaPath:
    return define_schema(User)


# -- Path accumulation -------------------------------------------------------


def test_nested_field_path(users: SchemaPath) -> None:
    assert path_of(users.address.city) == "address.city"


def test_root_path_is_empty(users: SchemaPath) -> None:
    assert path_of(users) == ""


def test_item_access_matches_attribute_access(users: SchemaPath) -> None:
    assert path_of(users["address"]["city"]) == path_of(users.address.city)


def test_optional_submodel_unwraps(users: SchemaPath) -> None:
    assert path_of(users.address.geo.lat) == "address.geo.lat"


def test_sequence_index_is_stringified(users: SchemaPath) -> None:
    assert path_of(users.tags[0]) == "tags.0"
    assert path_of(users.orders[1].qty) == "orders.1.qty"
    assert path_of(users.orders["2"].sku) == "orders.2.sku"


def test_sequence_implicit_traversal(users: SchemaPath) -> None:
    assert path_of(users.orders.sku) == "orders.sku"


def test_mapping_accepts_any_key(users: SchemaPath) -> None:
    assert path_of(users.scores.math) == "scores.math"
    assert path_of(users.meta.anything.deeper) == "meta.anything.deeper"


def test_dataclass_and_typeddict_schemas() -> None:
    canvas = define_schema(Canvas)
    assert path_of(canvas.origin.x) == "origin.x"
    with pytest.raises(FieldNotFoundError):
        _ = canvas.origin.z


def test_generic_builder_accepts_anything() -> None:
    doc = define_schema()
    assert path_of(doc.a.b[3]["c.d"]) == "a.b.3.c.d"
    assert path_of(doc["_id"]) == "_id"


# -- Immutability ------------------------------------------------------------


def test_extraction_is_repeatable(users: SchemaPath) -> None:
    address = users.address
    assert path_of(address) == "address"
    _ = address.city
    assert path_of(address) == "address"
    assert path_of(address) == "address"


def test_accessor_cannot_be_mutated(users: SchemaPath) -> None:
    with pytest.raises(AttributeError):
        users.address = "x"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        del users.address


def test_copies_are_the_same_accessor(users: SchemaPath) -> None:
    city = users.address.city
    assert copy.copy(city) is city
    assert copy.deepcopy(city) is city


def test_accessor_is_not_iterable() -> None:
    with pytest.raises(TypeError):
        list(define_schema())


def test_private_names_are_not_steps(users: SchemaPath) -> None:
    with pytest.raises(AttributeError):
        _ = users._secret


def test_dir_lists_schema_fields(users: SchemaPath) -> None:
    assert {"name", "age", "address"} <= set(dir(users))


# -- Errors ------------------------------------------------------------------


def test_unknown_field_suggests_close_match(users: SchemaPath) -> None:
    with pytest.raises(FieldNotFoundError) as exc_info:
        _ = users.adress
    err = exc_info.value
    assert err.schema_name == "User"
    assert "address" in err.suggestions
    assert err.full_path == "adress"


def test_unknown_nested_field_reports_full_path(users: SchemaPath) -> None:
    with pytest.raises(FieldNotFoundError) as exc_info:
        _ = users.address.town
    assert exc_info.value.full_path == "address.town"


def test_scalar_field_cannot_be_traversed(users: SchemaPath) -> None:
    with pytest.raises(PathTraversalError) as exc_info:
        _ = users.age.years
    assert exc_info.value.field == "age"
    assert exc_info.value.full_path == "age.years"


def test_scalar_sequence_items_cannot_be_traversed(users: SchemaPath) -> None:
    with pytest.raises(PathTraversalError):
        _ = users.tags.upper


@pytest.mark.parametrize("key", [1.5, True, None, ("a",)])
def test_unsupported_key_types(key: Any) -> None:
    with pytest.raises(PathTraversalError):
        _ = define_schema()[key]


@pytest.mark.parametrize("model", [int, str, list[int]])
def test_schema_must_describe_a_document(model: Any) -> None:
    with pytest.raises(ValidationError):
        define_schema(model)


def test_path_of_rejects_non_accessor() -> None:
    with pytest.raises(ValidationError):
        path_of(column("a"))  # type: ignore[arg-type]


# -- Conversion to columns ---------------------------------------------------


def test_as_column_extracts_path(users: SchemaPath) -> None:
    col = as_column(users.address.city)
    assert isinstance(col, Column)
    assert col == column("address.city")


def test_root_accessor_is_not_a_column(users: SchemaPath) -> None:
    with pytest.raises(ValidationError):
        as_column(users)
