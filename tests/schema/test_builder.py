# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for incremental schema construction."""

from enum import Enum, auto

import pytest

from drec.casing import camel_case, kebab_case
from drec.errors import ErrorKind
from drec.model.types import INT, STRING, NeverTypeRef, UnknownTypeRef, list_of, optional_of, record_of
from drec.schema.builder import (
    declare_field,
    declare_field_with_message,
    nested_schema_of,
    new_schema,
    with_casing,
    with_indent,
)
from drec.store.record import Record

# ###############
# Helpers
# ###############


class Field(Enum):
    FIRST_NAME = auto()
    LAST_NAME = auto()
    HomeAddress = auto()


# ###############
# Normal Cases
# ###############


def test_new_schema_is_empty() -> None:
    schema = new_schema()
    assert schema.is_empty
    assert schema.keys == ()
    assert not schema.has_errors
    assert schema.indent == 0


def test_declaration_order_is_preserved() -> None:
    schema = new_schema()
    for name in ["zeta", "alpha", "mid"]:
        schema = declare_field(schema, name, INT)
    assert schema.keys == ("zeta", "alpha", "mid")
    assert schema.field_ids == ("zeta", "alpha", "mid")


def test_enum_names_are_snake_cased_by_default() -> None:
    schema = new_schema()
    for field in Field:
        schema = declare_field(schema, field, STRING)
    assert schema.keys == ("first_name", "last_name", "home_address")
    assert schema.key_of(Field.HomeAddress) == "home_address"


def test_custom_casing() -> None:
    schema = declare_field(new_schema(casing=camel_case), Field.FIRST_NAME, STRING)
    assert schema.keys == ("firstName",)


def test_explicit_key_bypasses_casing() -> None:
    """An explicit key is recorded in the identifier-to-key table."""
    schema = declare_field(new_schema(), Field.FIRST_NAME, STRING, key="given")
    assert schema.keys == ("given",)
    assert schema.key_of(Field.FIRST_NAME) == "given"
    assert schema.type_of("given") == STRING
    assert schema.type_of("first_name") is None


def test_declaring_returns_a_new_schema() -> None:
    """Builder calls never modify their input schema."""
    base = declare_field(new_schema(), "a", INT)
    extended = declare_field(base, "b", INT)
    assert base.keys == ("a",)
    assert extended.keys == ("a", "b")


def test_declare_with_message() -> None:
    schema = declare_field_with_message(new_schema(), "age", INT, "Enter your age in years")
    assert schema.message_of("age") == "Enter your age in years"
    assert schema.message_of("other") is None


def test_nested_schema_of_record() -> None:
    inner = declare_field(new_schema(), "a", INT)
    outer = declare_field(new_schema(), "inner", record_of(nested_schema_of(Record(inner))))
    nested = outer.type_of("inner")
    assert nested is not None
    assert nested.record_schema is inner


def test_nested_schema_of_non_record() -> None:
    with pytest.raises(TypeError):
        nested_schema_of("not a record")


def test_with_indent() -> None:
    schema = with_indent(declare_field(new_schema(), "a", INT), 2)
    assert schema.indent == 2
    assert schema.keys == ("a",)


def test_with_casing_on_empty_schema() -> None:
    schema = declare_field(with_casing(new_schema(), kebab_case), Field.LAST_NAME, STRING)
    assert schema.keys == ("last-name",)


# ###############
# Error Cases
# ###############


def test_duplicate_field_is_recorded() -> None:
    """A second declaration of the same key is an error and leaves the mapping unchanged."""
    schema = declare_field(new_schema(), "a", INT)
    schema = declare_field(schema, "a", STRING)

    assert schema.keys == ("a",)
    assert schema.type_of("a") == INT
    assert [e.kind for e in schema.errors] == [ErrorKind.DUPLICATE_FIELD]
    assert schema.errors[0].key == "a"


def test_duplicate_through_casing() -> None:
    """Identifiers that case to the same key are duplicates."""
    schema = declare_field(new_schema(), "firstName", STRING)
    schema = declare_field(schema, Field.FIRST_NAME, STRING)
    assert schema.has_errors
    assert schema.errors[0].message == "Duplicate field 'first_name'"


def test_identifier_redeclared_under_another_key() -> None:
    """An identifier keeps its first key; a second declaration with a new key is a duplicate."""
    schema = declare_field(new_schema(), Field.FIRST_NAME, STRING, key="given")
    schema = declare_field(schema, Field.FIRST_NAME, STRING, key="forename")

    assert schema.keys == ("given",)
    assert schema.key_of(Field.FIRST_NAME) == "given"
    assert schema.type_of("forename") is None
    assert [e.kind for e in schema.errors] == [ErrorKind.DUPLICATE_FIELD]
    assert schema.errors[0].message == "Duplicate field 'given'"


def test_error_survives_later_declarations() -> None:
    schema = declare_field(declare_field(new_schema(), "a", INT), "a", INT)
    schema = declare_field(schema, "b", INT)
    assert schema.has_errors
    assert schema.keys == ("a", "b")


@pytest.mark.parametrize(
    "type_ref",
    [list_of(list_of(INT)), optional_of(optional_of(INT)), NeverTypeRef(), UnknownTypeRef()],
)
def test_unresolvable_type_is_recorded(type_ref) -> None:
    schema = declare_field(new_schema(), "bad", type_ref)
    assert schema.is_empty
    assert [e.kind for e in schema.errors] == [ErrorKind.INVALID_SCHEMA_TYPE]


def test_invalid_nested_schema_invalidates_parent() -> None:
    inner = declare_field(declare_field(new_schema(), "a", INT), "a", INT)
    outer = declare_field(new_schema(), "inner", list_of(record_of(inner)))
    assert outer.keys == ("inner",)
    assert [e.kind for e in outer.errors] == [ErrorKind.INVALID_SCHEMA_TYPE]
    assert "Duplicate field 'a'" in outer.errors[0].message


def test_with_casing_after_fields_is_an_error() -> None:
    schema = with_casing(declare_field(new_schema(), "a", INT), camel_case)
    assert schema.has_errors
    assert schema.keys == ("a",)


def test_negative_indent_is_an_error() -> None:
    assert new_schema(indent=-1).has_errors
    assert with_indent(new_schema(), -2).has_errors
