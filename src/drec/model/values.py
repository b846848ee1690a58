# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tagged values held by records, and their classification against schema types."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from drec.model.types import (
    ArrayTypeRef,
    ListTypeRef,
    NeverTypeRef,
    OptionalTypeRef,
    RecordTypeRef,
    ScalarType,
    ScalarTypeRef,
    TypeRef,
    UnknownTypeRef,
    array_of,
    describe_type,
    list_of,
    optional_of,
    record_of,
)

if TYPE_CHECKING:
    from drec.store.record import Record

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class CharValue:
    """A single character."""

    value: str


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class IntValue:
    value: int


@dataclass(frozen=True)
class JsonValue:
    """An arbitrary, already-parsed JSON value."""

    value: Any


@dataclass(frozen=True)
class PosixValue:
    """A point in time; serialized as milliseconds since the Unix epoch."""

    value: datetime


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class RecordValue:
    """A nested record, owned exclusively by this value."""

    record: Record


@dataclass(frozen=True)
class OptionalValue:
    """A value that may be absent. ``OptionalValue()`` is the absent case."""

    value: Value | None = None


@dataclass(frozen=True)
class ListValue:
    """An ordered, homogeneous list of element values."""

    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class ArrayValue:
    """An ordered, homogeneous, fixed-position sequence of element values."""

    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


Value = (
    BoolValue
    | CharValue
    | FloatValue
    | IntValue
    | JsonValue
    | PosixValue
    | StringValue
    | RecordValue
    | OptionalValue
    | ListValue
    | ArrayValue
)

ScalarValue = BoolValue | CharValue | FloatValue | IntValue | JsonValue | PosixValue | StringValue


def classify(value: Value) -> TypeRef:
    """Return the effective schema type of *value*.

    Containers are classified by their first element; an empty container or
    an absent optional yields an ``UnknownTypeRef`` element. A container whose
    elements disagree, or whose element is itself a container, yields a
    ``NeverTypeRef``, as does a NaN or infinite float.
    """
    if isinstance(value, FloatValue) and not _is_finite(value.value):
        return NeverTypeRef(reason=f"Float must be finite, got {value.value}")
    scalar = _SCALAR_KINDS.get(type(value))
    if scalar is not None:
        return ScalarTypeRef(scalar=scalar)
    if isinstance(value, RecordValue):
        return record_of(value.record.schema)
    if isinstance(value, OptionalValue):
        if value.value is None:
            return OptionalTypeRef(element_type=UnknownTypeRef())
        element = classify(value.value)
        if isinstance(element, NeverTypeRef):
            return element
        return optional_of(element)
    if isinstance(value, ListValue):
        return _classify_items(value.items, ListTypeRef, list_of)
    if isinstance(value, ArrayValue):
        return _classify_items(value.items, ArrayTypeRef, array_of)
    return NeverTypeRef(reason=f"not a record value: {type(value).__name__}")


def types_compatible(declared: TypeRef, actual: TypeRef) -> bool:
    """Return True if a value classified as *actual* may be stored under *declared*.

    This is structural equality, except that an ``UnknownTypeRef`` element in
    *actual* matches any element type of the same container shape.
    """
    if isinstance(actual, NeverTypeRef | UnknownTypeRef):
        return False
    if isinstance(declared, ScalarTypeRef | RecordTypeRef):
        return _elements_compatible(declared, actual)
    if isinstance(declared, OptionalTypeRef | ListTypeRef | ArrayTypeRef):
        if type(actual) is not type(declared):
            return False
        if isinstance(actual.element_type, UnknownTypeRef):
            return True
        return _elements_compatible(declared.element_type, actual.element_type)
    return False


# ################
# Implementation
# ################

_SCALAR_KINDS: dict[type, ScalarType] = {
    BoolValue: ScalarType.BOOL,
    CharValue: ScalarType.CHAR,
    FloatValue: ScalarType.FLOAT,
    IntValue: ScalarType.INT,
    JsonValue: ScalarType.JSON,
    PosixValue: ScalarType.POSIX,
    StringValue: ScalarType.STRING,
}


def _is_finite(number: float) -> bool:
    try:
        return math.isfinite(number)
    except OverflowError:
        return False


def _classify_items(items: tuple[Value, ...], container: type, build: Any) -> TypeRef:
    if not items:
        return container(element_type=UnknownTypeRef())
    first = classify(items[0])
    if isinstance(first, NeverTypeRef):
        return first
    for index, item in enumerate(items[1:], start=1):
        other = classify(item)
        if other != first:
            return NeverTypeRef(
                reason=f"element {index} is {describe_type(other)}, expected {describe_type(first)}"
            )
    return build(first)


def _elements_compatible(declared: TypeRef, actual: TypeRef) -> bool:
    if isinstance(declared, ScalarTypeRef):
        return isinstance(actual, ScalarTypeRef) and actual.scalar == declared.scalar
    if isinstance(declared, RecordTypeRef):
        if not isinstance(actual, RecordTypeRef):
            return False
        return actual.record_schema is declared.record_schema or actual.record_schema == declared.record_schema
    return False
