# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema-bound records with per-field input buffering and error tracking.

Each declared field of a :class:`Record` is in one of three states:

* **unset**: nothing has been committed yet;
* **committed**: a value of the declared type is stored;
* **buffered**: the last input was rejected. The raw input text and the
  error are kept so a form can keep showing them. A value committed earlier
  stays in the store, but the field does not count as having a value until
  a valid input replaces the buffer.

Writes never raise. Rejected input, type mismatches and writes to undeclared
fields are recorded and can be inspected with :meth:`Record.field_error`,
:meth:`Record.errors` and :meth:`Record.is_valid`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Hashable, Iterable, Mapping
from datetime import datetime
from typing import Any, TypeVar

from drec.codec.json_codec import stringify
from drec.codec.text import display_text, text_converter
from drec.errors import (
    FieldAccessError,
    RecordError,
    invalid_schema_type,
    missing_value,
    type_mismatch,
    unknown_field,
    validation_failed,
)
from drec.model.types import NeverTypeRef, Schema, describe_type
from drec.model.values import (
    ArrayValue,
    BoolValue,
    CharValue,
    FloatValue,
    IntValue,
    JsonValue,
    ListValue,
    OptionalValue,
    PosixValue,
    RecordValue,
    StringValue,
    Value,
    classify,
    types_compatible,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ###############
# Public Interface
# ###############


class Record:
    """A mutable record instance bound to one immutable schema.

    A record is meant to have a single owner; it is not safe to share one
    instance between threads. Schemas, on the other hand, may be shared
    freely.
    """

    def __init__(self, schema: Schema) -> None:
        self._schema = schema
        self._store: dict[str, Value] = {}
        self._buffers: dict[str, str] = {}
        self._errors: dict[str, RecordError] = {}

    @classmethod
    def from_values(cls, schema: Schema, values: Mapping[str, Value]) -> Record:
        """Create a record and commit *values*, given by serialized key.

        Each value passes through the same type check as any other write.
        """
        record = cls(schema)
        for key, value in values.items():
            record._write(key, _identity, value)
        return record

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def fields(self) -> tuple[Hashable, ...]:
        """Declared field identifiers in declaration order."""
        return self._schema.field_ids

    @property
    def keys(self) -> tuple[str, ...]:
        """Declared serialized keys in declaration order."""
        return self._schema.keys

    def set_with(self, field_id: Hashable, converter: Callable[[T], Value | None], raw: T) -> None:
        """Convert *raw* with *converter* and commit or buffer the result.

        * Undeclared field: an ``UnknownField`` error is recorded; nothing is
          buffered.
        * Converter returns None: *raw* is buffered as text with a
          ``ValidationFailed`` error (the field's custom message if one was
          declared). A previously committed value is kept.
        * Converted value does not match the declared type: *raw* is
          buffered with a ``TypeMismatch`` error (``InvalidSchemaType`` if the
          value has no resolvable type at all).
        * Otherwise the value is committed and any buffer or error for the
          field is cleared. Nested records inside the value are copied, so
          later changes to the caller's records do not reach this one.
        """
        self._write(self._schema.key_of(field_id), converter, raw)

    def update(self, field_id: Hashable, text: str) -> None:
        """Set a field from form text, parsed by the default converter for its type.

        See :func:`drec.codec.text.text_converter` for the accepted formats.
        """
        key = self._schema.key_of(field_id)
        declared = self._schema.type_of(key)
        if declared is None:
            self._record_unknown(key)
            return
        self._write(key, text_converter(declared), text)

    def set_bool(self, field_id: Hashable, value: bool) -> None:
        self.set_with(field_id, _identity, BoolValue(value))

    def set_char(self, field_id: Hashable, value: str) -> None:
        """Set a character field; anything but a single character fails validation."""
        self.set_with(field_id, _char_value, value)

    def set_float(self, field_id: Hashable, value: float) -> None:
        """Set a float field; NaN, infinities and numbers too large for a float fail validation."""
        self.set_with(field_id, _float_value, value)

    def set_int(self, field_id: Hashable, value: int) -> None:
        self.set_with(field_id, _identity, IntValue(value))

    def set_json(self, field_id: Hashable, value: Any) -> None:
        self.set_with(field_id, _identity, JsonValue(value))

    def set_posix(self, field_id: Hashable, value: datetime) -> None:
        self.set_with(field_id, _identity, PosixValue(value))

    def set_string(self, field_id: Hashable, value: str) -> None:
        self.set_with(field_id, _identity, StringValue(value))

    def set_optional(self, field_id: Hashable, value: Value | None) -> None:
        """Set an optional field; ``None`` commits the absent value."""
        self.set_with(field_id, _identity, OptionalValue(value))

    def set_list(self, field_id: Hashable, items: Iterable[Value]) -> None:
        self.set_with(field_id, _identity, ListValue(tuple(items)))

    def set_array(self, field_id: Hashable, items: Iterable[Value]) -> None:
        self.set_with(field_id, _identity, ArrayValue(tuple(items)))

    def set_record(self, field_id: Hashable, record: Record) -> None:
        """Set a nested record field to a copy of *record*."""
        self.set_with(field_id, _identity, RecordValue(record))

    def clear(self) -> None:
        """Reset every field to unset, keeping the schema."""
        self._store.clear()
        self._buffers.clear()
        self._errors.clear()

    def get(self, field_id: Hashable) -> Value:
        """Return the committed value of a field.

        Raises:
            FieldAccessError: Carrying ``UnknownField`` for an undeclared
                field, the recorded error for a buffered field, or
                ``MissingValue`` for a field that was never set.
        """
        key = self._schema.key_of(field_id)
        if self._schema.type_of(key) is None:
            raise FieldAccessError(unknown_field(key))
        if key in self._buffers:
            raise FieldAccessError(self._errors[key])
        value = self._store.get(key)
        if value is None:
            raise FieldAccessError(missing_value(key))
        return value

    def retrieve(self, field_id: Hashable) -> tuple[str, RecordError | None]:
        """Return a field's text for form binding together with its error, if any.

        A buffered field yields its rejected input, a committed field the
        display text of its value, and an unset field an empty string with a
        ``MissingValue`` error.
        """
        key = self._schema.key_of(field_id)
        if self._schema.type_of(key) is None:
            return "", unknown_field(key)
        if key in self._buffers:
            return self._buffers[key], self._errors.get(key)
        value = self._store.get(key)
        if value is None:
            return "", missing_value(key)
        return display_text(value), None

    def last_value(self, field_id: Hashable) -> Value | None:
        """Return the last committed value of a field, even while a rejected input is buffered."""
        return self._store.get(self._schema.key_of(field_id))

    def has_value(self, field_id: Hashable) -> bool:
        """Return True if the field holds a committed value and no pending rejected input."""
        key = self._schema.key_of(field_id)
        return key in self._store and key not in self._buffers

    def field_error(self, field_id: Hashable) -> RecordError | None:
        """Return the outstanding error of a field, if any."""
        key = self._schema.key_of(field_id)
        if self._schema.type_of(key) is None:
            return unknown_field(key)
        return self._errors.get(key)

    def field_buffer(self, field_id: Hashable) -> str | None:
        """Return the rejected raw input of a field, if it is buffered."""
        return self._buffers.get(self._schema.key_of(field_id))

    def committed_items(self) -> list[tuple[str, Value]]:
        """Return (key, value) pairs of committed, unbuffered fields in declaration order."""
        return [
            (key, self._store[key])
            for key in self._schema.keys
            if key in self._store and key not in self._buffers
        ]

    def errors(self) -> list[RecordError]:
        """Return all outstanding errors, schema errors first."""
        return list(self._schema.errors) + list(self._errors.values())

    def record_errors(self) -> list[RecordError]:
        """Return errors not tied to a declared field: schema errors and unknown-field writes."""
        return list(self._schema.errors) + [
            error for key, error in self._errors.items() if self._schema.type_of(key) is None
        ]

    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors()]

    def is_valid(self) -> bool:
        """Return True if there are no errors and every declared field has a value.

        An optional field needs an explicit absent value to count as set.
        """
        if self._schema.errors or self._errors:
            return False
        return all(key in self._store for key in self._schema.keys)

    def copy(self) -> Record:
        """Return an independent copy; nested records are copied too."""
        twin = Record(self._schema)
        twin._store = {key: _copy_value(value) for key, value in self._store.items()}
        twin._buffers = dict(self._buffers)
        twin._errors = dict(self._errors)
        return twin

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return (
            self._schema == other._schema
            and self._store == other._store
            and self._buffers == other._buffers
            and self._errors == other._errors
        )

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={display_text(value)!r}" for key, value in self.committed_items())
        return f"Record({fields})"

    def _write(self, key: str, converter: Callable[[Any], Value | None], raw: Any) -> None:
        declared = self._schema.type_of(key)
        if declared is None:
            self._record_unknown(key)
            return

        value = converter(raw)
        if value is None:
            self._reject(key, raw, validation_failed(key, self._schema.message_of(key)))
            return

        actual = classify(value)
        if isinstance(actual, NeverTypeRef):
            self._reject(key, raw, invalid_schema_type(key, actual.reason))
        elif not types_compatible(declared, actual):
            self._reject(key, raw, type_mismatch(key, describe_type(declared), describe_type(actual)))
        else:
            self._store[key] = _copy_value(value)
            self._buffers.pop(key, None)
            self._errors.pop(key, None)

    def _reject(self, key: str, raw: Any, error: RecordError) -> None:
        logger.debug("Rejected input for '%s': %s", key, error.message)
        self._buffers[key] = _raw_text(raw)
        self._errors[key] = error

    def _record_unknown(self, key: str) -> None:
        logger.debug("Write to undeclared field '%s'", key)
        self._errors[key] = unknown_field(key)


# ################
# Implementation
# ################


def _identity(value: Value) -> Value:
    return value


def _char_value(value: str) -> Value | None:
    if not isinstance(value, str) or len(value) != 1:
        return None
    return CharValue(value)


def _float_value(value: float) -> Value | None:
    try:
        number = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return FloatValue(number)


def _raw_text(raw: Any) -> str:
    """Return the text kept in a buffer for a rejected input."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Record):
        return stringify(raw, indent=0)
    if isinstance(raw, Value):
        return display_text(raw)
    return str(raw)


def _copy_value(value: Value) -> Value:
    if isinstance(value, RecordValue):
        return RecordValue(value.record.copy())
    if isinstance(value, OptionalValue) and value.value is not None:
        return OptionalValue(_copy_value(value.value))
    if isinstance(value, ListValue):
        return ListValue(tuple(_copy_value(item) for item in value.items))
    if isinstance(value, ArrayValue):
        return ArrayValue(tuple(_copy_value(item) for item in value.items))
    return value
