# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Text-form conversion of field values, for form inputs and buffers.

:func:`text_converter` picks the default parser for a declared type; it is
what :meth:`~drec.store.record.Record.update` feeds raw input through.
:func:`display_text` is its counterpart, rendering a value as the text a form
field would show.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable
from datetime import datetime, timezone

from drec.codec.json_codec import (
    decode_text,
    decode_value,
    encode_value,
    millis_to_posix,
    parse_json_text,
    stringify,
)
from drec.errors import DecodingError
from drec.model.types import (
    ArrayTypeRef,
    ListTypeRef,
    OptionalTypeRef,
    RecordTypeRef,
    ScalarType,
    ScalarTypeRef,
    Schema,
    TypeRef,
)
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
)

# ###############
# Public Interface
# ###############

# Parses raw input into a value, or returns None to reject it.
Converter = Callable[[str], Value | None]


def text_converter(type_ref: TypeRef) -> Converter:
    """Return the default text parser for values of *type_ref*.

    Scalars:

    * Bool: ``true`` or ``false`` in any letter case.
    * Char: exactly one character.
    * Float and Int: numeric literals; non-finite floats are rejected.
    * Json: JSON text.
    * Posix: integer milliseconds since the epoch, or an ISO-8601 timestamp
      (a timestamp without offset is taken as UTC).
    * String: the text as given.

    A nested record parses JSON object text against its schema. An optional
    treats empty text as absent. Lists and arrays treat blank text as empty;
    scalar elements are separated by commas (surrounding whitespace is
    dropped) while Json and record elements are read from JSON array text.
    Unresolvable types reject every input.
    """
    if isinstance(type_ref, ScalarTypeRef):
        return _SCALAR_PARSERS[type_ref.scalar]
    if isinstance(type_ref, RecordTypeRef):
        schema = type_ref.record_schema
        return lambda text: _parse_record(schema, text)
    if isinstance(type_ref, OptionalTypeRef):
        return _optional_converter(text_converter(type_ref.element_type))
    if isinstance(type_ref, ListTypeRef):
        return _items_converter(type_ref.element_type, ListValue)
    if isinstance(type_ref, ArrayTypeRef):
        return _items_converter(type_ref.element_type, ArrayValue)
    return _reject


def display_text(value: Value) -> str:
    """Render *value* as form text that :func:`text_converter` reads back."""
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, CharValue | StringValue):
        return value.value
    if isinstance(value, FloatValue | IntValue):
        return str(value.value)
    if isinstance(value, JsonValue):
        return _compact_json(value.value)
    if isinstance(value, PosixValue):
        return value.value.isoformat()
    if isinstance(value, RecordValue):
        return stringify(value.record, indent=0)
    if isinstance(value, OptionalValue):
        return "" if value.value is None else display_text(value.value)
    assert isinstance(value, ListValue | ArrayValue)
    if value.items and isinstance(value.items[0], JsonValue | RecordValue):
        return _compact_json([encode_value(item) for item in value.items])
    return ", ".join(display_text(item) for item in value.items)


# ################
# Implementation
# ################


def _compact_json(obj: object) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def _reject(text: str) -> Value | None:
    return None


def _parse_bool(text: str) -> Value | None:
    lowered = text.strip().lower()
    if lowered == "true":
        return BoolValue(True)
    if lowered == "false":
        return BoolValue(False)
    return None


def _parse_char(text: str) -> Value | None:
    if len(text) != 1:
        return None
    return CharValue(text)


def _parse_float(text: str) -> Value | None:
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return FloatValue(number)


def _parse_int(text: str) -> Value | None:
    try:
        return IntValue(int(text))
    except ValueError:
        return None


def _parse_json(text: str) -> Value | None:
    try:
        return JsonValue(parse_json_text(text))
    except ValueError:
        return None


def _parse_posix(text: str) -> Value | None:
    stripped = text.strip()
    try:
        return PosixValue(millis_to_posix(int(stripped)))
    except OverflowError:
        return None
    except ValueError:
        pass
    try:
        moment = datetime.fromisoformat(stripped)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return PosixValue(moment)


def _parse_string(text: str) -> Value | None:
    return StringValue(text)


_SCALAR_PARSERS: dict[ScalarType, Converter] = {
    ScalarType.BOOL: _parse_bool,
    ScalarType.CHAR: _parse_char,
    ScalarType.FLOAT: _parse_float,
    ScalarType.INT: _parse_int,
    ScalarType.JSON: _parse_json,
    ScalarType.POSIX: _parse_posix,
    ScalarType.STRING: _parse_string,
}


def _parse_record(schema: Schema, text: str) -> Value | None:
    try:
        return RecordValue(decode_text(schema, text))
    except DecodingError:
        return None


def _optional_converter(convert_element: Converter) -> Converter:
    def convert(text: str) -> Value | None:
        if not text:
            return OptionalValue()
        element = convert_element(text)
        if element is None:
            return None
        return OptionalValue(element)

    return convert


def _items_converter(element_type: TypeRef, build: type[ListValue] | type[ArrayValue]) -> Converter:
    if isinstance(element_type, RecordTypeRef):
        schema = element_type.record_schema
        return _json_items_converter(lambda item: RecordValue(decode_value(schema, item)), build)
    if isinstance(element_type, ScalarTypeRef) and element_type.scalar is ScalarType.JSON:
        return _json_items_converter(JsonValue, build)

    convert_element = text_converter(element_type)

    def convert(text: str) -> Value | None:
        if not text.strip():
            return build(())
        items: list[Value] = []
        for piece in text.split(","):
            element = convert_element(piece.strip())
            if element is None:
                return None
            items.append(element)
        return build(tuple(items))

    return convert


def _json_items_converter(
    convert_item: Callable[[object], Value],
    build: type[ListValue] | type[ArrayValue],
) -> Converter:
    def convert(text: str) -> Value | None:
        if not text.strip():
            return build(())
        try:
            raw = parse_json_text(text)
        except ValueError:
            return None
        if not isinstance(raw, list):
            return None
        try:
            return build(tuple(convert_item(item) for item in raw))
        except DecodingError:
            return None

    return convert
