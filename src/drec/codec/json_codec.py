# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Whole-record JSON decoding and encoding driven by the record schema.

Decoders are built per schema by dispatching on each declared field type and
folding the field decoders, in declaration order, into one decoder for the
whole object. Decoding is strict: the first failing field aborts the decode
and no partial record is produced.

Encoding is best-effort and never raises. A record carrying record-level
errors (schema construction errors or unknown-field writes) encodes as an
empty object, and fields that are unset or hold a rejected input are left
out. An empty ``{}`` may therefore mean "nothing set" as well as "errors
present"; check :meth:`~drec.store.record.Record.is_valid` first.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from drec.errors import DecodingError, decoding_failed, no_schema
from drec.model.types import (
    ArrayTypeRef,
    ListTypeRef,
    OptionalTypeRef,
    RecordTypeRef,
    ScalarType,
    ScalarTypeRef,
    Schema,
    TypeRef,
    describe_type,
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

if TYPE_CHECKING:
    from drec.store.record import Record

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def build_decoder(schema: Schema) -> Callable[[Any], Record]:
    """Build a decoder turning a parsed JSON object into a record of *schema*.

    Nested schemas get their own decoders, built eagerly.

    Raises:
        DecodingError: ``NoSchema`` if *schema* declares no fields, or the
            schema's own errors if it recorded any while being built.
    """
    decode_object = _record_decoder(schema)

    def decode(data: Any) -> Record:
        try:
            return decode_object(data, "")
        except _Failure as exc:
            logger.debug("Decoding failed: %s", exc)
            raise DecodingError([decoding_failed(str(exc))]) from None

    return decode


def decode_value(template: Record | Schema, data: Any) -> Record:
    """Decode an already-parsed JSON value into a new record.

    Args:
        template: A record (typically empty) or schema providing the schema.
        data: The parsed JSON value; must be an object.

    Returns:
        A new record with every declared field committed.

    Raises:
        DecodingError: If the schema is empty or invalid, or if *data* does
            not match the schema.
    """
    return build_decoder(_schema_of(template))(data)


def decode_text(template: Record | Schema, text: str) -> Record:
    """Decode JSON text into a new record; see :func:`decode_value`."""
    decoder = build_decoder(_schema_of(template))
    try:
        data = parse_json_text(text)
    except ValueError as exc:
        logger.debug("Rejected malformed JSON text: %s", exc)
        raise DecodingError([decoding_failed(f"invalid JSON: {exc}")]) from exc
    return decoder(data)


def parse_json_text(text: str) -> Any:
    """Parse strict JSON text.

    Unlike :func:`json.loads`, the non-standard ``NaN`` and ``Infinity``
    literals are refused, as are numbers that overflow a float (``1e400``).

    Raises:
        ValueError: If *text* is not valid JSON.
    """
    return json.loads(text, parse_constant=_refuse_constant, parse_float=_finite_float)


def encode(record: Record) -> dict[str, Any]:
    """Encode the committed fields of *record* as a JSON object.

    Keys follow declaration order. An absent optional is omitted, a present
    optional is written unwrapped, nested records become nested objects and
    lists and arrays become JSON arrays.
    """
    if record.record_errors():
        return {}
    obj: dict[str, Any] = {}
    for key, value in record.committed_items():
        if isinstance(value, OptionalValue):
            if value.value is None:
                continue
            value = value.value
        obj[key] = encode_value(value)
    return obj


def encode_value(value: Value) -> Any:
    """Encode a single value as a JSON-compatible Python object."""
    if isinstance(value, BoolValue | IntValue | StringValue):
        return value.value
    if isinstance(value, FloatValue):
        return float(value.value)
    if isinstance(value, CharValue):
        return ord(value.value)
    if isinstance(value, JsonValue):
        return value.value
    if isinstance(value, PosixValue):
        return posix_to_millis(value.value)
    if isinstance(value, RecordValue):
        return encode(value.record)
    if isinstance(value, OptionalValue):
        return None if value.value is None else encode_value(value.value)
    assert isinstance(value, ListValue | ArrayValue)
    return [encode_value(item) for item in value.items]


def stringify(record: Record, indent: int | None = None) -> str:
    """Render *record* as JSON text.

    Uses *indent* when given, otherwise the record's schema indent; indents of
    nested schemas are not consulted. Indent 0 gives compact output.
    """
    if indent is None:
        indent = record.schema.indent
    obj = encode(record)
    if indent > 0:
        return json.dumps(obj, indent=indent, ensure_ascii=False)
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def posix_to_millis(moment: datetime) -> int:
    """Return milliseconds since the Unix epoch; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def millis_to_posix(millis: int) -> datetime:
    """Return the UTC datetime *millis* milliseconds after the Unix epoch."""
    return EPOCH + timedelta(milliseconds=millis)


# ################
# Implementation
# ################

# Decodes a JSON value found at a dotted path into a Value.
_Decoder = Callable[[Any, str], Value]


class _Failure(Exception):
    """Internal signal carrying the path and reason of a failed decode."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path or '<root>'}: {reason}")


def _refuse_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"{text} does not fit a float")
    return number


def _schema_of(template: Record | Schema) -> Schema:
    if isinstance(template, Schema):
        return template
    return template.schema


def _json_type(raw: Any) -> str:
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "boolean"
    if isinstance(raw, int | float):
        return "number"
    if isinstance(raw, str):
        return "string"
    if isinstance(raw, list):
        return "array"
    if isinstance(raw, dict):
        return "object"
    return type(raw).__name__


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _record_decoder(schema: Schema) -> Callable[[Any, str], Record]:
    # drec.store.record imports this package, so Record is resolved late.
    from drec.store.record import Record

    if schema.is_empty:
        raise DecodingError([no_schema()])
    if schema.has_errors:
        raise DecodingError(list(schema.errors))

    fields = [(key, _field_decoder(key, schema.types[key])) for key in schema.keys]

    def decode_object(data: Any, path: str) -> Record:
        if not isinstance(data, dict):
            raise _Failure(path, f"expected an object, got {_json_type(data)}")
        values: dict[str, Value] = {}
        for key, decode_field in fields:
            values[key] = decode_field(data, path)
        return Record.from_values(schema, values)

    return decode_object


def _field_decoder(key: str, type_ref: TypeRef) -> Callable[[dict[str, Any], str], Value]:
    if isinstance(type_ref, OptionalTypeRef):
        decode_element = _value_decoder(type_ref.element_type)

        def decode_optional(obj: dict[str, Any], path: str) -> Value:
            raw = obj.get(key)
            if raw is None:
                return OptionalValue()
            return OptionalValue(decode_element(raw, _join(path, key)))

        return decode_optional

    decode_value = _value_decoder(type_ref)

    def decode_required(obj: dict[str, Any], path: str) -> Value:
        field_path = _join(path, key)
        if key not in obj:
            raise _Failure(field_path, "missing field")
        return decode_value(obj[key], field_path)

    return decode_required


def _value_decoder(type_ref: TypeRef) -> _Decoder:
    if isinstance(type_ref, ScalarTypeRef):
        return _SCALAR_DECODERS[type_ref.scalar]
    if isinstance(type_ref, RecordTypeRef):
        decode_record = _record_decoder(type_ref.record_schema)
        return lambda raw, path: RecordValue(decode_record(raw, path))
    if isinstance(type_ref, ListTypeRef):
        decode_items = _items_decoder(_value_decoder(type_ref.element_type))
        return lambda raw, path: ListValue(decode_items(raw, path))
    if isinstance(type_ref, ArrayTypeRef):
        decode_items = _items_decoder(_value_decoder(type_ref.element_type))
        return lambda raw, path: ArrayValue(decode_items(raw, path))
    # Schemas only hold resolvable types, so this is a type nested where it cannot be.
    raise DecodingError([decoding_failed(f"cannot decode {describe_type(type_ref)}")])


def _items_decoder(decode_element: _Decoder) -> Callable[[Any, str], tuple[Value, ...]]:
    def decode_items(raw: Any, path: str) -> tuple[Value, ...]:
        if not isinstance(raw, list):
            raise _Failure(path, f"expected an array, got {_json_type(raw)}")
        return tuple(decode_element(item, f"{path}[{index}]") for index, item in enumerate(raw))

    return decode_items


def _is_int(raw: Any) -> bool:
    return isinstance(raw, int) and not isinstance(raw, bool)


def _decode_bool(raw: Any, path: str) -> Value:
    if not isinstance(raw, bool):
        raise _Failure(path, f"expected a boolean, got {_json_type(raw)}")
    return BoolValue(raw)


def _decode_char(raw: Any, path: str) -> Value:
    if not _is_int(raw):
        raise _Failure(path, f"expected a character code, got {_json_type(raw)}")
    if not 0 <= raw <= 0x10FFFF:
        raise _Failure(path, f"character code {raw} is out of range")
    return CharValue(chr(raw))


def _decode_float(raw: Any, path: str) -> Value:
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise _Failure(path, f"expected a number, got {_json_type(raw)}")
    try:
        number = float(raw)
    except OverflowError:
        raise _Failure(path, "number is too large for a float") from None
    if not math.isfinite(number):
        raise _Failure(path, f"expected a finite number, got {number}")
    return FloatValue(number)


def _decode_int(raw: Any, path: str) -> Value:
    if not _is_int(raw):
        raise _Failure(path, f"expected an integer, got {_json_type(raw)}")
    return IntValue(raw)


def _decode_json(raw: Any, path: str) -> Value:
    return JsonValue(raw)


def _decode_posix(raw: Any, path: str) -> Value:
    if not _is_int(raw):
        raise _Failure(path, f"expected milliseconds since the epoch, got {_json_type(raw)}")
    try:
        return PosixValue(millis_to_posix(raw))
    except OverflowError:
        raise _Failure(path, f"timestamp {raw} is out of range") from None


def _decode_string(raw: Any, path: str) -> Value:
    if not isinstance(raw, str):
        raise _Failure(path, f"expected a string, got {_json_type(raw)}")
    return StringValue(raw)


_SCALAR_DECODERS: dict[ScalarType, _Decoder] = {
    ScalarType.BOOL: _decode_bool,
    ScalarType.CHAR: _decode_char,
    ScalarType.FLOAT: _decode_float,
    ScalarType.INT: _decode_int,
    ScalarType.JSON: _decode_json,
    ScalarType.POSIX: _decode_posix,
    ScalarType.STRING: _decode_string,
}
