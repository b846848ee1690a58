# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""DRec: schema-typed records bridging JSON payloads and validated form input."""

from drec.casing import CASINGS, camel_case, identity, kebab_case, pascal_case, snake_case
from drec.codec import decode_text, decode_value, display_text, encode, stringify, text_converter
from drec.config import RecordConfig, RecordConfigError, load_record_config, parse_record_config
from drec.errors import DecodingError, DRecError, ErrorKind, FieldAccessError, RecordError
from drec.model import (
    BOOL,
    CHAR,
    FLOAT,
    INT,
    JSON,
    POSIX,
    STRING,
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
    ScalarType,
    Schema,
    StringValue,
    TypeRef,
    Value,
    array_of,
    classify,
    list_of,
    optional_of,
    record_of,
    types_compatible,
)
from drec.schema import (
    declare_field,
    declare_field_with_message,
    nested_schema_of,
    new_schema,
    with_casing,
    with_indent,
)
from drec.store import Record

__all__ = [
    # Casing
    "CASINGS",
    "camel_case",
    "identity",
    "kebab_case",
    "pascal_case",
    "snake_case",
    # Types and values
    "ScalarType",
    "TypeRef",
    "Schema",
    "BOOL",
    "CHAR",
    "FLOAT",
    "INT",
    "JSON",
    "POSIX",
    "STRING",
    "array_of",
    "list_of",
    "optional_of",
    "record_of",
    "Value",
    "BoolValue",
    "CharValue",
    "FloatValue",
    "IntValue",
    "JsonValue",
    "PosixValue",
    "StringValue",
    "RecordValue",
    "OptionalValue",
    "ListValue",
    "ArrayValue",
    "classify",
    "types_compatible",
    # Schema builder
    "new_schema",
    "declare_field",
    "declare_field_with_message",
    "nested_schema_of",
    "with_casing",
    "with_indent",
    # Store
    "Record",
    # Codec
    "decode_text",
    "decode_value",
    "encode",
    "stringify",
    "display_text",
    "text_converter",
    # Errors
    "DRecError",
    "DecodingError",
    "ErrorKind",
    "FieldAccessError",
    "RecordError",
    # Configuration
    "RecordConfig",
    "RecordConfigError",
    "load_record_config",
    "parse_record_config",
]
