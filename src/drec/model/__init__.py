# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type and value model for drec records (schema types, schemas, tagged values)."""

from drec.model.types import (
    BOOL,
    CHAR,
    FLOAT,
    INT,
    JSON,
    POSIX,
    STRING,
    ArrayTypeRef,
    ElementTypeRef,
    ListTypeRef,
    NeverTypeRef,
    OptionalTypeRef,
    RecordTypeRef,
    ScalarType,
    ScalarTypeRef,
    Schema,
    TypeRef,
    UnknownTypeRef,
    array_of,
    describe_type,
    field_name,
    is_element_type,
    is_resolvable,
    list_of,
    optional_of,
    record_of,
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
    ScalarValue,
    StringValue,
    Value,
    classify,
    types_compatible,
)

__all__ = [
    # Types
    "ScalarType",
    "NeverTypeRef",
    "UnknownTypeRef",
    "ScalarTypeRef",
    "RecordTypeRef",
    "OptionalTypeRef",
    "ListTypeRef",
    "ArrayTypeRef",
    "ElementTypeRef",
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
    "describe_type",
    "field_name",
    "is_element_type",
    "is_resolvable",
    "list_of",
    "optional_of",
    "record_of",
    # Values
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
    "ScalarValue",
    "Value",
    "classify",
    "types_compatible",
]
