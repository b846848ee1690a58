# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema builder: declare fields, nest schemas, configure casing and indent."""

from drec.schema.builder import (
    declare_field,
    declare_field_with_message,
    nested_schema_of,
    new_schema,
    with_casing,
    with_indent,
)

__all__ = [
    "declare_field",
    "declare_field_with_message",
    "nested_schema_of",
    "new_schema",
    "with_casing",
    "with_indent",
]
