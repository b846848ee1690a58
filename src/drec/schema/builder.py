# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Incremental, order-preserving construction of record schemas.

Every function here returns a new :class:`~drec.model.types.Schema` and never
raises: problems such as a field declared twice are recorded on the returned
schema and surface later as record-level errors. This keeps schema
construction usable at import time, where schemas are usually defined::

    PERSON = new_schema()
    PERSON = declare_field(PERSON, "name", STRING)
    PERSON = declare_field(PERSON, "nick_names", list_of(STRING))
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

from drec.casing import Casing, snake_case
from drec.errors import RecordError, duplicate_field, invalid_schema_type
from drec.model.types import (
    ArrayTypeRef,
    ListTypeRef,
    NeverTypeRef,
    OptionalTypeRef,
    RecordTypeRef,
    Schema,
    TypeRef,
    describe_type,
    is_resolvable,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def new_schema(casing: Casing = snake_case, indent: int = 0) -> Schema:
    """Return an empty schema.

    Args:
        casing: Function deriving a field key from a field identifier's name.
        indent: Indent width for JSON text output; 0 renders compact JSON.
    """
    if indent < 0:
        return Schema(
            casing=casing,
            errors=(invalid_schema_type("indent", f"indent must be non-negative, got {indent}"),),
        )
    return Schema(casing=casing, indent=indent)


def declare_field(
    schema: Schema,
    field_id: Hashable,
    type_ref: TypeRef,
    *,
    key: str | None = None,
) -> Schema:
    """Declare a field and return the extended schema.

    The key is *key* when given, otherwise the schema's casing applied to the
    identifier's name. Declaring a key or an identifier twice records a
    ``DuplicateField`` error and leaves the field mapping unchanged;
    declaring an unresolvable type (a container of containers, for instance)
    records an ``InvalidSchemaType`` error and skips the field.

    Args:
        schema: The schema to extend.
        field_id: An enum member or string identifying the field.
        type_ref: The declared type of the field.
        key: Explicit serialized key, bypassing the casing function.

    Returns:
        A new schema; *schema* itself is not modified.
    """
    return _declare(schema, field_id, type_ref, key, message=None)


def declare_field_with_message(
    schema: Schema,
    field_id: Hashable,
    type_ref: TypeRef,
    message: str,
    *,
    key: str | None = None,
) -> Schema:
    """Declare a field that reports *message* when its input fails validation."""
    return _declare(schema, field_id, type_ref, key, message=message)


def nested_schema_of(record: object) -> Schema:
    """Return the schema of an existing record, for embedding with ``record_of``."""
    schema = getattr(record, "schema", None)
    if not isinstance(schema, Schema):
        raise TypeError(f"Expected a record, got {type(record).__name__}")
    return schema


def with_indent(schema: Schema, indent: int) -> Schema:
    """Return a copy of *schema* rendering JSON text with *indent* spaces."""
    if indent < 0:
        return _with_error(schema, invalid_schema_type("indent", f"indent must be non-negative, got {indent}"))
    return schema.model_copy(update={"indent": indent})


def with_casing(schema: Schema, casing: Casing) -> Schema:
    """Return a copy of *schema* deriving keys with *casing*.

    Only an empty schema can change its casing, since keys are computed when
    fields are declared.
    """
    if not schema.is_empty:
        return _with_error(
            schema,
            invalid_schema_type("casing", "casing cannot change after fields have been declared"),
        )
    return schema.model_copy(update={"casing": casing})


# ################
# Implementation
# ################


def _declare(
    schema: Schema,
    field_id: Hashable,
    type_ref: TypeRef,
    key: str | None,
    message: str | None,
) -> Schema:
    if key is None:
        key = schema.key_of(field_id)

    if key in schema.types:
        logger.debug("Duplicate declaration of field '%s'", key)
        return _with_error(schema, duplicate_field(key))
    if field_id in schema.field_keys:
        # The identifier is already bound to another key.
        logger.debug("Field '%s' redeclared with key '%s'", schema.field_keys[field_id], key)
        return _with_error(schema, duplicate_field(schema.field_keys[field_id]))

    if not is_resolvable(type_ref):
        detail = type_ref.reason if isinstance(type_ref, NeverTypeRef) and type_ref.reason else None
        logger.debug("Field '%s' declared with unresolvable type %s", key, describe_type(type_ref))
        return _with_error(
            schema,
            invalid_schema_type(key, detail or f"{describe_type(type_ref)} cannot be declared"),
        )

    errors = schema.errors
    nested = _nested_schema(type_ref)
    if nested is not None and nested.has_errors:
        errors = errors + (
            invalid_schema_type(key, "nested schema is invalid: " + "; ".join(e.message for e in nested.errors)),
        )

    messages = schema.messages
    if message is not None:
        messages = {**messages, key: message}

    return schema.model_copy(
        update={
            "keys": schema.keys + (key,),
            "field_keys": {**schema.field_keys, field_id: key},
            "types": {**schema.types, key: type_ref},
            "messages": messages,
            "errors": errors,
        }
    )


def _with_error(schema: Schema, error: RecordError) -> Schema:
    return schema.model_copy(update={"errors": schema.errors + (error,)})


def _nested_schema(type_ref: TypeRef) -> Schema | None:
    """Return the schema embedded by *type_ref*, directly or as a container element."""
    if isinstance(type_ref, RecordTypeRef):
        return type_ref.record_schema
    if isinstance(type_ref, OptionalTypeRef | ListTypeRef | ArrayTypeRef):
        return _nested_schema(type_ref.element_type)
    return None
