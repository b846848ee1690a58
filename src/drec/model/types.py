# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema type system and the immutable schema description."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from drec.casing import snake_case
from drec.errors import RecordError

# ###############
# Public Interface
# ###############


class ScalarType(Enum):
    """Scalar kinds a field or container element can hold."""

    BOOL = "Bool"
    CHAR = "Char"
    FLOAT = "Float"
    INT = "Int"
    JSON = "Json"
    POSIX = "Posix"
    STRING = "String"


class NeverTypeRef(BaseModel):
    """A type that cannot be resolved, such as a container of containers."""

    kind: Literal["never"] = "never"
    reason: str = ""


class UnknownTypeRef(BaseModel):
    """Element type of an empty container or an absent optional.

    Only produced by classifying values; it carries no element-type evidence
    and is compatible with any element type of the same container shape.
    """

    kind: Literal["unknown"] = "unknown"


class ScalarTypeRef(BaseModel):
    """Reference to a scalar type."""

    kind: Literal["scalar"] = "scalar"
    scalar: ScalarType


class RecordTypeRef(BaseModel):
    """Reference to a nested record described by its own schema."""

    kind: Literal["record"] = "record"
    record_schema: Schema


class OptionalTypeRef(BaseModel):
    """Reference to a parameterized Optional<T> type."""

    kind: Literal["optional"] = "optional"
    element_type: ElementTypeRef


class ListTypeRef(BaseModel):
    """Reference to a parameterized List<T> type."""

    kind: Literal["list"] = "list"
    element_type: ElementTypeRef


class ArrayTypeRef(BaseModel):
    """Reference to a parameterized Array<T> type."""

    kind: Literal["array"] = "array"
    element_type: ElementTypeRef


# The payload kinds allowed inside an optional or a container.
ElementTypeRef = Annotated[
    ScalarTypeRef | RecordTypeRef | UnknownTypeRef,
    _Field(discriminator="kind"),
]

# A field type reference: a scalar, a nested record, or a single-level container.
TypeRef = Annotated[
    NeverTypeRef | UnknownTypeRef | ScalarTypeRef | RecordTypeRef | OptionalTypeRef | ListTypeRef | ArrayTypeRef,
    _Field(discriminator="kind"),
]

ContainerTypeRef = OptionalTypeRef | ListTypeRef | ArrayTypeRef


class Schema(BaseModel):
    """An immutable, ordered field-key to type declaration.

    Schemas are built with :mod:`drec.schema.builder`; each builder call
    returns a new ``Schema`` and leaves its input untouched, so one schema
    can be shared by any number of records and parent schemas.

    Attributes:
        casing: Function turning a field identifier's name into its key.
        indent: Indent width used when the record is rendered as JSON text.
        keys: Declared keys in declaration order.
        field_keys: Explicit mapping from field identifier to key.
        types: Mapping from key to declared type.
        messages: Custom validation-failure messages by key.
        errors: Problems recorded while the schema was built.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    casing: Callable[[str], str] = snake_case
    indent: int = 0
    keys: tuple[str, ...] = ()
    field_keys: dict[Any, str] = _Field(default_factory=dict)
    types: dict[str, TypeRef] = _Field(default_factory=dict)
    messages: dict[str, str] = _Field(default_factory=dict)
    errors: tuple[RecordError, ...] = ()

    @property
    def field_ids(self) -> tuple[Hashable, ...]:
        """Declared field identifiers in declaration order."""
        return tuple(self.field_keys)

    @property
    def is_empty(self) -> bool:
        """Return True if no field has been declared."""
        return not self.keys

    @property
    def has_errors(self) -> bool:
        """Return True if the schema recorded any construction error."""
        return len(self.errors) > 0

    def key_of(self, field_id: Hashable) -> str:
        """Return the serialized key for *field_id*.

        Declared identifiers resolve through the explicit table; anything else
        falls back to casing the identifier's name so errors can name it.
        """
        key = self.field_keys.get(field_id)
        if key is not None:
            return key
        return self.casing(field_name(field_id))

    def type_of(self, key: str) -> TypeRef | None:
        """Return the declared type for *key*, or None if undeclared."""
        return self.types.get(key)

    def message_of(self, key: str) -> str | None:
        """Return the custom validation message for *key*, if any."""
        return self.messages.get(key)


BOOL = ScalarTypeRef(scalar=ScalarType.BOOL)
CHAR = ScalarTypeRef(scalar=ScalarType.CHAR)
FLOAT = ScalarTypeRef(scalar=ScalarType.FLOAT)
INT = ScalarTypeRef(scalar=ScalarType.INT)
JSON = ScalarTypeRef(scalar=ScalarType.JSON)
POSIX = ScalarTypeRef(scalar=ScalarType.POSIX)
STRING = ScalarTypeRef(scalar=ScalarType.STRING)


def field_name(field_id: Hashable) -> str:
    """Return the textual name of a field identifier (enum member name or string)."""
    if isinstance(field_id, Enum):
        return field_id.name
    return str(field_id)


def record_of(schema: Schema) -> RecordTypeRef:
    """Return the type of a nested record described by *schema*."""
    return RecordTypeRef(record_schema=schema)


def optional_of(element: TypeRef) -> OptionalTypeRef | NeverTypeRef:
    """Return ``Optional element``, or a NeverTypeRef if *element* is not an element type."""
    return _container(OptionalTypeRef, element)


def list_of(element: TypeRef) -> ListTypeRef | NeverTypeRef:
    """Return ``List element``, or a NeverTypeRef if *element* is not an element type."""
    return _container(ListTypeRef, element)


def array_of(element: TypeRef) -> ArrayTypeRef | NeverTypeRef:
    """Return ``Array element``, or a NeverTypeRef if *element* is not an element type."""
    return _container(ArrayTypeRef, element)


def is_element_type(type_ref: TypeRef) -> bool:
    """Return True if *type_ref* may appear inside an optional or a container."""
    return isinstance(type_ref, ScalarTypeRef | RecordTypeRef)


def is_resolvable(type_ref: TypeRef) -> bool:
    """Return True if *type_ref* may be declared as a field type."""
    if isinstance(type_ref, ScalarTypeRef | RecordTypeRef):
        return True
    if isinstance(type_ref, OptionalTypeRef | ListTypeRef | ArrayTypeRef):
        return is_element_type(type_ref.element_type)
    return False


def describe_type(type_ref: TypeRef) -> str:
    """Render *type_ref* for error messages, e.g. ``List Int``."""
    if isinstance(type_ref, ScalarTypeRef):
        return type_ref.scalar.value
    if isinstance(type_ref, RecordTypeRef):
        return f"Record({', '.join(type_ref.record_schema.keys)})"
    if isinstance(type_ref, OptionalTypeRef):
        return f"Optional {describe_type(type_ref.element_type)}"
    if isinstance(type_ref, ListTypeRef):
        return f"List {describe_type(type_ref.element_type)}"
    if isinstance(type_ref, ArrayTypeRef):
        return f"Array {describe_type(type_ref.element_type)}"
    if isinstance(type_ref, UnknownTypeRef):
        return "?"
    assert isinstance(type_ref, NeverTypeRef)
    return "Never"


# ################
# Implementation
# ################

_CONTAINER_NAMES: dict[type, str] = {
    OptionalTypeRef: "Optional",
    ListTypeRef: "List",
    ArrayTypeRef: "Array",
}


def _container(cls: type[ContainerTypeRef], element: TypeRef) -> Any:
    if not is_element_type(element):
        return NeverTypeRef(
            reason=f"{_CONTAINER_NAMES[cls]} element must be a scalar or a record, got {describe_type(element)}"
        )
    return cls(element_type=element)


# Resolve forward references between type refs and Schema.
RecordTypeRef.model_rebuild()
OptionalTypeRef.model_rebuild()
ListTypeRef.model_rebuild()
ArrayTypeRef.model_rebuild()
Schema.model_rebuild()
