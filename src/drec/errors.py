# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for schemas, records, and the JSON bridge.

Field-level problems are recorded on a record as :class:`RecordError`
values and are never raised. Exceptions are reserved for operations that
cannot produce a result at all: reading a field that has no usable value,
decoding a document, and loading configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ###############
# Public Interface
# ###############


class ErrorKind(Enum):
    """The kinds of problems a schema or record can carry."""

    DUPLICATE_FIELD = "DuplicateField"
    UNKNOWN_FIELD = "UnknownField"
    MISSING_VALUE = "MissingValue"
    VALIDATION_FAILED = "ValidationFailed"
    TYPE_MISMATCH = "TypeMismatch"
    DECODING_FAILED = "DecodingFailed"
    NO_SCHEMA = "NoSchema"
    INVALID_SCHEMA_TYPE = "InvalidSchemaType"


@dataclass(frozen=True)
class RecordError:
    """A problem attached to a schema, a record, or a decode attempt.

    Attributes:
        kind: The category of the problem.
        message: Human-readable description of the problem.
        key: The serialized field key involved, if any.
    """

    kind: ErrorKind
    message: str
    key: str | None = None


class DRecError(Exception):
    """Base class for all exceptions raised by drec."""


class FieldAccessError(DRecError):
    """Raised when a field is read but has no committed, unbuffered value."""

    def __init__(self, error: RecordError) -> None:
        super().__init__(error.message)
        self.error = error


class DecodingError(DRecError):
    """Raised when a JSON document cannot be decoded into a record.

    Attributes:
        errors: The errors that stopped decoding. A failed document decode
            carries a single ``DecodingFailed`` error; a schema that is
            itself invalid surfaces its own errors instead.
    """

    def __init__(self, errors: list[RecordError]) -> None:
        super().__init__("; ".join(e.message for e in errors))
        self.errors = errors


def duplicate_field(key: str) -> RecordError:
    return RecordError(ErrorKind.DUPLICATE_FIELD, f"Duplicate field '{key}'", key)


def unknown_field(key: str) -> RecordError:
    return RecordError(ErrorKind.UNKNOWN_FIELD, f"Unknown field '{key}'", key)


def missing_value(key: str) -> RecordError:
    return RecordError(ErrorKind.MISSING_VALUE, f"Missing value for '{key}'", key)


def validation_failed(key: str, message: str | None = None) -> RecordError:
    return RecordError(ErrorKind.VALIDATION_FAILED, message or f"Invalid value for '{key}'", key)


def type_mismatch(key: str, declared: str, actual: str) -> RecordError:
    return RecordError(
        ErrorKind.TYPE_MISMATCH,
        f"Type mismatch for '{key}': expected {declared}, got {actual}",
        key,
    )


def decoding_failed(detail: str) -> RecordError:
    return RecordError(ErrorKind.DECODING_FAILED, f"Decoding failed: {detail}")


def no_schema() -> RecordError:
    return RecordError(ErrorKind.NO_SCHEMA, "Cannot decode against a schema without fields")


def invalid_schema_type(key: str, detail: str) -> RecordError:
    return RecordError(ErrorKind.INVALID_SCHEMA_TYPE, f"Invalid schema type for '{key}': {detail}", key)
