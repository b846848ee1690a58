# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML configuration for schema defaults (key casing, output indent).

Example configuration file::

    key-casing: camel
    indent: 2
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from drec.casing import CASINGS
from drec.errors import DRecError
from drec.model.types import Schema
from drec.schema.builder import new_schema

# ###############
# Public Interface
# ###############


class RecordConfigError(DRecError):
    """Raised when a record configuration cannot be read or is invalid."""


class RecordConfig(BaseModel):
    """Defaults applied to schemas created from this configuration."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    key_casing: Literal["snake", "kebab", "camel", "pascal", "identity"] = Field(
        alias="key-casing", default="snake"
    )
    indent: int = Field(default=0, ge=0)

    def new_schema(self) -> Schema:
        """Return an empty schema using the configured casing and indent."""
        return new_schema(casing=CASINGS[self.key_casing], indent=self.indent)


def load_record_config(path: Path) -> RecordConfig:
    """Load and validate a record configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A validated RecordConfig instance.

    Raises:
        RecordConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordConfigError(f"Cannot read record config '{path}': {exc}") from exc
    return parse_record_config(text, source_label=str(path))


def parse_record_config(text: str, source_label: str = "<string>") -> RecordConfig:
    """Parse YAML text into a RecordConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        RecordConfigError: If the YAML is invalid or does not match the schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RecordConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RecordConfigError(f"{source_label}: record config must be a YAML mapping")

    try:
        return RecordConfig.model_validate(data)
    except ValidationError as exc:
        raise RecordConfigError(f"Invalid record config {source_label}: {exc}") from exc
