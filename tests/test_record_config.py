# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the YAML record configuration."""

from pathlib import Path

import pytest

from drec.config import RecordConfig, RecordConfigError, load_record_config, parse_record_config
from drec.model.types import STRING
from drec.schema.builder import declare_field

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a record config file and return its path."""
    config_file = tmp_path / "drec.yaml"
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    config = load_record_config(_write_config(tmp_path, "key-casing: camel\nindent: 2\n"))

    assert isinstance(config, RecordConfig)
    assert config.key_casing == "camel"
    assert config.indent == 2


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    """An empty config file yields snake casing and compact output."""
    config = load_record_config(_write_config(tmp_path, ""))
    assert config.key_casing == "snake"
    assert config.indent == 0


def test_new_schema_uses_configured_defaults() -> None:
    schema = parse_record_config("key-casing: kebab\nindent: 4\n").new_schema()
    schema = declare_field(schema, "FIRST_NAME", STRING)

    assert schema.indent == 4
    assert schema.keys == ("first-name",)


def test_python_field_names_are_accepted() -> None:
    assert RecordConfig(key_casing="pascal").key_casing == "pascal"


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RecordConfigError, match="Cannot read record config"):
        load_record_config(tmp_path / "absent.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(RecordConfigError, match="Invalid YAML"):
        load_record_config(_write_config(tmp_path, "key-casing: [unterminated\n"))


def test_non_mapping_document() -> None:
    with pytest.raises(RecordConfigError, match="must be a YAML mapping"):
        parse_record_config("- snake\n- camel\n", source_label="list.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "key-casing: screaming\n",
        "indent: -1\n",
        "indent: wide\n",
        "unknown-option: true\n",
    ],
)
def test_invalid_values(content: str) -> None:
    with pytest.raises(RecordConfigError, match="Invalid record config"):
        parse_record_config(content)
