# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON and text bridges for drec records."""

from drec.codec.json_codec import (
    build_decoder,
    decode_text,
    decode_value,
    encode,
    encode_value,
    parse_json_text,
    stringify,
)
from drec.codec.text import Converter, display_text, text_converter

__all__ = [
    "build_decoder",
    "decode_text",
    "decode_value",
    "encode",
    "encode_value",
    "parse_json_text",
    "stringify",
    "Converter",
    "display_text",
    "text_converter",
]
