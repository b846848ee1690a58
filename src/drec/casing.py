# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field-name casing functions used to derive serialized field keys."""

from __future__ import annotations

import re
from collections.abc import Callable

# ###############
# Public Interface
# ###############

Casing = Callable[[str], str]


def split_words(name: str) -> list[str]:
    """Split an identifier into its words.

    Handles ``snake_case``, ``kebab-case``, ``camelCase``, ``PascalCase`` and
    ``UPPER_CASE`` spellings, as well as embedded acronyms (``HTTPServer``
    splits into ``HTTP`` and ``Server``) and digit runs.
    """
    return _WORD.findall(name)


def snake_case(name: str) -> str:
    """Return *name* as ``snake_case``."""
    return "_".join(word.lower() for word in split_words(name))


def kebab_case(name: str) -> str:
    """Return *name* as ``kebab-case``."""
    return "-".join(word.lower() for word in split_words(name))


def camel_case(name: str) -> str:
    """Return *name* as ``camelCase``."""
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def pascal_case(name: str) -> str:
    """Return *name* as ``PascalCase``."""
    return "".join(word.capitalize() for word in split_words(name))


def identity(name: str) -> str:
    """Return *name* unchanged."""
    return name


CASINGS: dict[str, Casing] = {
    "snake": snake_case,
    "kebab": kebab_case,
    "camel": camel_case,
    "pascal": pascal_case,
    "identity": identity,
}


# ################
# Implementation
# ################

# An uppercase run not followed by a lowercase letter is an acronym or an
# UPPER_CASE word; otherwise a word is an optional capital plus lowercase.
_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
