# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Record store: committed values, input buffers, and per-field errors."""

from drec.store.record import Record

__all__ = [
    "Record",
]
