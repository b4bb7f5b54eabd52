"""Shared constants for value synthesis and templates."""

from __future__ import annotations

from typing import Final

__all__ = [
    "CARDINALITY_BLOCK",
    "DATE_LAYOUT",
    "DATE_SPAN_SECONDS",
    "PLACEHOLDER_CLOSE",
    "PLACEHOLDER_OPEN",
]

# Timestamps are rendered in UTC; ``Z`` is a literal suffix.
DATE_LAYOUT: Final = "%Y-%m-%dT%H:%M:%S.%fZ"
DATE_SPAN_SECONDS: Final = 3 * 60 * 60

# Cardinality is expressed per mille of this block.
CARDINALITY_BLOCK: Final = 1000

PLACEHOLDER_OPEN: Final = b"{{."
PLACEHOLDER_CLOSE: Final = b"}}"
