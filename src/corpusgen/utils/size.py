"""Parse human-readable byte sizes such as ``10MB`` or ``1.5 GiB``."""

from __future__ import annotations

import re

from .errors import SizeFormatError

__all__ = ["parse_size"]

_RX_SIZE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*$")

_UNITS: dict[str, int] = {
    "": 1,
    "b": 1,
    "k": 1000,
    "kb": 1000,
    "m": 1000**2,
    "mb": 1000**2,
    "g": 1000**3,
    "gb": 1000**3,
    "t": 1000**4,
    "tb": 1000**4,
    "ki": 1024,
    "kib": 1024,
    "mi": 1024**2,
    "mib": 1024**2,
    "gi": 1024**3,
    "gib": 1024**3,
    "ti": 1024**4,
    "tib": 1024**4,
}


def parse_size(source: str) -> int:
    """Return the number of bytes described by ``source``.

    Decimal suffixes (``kB``, ``MB``...) use powers of 1000, binary suffixes
    (``KiB``, ``MiB``...) powers of 1024.  Units are case-insensitive and a
    bare number is a byte count.  Fractions are truncated toward zero.
    """

    m = _RX_SIZE.fullmatch(source)
    if m is None:
        raise SizeFormatError(f"invalid size: {source!r}")
    number, unit = m.groups()
    multiplier = _UNITS.get(unit.lower())
    if multiplier is None:
        raise SizeFormatError(f"unknown size unit {unit!r} in {source!r}")
    return int(float(number) * multiplier)
