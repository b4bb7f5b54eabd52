"""Integer and floating point values.

All numeric types draw from ``[0, hi]``.  ``hi`` is the configured ``range``
capped at the type's maximum, or a per-type default when no range is set.
With ``fuzziness = f`` and a previously emitted value ``p`` the draw narrows
to ``[p - |p| * f, p + |p| * f]``, clamped to ``[0, hi]``.

Floating point values are quantized to the precision of their type before
being rendered:

``double``        full double precision, shortest ``repr``
``float``         IEEE single precision, 7 significant digits
``half_float``    IEEE half precision (max 65504), 5 significant digits
``scaled_float``  scaling factor 100, truncated to two decimals

Quantization rounds to the nearest representable value, so a ``float`` or
``half_float`` may exceed ``hi`` by at most one unit in the last place.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Callable
from dataclasses import dataclass

from corpusgen.config import FieldConfig

from ..fields import Field
from ..state import GenState

__all__ = ["FloatSynthesizer", "IntegerSynthesizer", "FLOAT_KINDS", "INTEGER_MAX"]

INTEGER_MAX: dict[str, int] = {
    "integer": 2**31 - 1,
    "long": 2**63 - 1,
    "unsigned_long": 2**64 - 1,
}

DEFAULT_FLOAT_MAX = 1_000_000.0


def _quantize_float32(x: float) -> float:
    return struct.unpack("<f", struct.pack("<f", x))[0]


def _quantize_half(x: float) -> float:
    return struct.unpack("<e", struct.pack("<e", x))[0]


def _quantize_scaled(x: float) -> float:
    return math.floor(x * 100) / 100


@dataclass(frozen=True, slots=True)
class FloatKind:
    maximum: float
    quantize: Callable[[float], float]
    render: Callable[[float], str]


FLOAT_KINDS: dict[str, FloatKind] = {
    "double": FloatKind(1.7976931348623157e308, float, repr),
    "float": FloatKind(3.4028234663852886e38, _quantize_float32, lambda x: format(x, ".7g")),
    "half_float": FloatKind(65504.0, _quantize_half, lambda x: format(x, ".5g")),
    "scaled_float": FloatKind(float(2**63 - 1) / 100, _quantize_scaled, repr),
}


def _upper_bound(cfg: FieldConfig | None, maximum: float, default: float) -> float:
    if cfg is not None and cfg.range is not None:
        return min(cfg.range, maximum)
    return min(default, maximum)


def _fuzziness(cfg: FieldConfig | None) -> float | None:
    if cfg is None or not cfg.fuzziness:
        return None
    return cfg.fuzziness


class IntegerSynthesizer:
    """Non-negative integers bounded by the bit width of ``kind``."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.maximum = INTEGER_MAX[kind]

    def bounds(self, cfg: FieldConfig | None) -> tuple[int, int]:
        return 0, int(_upper_bound(cfg, self.maximum, self.maximum))

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        lo, hi = self.bounds(cfg)
        prev = state.previous(field.name)
        fuzz = _fuzziness(cfg)
        if fuzz is not None and prev is not None:
            delta = abs(prev) * fuzz
            lo = max(lo, math.floor(prev - delta))
            hi = max(lo, min(hi, math.ceil(prev + delta)))
        value = state.rng.randint(lo, hi)
        state.remember(field.name, value)
        return str(value).encode("ascii")


class FloatSynthesizer:
    """Non-negative floats quantized to the precision of ``kind``."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.float_kind = FLOAT_KINDS[kind]

    def bounds(self, cfg: FieldConfig | None) -> tuple[float, float]:
        return 0.0, _upper_bound(cfg, self.float_kind.maximum, DEFAULT_FLOAT_MAX)

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        lo, hi = self.bounds(cfg)
        prev = state.previous(field.name)
        fuzz = _fuzziness(cfg)
        if fuzz is not None and prev is not None:
            delta = abs(prev) * fuzz
            lo = max(lo, prev - delta)
            hi = max(lo, min(hi, prev + delta))
        value = self.float_kind.quantize(state.rng.uniform(lo, hi))
        state.remember(field.name, value)
        return self.float_kind.render(value).encode("ascii")
