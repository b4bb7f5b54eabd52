"""Per-type value synthesizers.

:func:`synthesize` is the single entry point used by the generators.  It
applies, in order of precedence:

1. static values (config ``value`` over field ``value``),
2. cardinality pools,
3. the type's own synthesizer.
"""

from __future__ import annotations

from corpusgen.config import FieldConfig

from ..fields import Field, FieldType
from ..state import GenState
from .base import Synthesizer
from .boolean import BoolSynthesizer
from .cardinality import draw_from_pool, pool_size
from .date import DateSynthesizer
from .geo import GeoPointSynthesizer
from .keyword import ConstantKeywordSynthesizer, KeywordSynthesizer
from .network import IPSynthesizer
from .numeric import FloatSynthesizer, IntegerSynthesizer
from .static import encode_static

__all__ = [
    "Synthesizer",
    "has_static_value",
    "pool_size",
    "synthesize",
    "synthesizer_for",
]

_REGISTRY: dict[FieldType, Synthesizer] = {
    FieldType.KEYWORD: KeywordSynthesizer(),
    FieldType.CONSTANT_KEYWORD: ConstantKeywordSynthesizer(),
    FieldType.BOOL: BoolSynthesizer(),
    FieldType.INTEGER: IntegerSynthesizer("integer"),
    FieldType.LONG: IntegerSynthesizer("long"),
    FieldType.UNSIGNED_LONG: IntegerSynthesizer("unsigned_long"),
    FieldType.FLOAT: FloatSynthesizer("float"),
    FieldType.DOUBLE: FloatSynthesizer("double"),
    FieldType.HALF_FLOAT: FloatSynthesizer("half_float"),
    FieldType.SCALED_FLOAT: FloatSynthesizer("scaled_float"),
    FieldType.IP: IPSynthesizer(),
    FieldType.GEO_POINT: GeoPointSynthesizer(),
    FieldType.DATE: DateSynthesizer(),
}

_missing = set(FieldType) - set(_REGISTRY)
if _missing:  # pragma: no cover - guarded at import
    raise RuntimeError(f"no synthesizer registered for {sorted(t.value for t in _missing)}")


def synthesizer_for(ftype: FieldType) -> Synthesizer:
    """Return the synthesizer registered for ``ftype``."""

    return _REGISTRY[ftype]


def has_static_value(field: Field, cfg: FieldConfig | None) -> bool:
    return (cfg is not None and cfg.has_value) or field.has_value


def synthesize(field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
    """Return the serialized bytes of the next value of ``field``."""

    if cfg is not None and cfg.has_value:
        return encode_static(cfg.value, field.type)
    if field.has_value:
        return encode_static(field.value, field.type)

    synth = _REGISTRY[field.type]
    if cfg is not None and cfg.cardinality is not None:
        return draw_from_pool(synth, field, cfg, state)
    return synth.synthesize(field, cfg, state)
