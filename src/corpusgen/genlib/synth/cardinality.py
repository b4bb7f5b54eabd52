"""Cardinality control.

A field configured with cardinality ``C`` (per mille) gets a pool of
``P = 1000 // C`` slots.  A cursor walks the slots cyclically: the first visit
of a slot fills it with a freshly synthesized value that differs from every
value already pooled, later visits replay the stored bytes.  Any window of
1000 consecutive emissions therefore holds exactly ``P`` distinct values, as
long as the field's domain has ``P`` distinct values to offer (a boolean
cannot supply more than two).
"""

from __future__ import annotations

from corpusgen.config import FieldConfig
from corpusgen.utils.constants import CARDINALITY_BLOCK

from ..fields import Field
from ..state import GenState
from .base import Synthesizer

__all__ = ["draw_from_pool", "pool_size"]

_MAX_ATTEMPTS = 64


def pool_size(cardinality: int) -> int:
    """Return the number of distinct values for ``cardinality`` per mille.

    Non-dividing cardinalities round down, never below one.
    """

    return max(1, CARDINALITY_BLOCK // cardinality)


def draw_from_pool(
    synth: Synthesizer, field: Field, cfg: FieldConfig, state: GenState
) -> bytes:
    """Emit the next pooled value for ``field``."""

    assert cfg.cardinality is not None
    pool = state.pool(field.name, pool_size(cfg.cardinality))
    idx = pool.advance()
    if idx < len(pool.values):
        return pool.values[idx]

    candidate = synth.synthesize(field, cfg, state)
    attempts = 1
    while candidate in pool.seen and attempts < _MAX_ATTEMPTS:
        candidate = synth.synthesize(field, cfg, state)
        attempts += 1
    pool.values.append(candidate)
    pool.seen.add(candidate)
    return candidate
