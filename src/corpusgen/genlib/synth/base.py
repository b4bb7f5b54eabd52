"""Synthesizer protocol shared by all type families."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from corpusgen.config import FieldConfig

from ..fields import Field
from ..state import GenState


@runtime_checkable
class Synthesizer(Protocol):
    """Produces the serialized bytes of one value for a field.

    Implementations draw randomness only from ``state.rng`` and keep any
    cross-emission memory inside ``state``; they never mutate ``field`` or
    ``cfg``.
    """

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        ...
