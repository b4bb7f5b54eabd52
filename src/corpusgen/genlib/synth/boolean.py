from __future__ import annotations

from corpusgen.config import FieldConfig

from ..fields import Field
from ..state import GenState


class BoolSynthesizer:
    """Uniform ``true``/``false``."""

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        return b"true" if state.rng.random() < 0.5 else b"false"
