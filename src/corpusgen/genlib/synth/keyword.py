"""Keyword values built from a small fixed vocabulary."""

from __future__ import annotations

from corpusgen.config import FieldConfig

from ..fields import Field
from ..state import GenState

__all__ = ["ConstantKeywordSynthesizer", "KeywordSynthesizer", "random_keyword"]

_ADJECTIVES: tuple[str, ...] = tuple(
    "amber brave calm dusty eager fuzzy gentle hollow icy jolly keen lively "
    "mellow noisy odd proud quiet rapid silent tidy urban vivid wild young".split()
)
_NOUNS: tuple[str, ...] = tuple(
    "anchor badger canyon delta ember falcon glacier harbor island jungle kernel "
    "lantern meadow nebula orchid pebble quarry river summit tundra valley willow "
    "yarrow zephyr".split()
)


def random_keyword(state: GenState) -> bytes:
    """Return a keyword such as ``calm-river-0042``."""

    rng = state.rng
    word = f"{rng.choice(_ADJECTIVES)}-{rng.choice(_NOUNS)}-{rng.randint(0, 9999):04d}"
    return word.encode("ascii")


class KeywordSynthesizer:
    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        return random_keyword(state)


class ConstantKeywordSynthesizer:
    """A keyword drawn once per state and repeated afterwards.

    Only used when the field carries no static value.
    """

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        return state.constant(field.name, lambda: random_keyword(state))
