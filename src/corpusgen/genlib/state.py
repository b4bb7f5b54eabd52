"""Mutable generation state threaded through every emission.

A :class:`GenState` owns the random source, the per-field cardinality pools
and the previous value of each fuzzy field.  States are deliberately not
thread safe; parallel generation uses one state per worker, obtained with
:meth:`GenState.fork`.

Seeding
-------
An explicit seed (``int``, ``str`` or ``bytes``) is canonicalized to bytes and
hashed with SHA256 under a domain-separation prefix, so the same seed always
reproduces the same value sequence.  Forked states are keyed with
HMAC-SHA256 over the parent seed and a label, which keeps sibling streams
independent yet reproducible.  Without a seed, 32 bytes of OS entropy are used.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Final

__all__ = ["CardinalityPool", "Clock", "GenState", "seed_bytes"]

_NS_STATE: Final = b"corpusgen/v1/state"
_NS_FORK: Final = b"corpusgen/v1/fork"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def seed_bytes(seed: int | str | bytes) -> bytes:
    """Canonicalize ``seed`` into bytes.

    Integers use their decimal representation so ``7`` and ``"7"`` seed the
    same stream.
    """

    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, bool):
        raise TypeError("seed must be int, str or bytes")
    if isinstance(seed, int):
        return str(seed).encode("ascii")
    if isinstance(seed, str):
        return seed.strip().encode("utf-8")
    raise TypeError("seed must be int, str or bytes")


@dataclass(slots=True)
class CardinalityPool:
    """Distinct values of one field and the cursor walking over them."""

    size: int
    values: list[bytes] = field(default_factory=list)
    seen: set[bytes] = field(default_factory=set)
    cursor: int = 0

    def advance(self) -> int:
        """Return the current index and move the cursor cyclically."""

        idx = self.cursor
        self.cursor = (self.cursor + 1) % self.size
        return idx


class GenState:
    """Per-generator working memory."""

    def __init__(
        self,
        seed: int | str | bytes | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._seed: bytes = os.urandom(32) if seed is None else seed_bytes(seed)
        digest = hashlib.sha256(_NS_STATE + self._seed).digest()
        self.rng: random.Random = random.Random(int.from_bytes(digest, "big"))
        self.clock: Clock = clock if clock is not None else _utcnow
        self._pools: dict[str, CardinalityPool] = {}
        self._previous: dict[str, float] = {}
        self._constants: dict[str, bytes] = {}

    def fork(self, label: str) -> "GenState":
        """Return an independent state derived from this state's seed."""

        child = hmac.new(self._seed, _NS_FORK + label.encode("utf-8"), hashlib.sha256)
        return GenState(child.digest(), clock=self.clock)

    # -- cardinality -------------------------------------------------------

    def pool(self, name: str, size: int) -> CardinalityPool:
        """Return the pool for ``name``, creating it with ``size`` slots."""

        pool = self._pools.get(name)
        if pool is None or pool.size != size:
            pool = CardinalityPool(size=size)
            self._pools[name] = pool
        return pool

    # -- fuzziness baselines ----------------------------------------------

    def previous(self, name: str) -> float | None:
        return self._previous.get(name)

    def remember(self, name: str, value: float) -> None:
        self._previous[name] = value

    # -- constants ---------------------------------------------------------

    def constant(self, name: str, factory: Callable[[], bytes]) -> bytes:
        """Return the value fixed for ``name``, drawing it on first use."""

        value = self._constants.get(name)
        if value is None:
            value = factory()
            self._constants[name] = value
        return value
