"""IP address values."""

from __future__ import annotations

from ipaddress import IPv4Address

from corpusgen.config import FieldConfig

from ..fields import Field
from ..state import GenState


class IPSynthesizer:
    """Dotted-decimal IPv4 addresses drawn uniformly from the whole space."""

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        return str(IPv4Address(state.rng.getrandbits(32))).encode("ascii")
