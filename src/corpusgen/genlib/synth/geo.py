"""Geo point values rendered as ``lat,lon``."""

from __future__ import annotations

from corpusgen.config import FieldConfig

from ..fields import Field
from ..state import GenState


class GeoPointSynthesizer:
    """Latitude in [-90, 90] and longitude in [-180, 180], six decimals."""

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        lat = state.rng.uniform(-90.0, 90.0)
        lon = state.rng.uniform(-180.0, 180.0)
        return f"{lat:.6f},{lon:.6f}".encode("ascii")
