"""Date values anchored to the state's clock."""

from __future__ import annotations

from datetime import timedelta, timezone

from corpusgen.config import FieldConfig
from corpusgen.utils.constants import DATE_LAYOUT, DATE_SPAN_SECONDS
from corpusgen.utils.errors import SynthesisError

from ..fields import Field
from ..state import GenState


class DateSynthesizer:
    """Timestamps within ``span`` seconds of now, rendered with ``DATE_LAYOUT``.

    ``span`` is ``DATE_SPAN_SECONDS`` unless the field config sets ``range``.
    Fuzziness moves the offset of the previous timestamp by at most
    ``fuzziness * span`` seconds.
    """

    def span(self, cfg: FieldConfig | None) -> float:
        if cfg is not None and cfg.range is not None:
            return cfg.range
        return float(DATE_SPAN_SECONDS)

    def synthesize(self, field: Field, cfg: FieldConfig | None, state: GenState) -> bytes:
        span = self.span(cfg)
        lo, hi = -span, span
        prev = state.previous(field.name)
        if cfg is not None and cfg.fuzziness and prev is not None:
            delta = cfg.fuzziness * span
            lo = max(lo, prev - delta)
            hi = max(lo, min(hi, prev + delta))
        offset = state.rng.uniform(lo, hi)
        state.remember(field.name, offset)
        try:
            ts = state.clock() + timedelta(seconds=offset)
        except OverflowError as exc:
            raise SynthesisError(
                f"date offset of {offset:.0f}s for {field.name!r} is out of range"
            ) from exc
        return ts.astimezone(timezone.utc).strftime(DATE_LAYOUT).encode("ascii")
