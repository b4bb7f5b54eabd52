"""Static value serialization.

Static values come from a field definition's ``value`` or a configuration
override.  They are emitted as JSON so that strings arrive quoted and numbers
and booleans bare, independent of the surrounding template.  Numeric and
boolean field types coerce their static value; textual types emit it as
loaded.
"""

from __future__ import annotations

import json
import math
from typing import Any

from corpusgen.utils.errors import SynthesisError

from ..fields import FieldType

__all__ = ["coerce_static", "encode_static"]

_INTEGERS = frozenset({FieldType.INTEGER, FieldType.LONG, FieldType.UNSIGNED_LONG})
_FLOATS = frozenset(
    {FieldType.FLOAT, FieldType.DOUBLE, FieldType.HALF_FLOAT, FieldType.SCALED_FLOAT}
)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise SynthesisError(f"cannot coerce {value!r} to bool")


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        raise SynthesisError(f"cannot coerce {value!r} to integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise SynthesisError(f"cannot coerce {value!r} to integer")


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        raise SynthesisError(f"cannot coerce {value!r} to float")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise SynthesisError(f"cannot coerce {value!r} to float") from exc
    if not math.isfinite(result):
        raise SynthesisError(f"non-finite static value {value!r}")
    return result


def coerce_static(value: Any, ftype: FieldType) -> Any:
    """Return ``value`` converted to the Python type matching ``ftype``."""

    if ftype is FieldType.BOOL:
        return _coerce_bool(value)
    if ftype in _INTEGERS:
        return _coerce_int(value)
    if ftype in _FLOATS:
        return _coerce_float(value)
    return value


def encode_static(value: Any, ftype: FieldType) -> bytes:
    """Serialize a static ``value`` for a field of type ``ftype``."""

    coerced = coerce_static(value, ftype)
    try:
        return json.dumps(coerced, allow_nan=False, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SynthesisError(f"cannot serialize static value {value!r}: {exc}") from exc
