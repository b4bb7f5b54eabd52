"""Tagged values decoded from rendered records.

Emitted records are JSON; :func:`decode_record` turns one into a mapping of
field name to :class:`Value`, whose typed accessors fail loudly when the
emitted kind is not the expected one.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["Value", "ValueKind", "decode_record"]


class ValueKind(Enum):
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"


@dataclass(slots=True, frozen=True)
class Value:
    """A scalar of one of the four :class:`ValueKind` variants."""

    kind: ValueKind
    raw: int | float | bool | str

    @classmethod
    def of(cls, obj: Any) -> "Value":
        # bool first: it is a subclass of int
        if isinstance(obj, bool):
            return cls(ValueKind.BOOL, obj)
        if isinstance(obj, int):
            return cls(ValueKind.INT, obj)
        if isinstance(obj, float):
            return cls(ValueKind.FLOAT, obj)
        if isinstance(obj, str):
            return cls(ValueKind.STRING, obj)
        raise TypeError(f"unsupported value type: {type(obj).__name__}")

    def as_int(self) -> int:
        if self.kind is not ValueKind.INT:
            raise TypeError(f"expected int, got {self.kind.value}")
        return int(self.raw)

    def as_float(self) -> float:
        """Return the value as ``float``; integers are widened."""

        if self.kind not in (ValueKind.INT, ValueKind.FLOAT):
            raise TypeError(f"expected number, got {self.kind.value}")
        return float(self.raw)

    def as_bool(self) -> bool:
        if self.kind is not ValueKind.BOOL:
            raise TypeError(f"expected bool, got {self.kind.value}")
        return bool(self.raw)

    def as_str(self) -> str:
        if self.kind is not ValueKind.STRING:
            raise TypeError(f"expected string, got {self.kind.value}")
        return str(self.raw)


def decode_record(data: bytes | str) -> dict[str, Value]:
    """Decode a flat JSON object into ``{name: Value}``."""

    obj = json.loads(data)
    if not isinstance(obj, dict):
        raise TypeError("record is not a JSON object")
    return {key: Value.of(val) for key, val in obj.items()}
