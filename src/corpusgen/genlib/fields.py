"""Field descriptors and the field-definition loader.

A field definition file is a YAML sequence of ``{name, type, value?}``
entries.  Entries of ``type: group`` carry a nested ``fields`` sequence whose
names are prefixed with the group name and a dot, so::

    - name: event
      type: group
      fields:
        - name: id
          type: keyword

declares the single field ``event.id``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from corpusgen.utils.errors import ConfigurationError

__all__ = [
    "Field",
    "FieldType",
    "Fields",
    "load_fields",
    "load_fields_from_yaml",
]


class FieldType(Enum):
    """Closed enumeration of supported field type tags."""

    KEYWORD = "keyword"
    CONSTANT_KEYWORD = "constant_keyword"
    BOOL = "bool"
    INTEGER = "integer"
    LONG = "long"
    UNSIGNED_LONG = "unsigned_long"
    FLOAT = "float"
    DOUBLE = "double"
    HALF_FLOAT = "half_float"
    SCALED_FLOAT = "scaled_float"
    IP = "ip"
    GEO_POINT = "geo_point"
    DATE = "date"

    @classmethod
    def parse(cls, tag: str) -> "FieldType":
        """Return the member for ``tag`` or raise :class:`ConfigurationError`."""

        try:
            return cls(tag)
        except ValueError:
            raise ConfigurationError(f"unknown field type: {tag!r}") from None

    @property
    def is_textual(self) -> bool:
        """``True`` for types rendered as JSON strings."""

        return self in _TEXTUAL


_TEXTUAL = frozenset(
    {
        FieldType.KEYWORD,
        FieldType.CONSTANT_KEYWORD,
        FieldType.IP,
        FieldType.GEO_POINT,
        FieldType.DATE,
    }
)


@dataclass(slots=True, frozen=True)
class Field:
    """A declared field.

    ``value`` is a static value emitted verbatim instead of a synthesized one;
    ``has_value`` distinguishes an explicit ``None`` from no value at all.
    """

    name: str
    type: FieldType
    value: Any = None
    has_value: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("field name must not be empty")
        if not isinstance(self.type, FieldType):
            object.__setattr__(self, "type", FieldType.parse(str(self.type)))
        if self.value is not None and not self.has_value:
            object.__setattr__(self, "has_value", True)


Fields = Sequence[Field]


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class _FieldEntry(BaseModel):
    name: str
    type: str
    value: Any = None
    fields: list["_FieldEntry"] | None = None
    description: str | None = None

    model_config = ConfigDict(extra="ignore")


_FieldEntry.model_rebuild()


def _flatten(entries: Iterable[_FieldEntry], prefix: str = "") -> list[Field]:
    out: list[Field] = []
    for entry in entries:
        name = f"{prefix}{entry.name}"
        if entry.type == "group":
            out.extend(_flatten(entry.fields or [], prefix=f"{name}."))
            continue
        has_value = "value" in entry.model_fields_set
        out.append(
            Field(
                name=name,
                type=FieldType.parse(entry.type),
                value=entry.value,
                has_value=has_value,
            )
        )
    return out


def load_fields_from_yaml(data: bytes | str) -> list[Field]:
    """Parse a YAML field-definition document into :class:`Field` objects.

    Duplicate names after flattening are rejected.
    """

    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"malformed field definitions: {exc}") from exc
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigurationError("field definitions must be a YAML sequence")
    try:
        entries = [_FieldEntry.model_validate(item) for item in raw]
    except ValidationError as exc:
        first = str(exc).splitlines()[0]
        raise ConfigurationError(f"invalid field definition: {first}") from exc

    fields = _flatten(entries)
    seen: set[str] = set()
    for fld in fields:
        if fld.name in seen:
            raise ConfigurationError(f"duplicate field definition: {fld.name!r}")
        seen.add(fld.name)
    return fields


def load_fields(path: str | os.PathLike[str]) -> list[Field]:
    """Load field definitions from the YAML file at ``path``."""

    return load_fields_from_yaml(Path(path).read_bytes())
