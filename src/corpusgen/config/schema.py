"""Typed per-field configuration schema and loaders."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    RootModel,
    ValidationError,
    confloat,
    conint,
    model_validator,
)

from corpusgen.utils.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class FieldConfig(BaseModel):
    """Generation settings for a single field.

    ``cardinality`` is per mille: ``250`` yields ``1000 / 250 = 4`` distinct
    values in every block of 1000 emissions.  ``fuzziness`` is the maximum
    relative change from the previously emitted value and ``range`` bounds the
    magnitude of numeric values (seconds of spread for dates).  ``value`` is a
    static override and wins over everything else.
    """

    name: str
    cardinality: Optional[conint(ge=1, le=1000)] = None
    fuzziness: Optional[confloat(ge=0.0, allow_inf_nan=False)] = None
    range: Optional[confloat(gt=0.0, allow_inf_nan=False)] = None
    value: Any = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def has_value(self) -> bool:
        """``True`` when a static ``value`` was supplied, even ``null``."""

        return "value" in self.model_fields_set


class Config(RootModel[list[FieldConfig]]):
    """Validated sequence of :class:`FieldConfig` entries indexed by name."""

    root: list[FieldConfig] = []

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _unique_names(self) -> "Config":
        seen: set[str] = set()
        for entry in self.root:
            if entry.name in seen:
                raise ValueError(f"duplicate configuration for field {entry.name!r}")
            seen.add(entry.name)
        return self

    def get(self, name: str) -> FieldConfig | None:
        """Return the entry for ``name`` or ``None``."""

        for entry in self.root:
            if entry.name == name:
                return entry
        return None

    def __iter__(self) -> Iterator[FieldConfig]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def load_config_from_yaml(data: bytes | str) -> Config:
    """Parse and validate a YAML configuration document.

    An empty document yields an empty :class:`Config`.  YAML syntax errors and
    schema violations are reported as :class:`ConfigurationError` chained to
    the underlying exception.
    """

    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"malformed configuration: {exc}") from exc
    if raw is None:
        return Config([])
    try:
        return Config.model_validate(raw)
    except ValidationError as exc:
        first = str(exc).splitlines()[0]
        raise ConfigurationError(f"invalid configuration: {first}") from exc


def load_config(path: str | os.PathLike[str] | None = None) -> Config:
    """Load configuration from ``path``; ``None`` yields an empty config."""

    if path is None:
        return Config([])
    return load_config_from_yaml(Path(path).read_bytes())


__all__ = ["Config", "FieldConfig", "load_config", "load_config_from_yaml"]
