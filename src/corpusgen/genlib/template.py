"""Placeholder template parsing.

Templates are raw bytes with placeholders of the form ``{{.name}}``.  Parsing
splits a template into the ordered list of referenced fields, the literal
fragment preceding each field and the literal fragment after the last
placeholder.  The parser is a single left-to-right scan: a ``{`` that does not
open a valid placeholder stays part of the current literal fragment, even when
it sits right before a real opener (``{{{.a}}`` gives ``a`` the prefix
``{``).  Empty fragments are reported as ``None``.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass

from corpusgen.config import Config
from corpusgen.utils.constants import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN
from corpusgen.utils.errors import TemplateError

from .fields import Field
from .synth import has_static_value

__all__ = [
    "CustomTemplate",
    "compile_custom_template",
    "generate_custom_template_from_fields",
    "parse_custom_template",
]

_CLOSE_BRACE = ord("}")


@dataclass(frozen=True, slots=True)
class CustomTemplate:
    """Parsed placeholder template.

    ``prefixes`` maps every name of ``ordered_fields`` to the literal bytes
    preceding its placeholder.
    """

    ordered_fields: tuple[str, ...]
    prefixes: dict[str, bytes | None]
    trailing: bytes | None


def _identifier_end(template: bytes, start: int) -> int | None:
    """Return the index of the closing ``}}`` of an identifier at ``start``."""

    end = start
    n = len(template)
    while end < n and template[end] != _CLOSE_BRACE:
        end += 1
    if end == start or not template.startswith(PLACEHOLDER_CLOSE, end):
        return None
    return end


def parse_custom_template(
    template: bytes,
) -> tuple[list[str], dict[str, bytes | None], bytes | None]:
    """Split ``template`` into ``(ordered_fields, prefixes, trailing)``.

    Raises :class:`TemplateError` when a field is referenced twice or a field
    name is not valid UTF-8.
    """

    ordered: list[str] = []
    prefixes: dict[str, bytes | None] = {}
    fragment = bytearray()

    i = 0
    n = len(template)
    open_len = len(PLACEHOLDER_OPEN)
    while i < n:
        if template.startswith(PLACEHOLDER_OPEN, i):
            end = _identifier_end(template, i + open_len)
            if end is not None:
                raw = template[i + open_len : end]
                try:
                    name = raw.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise TemplateError(f"field name is not valid UTF-8: {raw!r}") from exc
                if name in prefixes:
                    raise TemplateError(f"field {name!r} referenced more than once")
                prefixes[name] = bytes(fragment) if fragment else None
                ordered.append(name)
                fragment.clear()
                i = end + len(PLACEHOLDER_CLOSE)
                continue
        fragment.append(template[i])
        i += 1

    trailing = bytes(fragment) if fragment else None
    return ordered, prefixes, trailing


def compile_custom_template(template: bytes) -> CustomTemplate:
    """Parse ``template`` into an immutable :class:`CustomTemplate`."""

    ordered, prefixes, trailing = parse_custom_template(template)
    return CustomTemplate(ordered_fields=tuple(ordered), prefixes=prefixes, trailing=trailing)


def generate_custom_template_from_fields(config: Config, fields: Sequence[Field]) -> bytes:
    """Build a flat JSON object template covering every field in ``fields``.

    Textual fields without a static value are wrapped in quotes; static values
    are serialized as JSON by the synthesizer and are left bare.  No fields
    yields an empty template.
    """

    if not fields:
        return b""

    parts: list[bytes] = []
    for fld in fields:
        key = json.dumps(fld.name).encode("utf-8")
        placeholder = PLACEHOLDER_OPEN + fld.name.encode("utf-8") + PLACEHOLDER_CLOSE
        if fld.type.is_textual and not has_static_value(fld, config.get(fld.name)):
            placeholder = b'"' + placeholder + b'"'
        parts.append(key + b":" + placeholder)
    return b"{" + b",".join(parts) + b"}"
