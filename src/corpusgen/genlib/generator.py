"""Record generators.

A generator binds a compiled template, a :class:`~corpusgen.config.Config`
and the declared fields, and renders one record per :meth:`emit` call into a
caller-owned binary sink (anything with ``write(bytes)``, e.g.
:class:`io.BytesIO` or a file opened in ``"wb"`` mode).

Three construction paths exist:

* :func:`new_generator` renders a flat JSON object holding every declared
  field;
* :func:`new_generator_with_custom_template` renders a ``{{.name}}``
  placeholder template;
* :func:`new_generator_with_text_template` renders a Jinja2 template calling
  ``generate("name")``.

Generators are single threaded.  Use one :class:`GenState` per generator.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from types import TracebackType
from typing import TYPE_CHECKING, Protocol

from corpusgen.config import Config, FieldConfig
from corpusgen.utils.errors import ConfigurationError, WriteError
from corpusgen.utils.logging import get_logger

from .fields import Field
from .state import GenState
from .synth import synthesize
from .template import (
    CustomTemplate,
    compile_custom_template,
    generate_custom_template_from_fields,
)

if TYPE_CHECKING:
    from .text_template import TextTemplateGenerator

__all__ = [
    "BinarySink",
    "CustomTemplateGenerator",
    "Generator",
    "TemplateType",
    "new_generator",
    "new_generator_for",
    "new_generator_with_custom_template",
    "new_generator_with_text_template",
]

log = get_logger(__name__)


class BinarySink(Protocol):
    def write(self, data: bytes, /) -> object:
        ...


class TemplateType(Enum):
    """Template backend selector."""

    PLACEHOLDER = "placeholder"
    JINJA = "jinja"

    @classmethod
    def parse(cls, value: "str | TemplateType") -> "TemplateType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(repr(t.value) for t in cls)
            raise ConfigurationError(
                f"unknown template type {value!r}; expected one of {choices}"
            ) from None


class Generator:
    """Base class providing sink handling and context management."""

    def __init__(self, config: Config | None, fields: Sequence[Field]) -> None:
        self.config: Config = config if config is not None else Config([])
        self.fields: dict[str, Field] = {f.name: f for f in fields}

    def emit(self, state: GenState, sink: BinarySink) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release backend resources."""

    def field_config(self, name: str) -> FieldConfig | None:
        return self.config.get(name)

    def _check_declared(self, names: Sequence[str] | set[str]) -> None:
        undeclared = sorted(n for n in names if n not in self.fields)
        if undeclared:
            raise ConfigurationError(
                f"template references undeclared field(s): {', '.join(undeclared)}"
            )

    @staticmethod
    def _write(sink: BinarySink, data: bytes) -> None:
        try:
            sink.write(data)
        except OSError as exc:
            raise WriteError(str(exc)) from exc

    def __enter__(self) -> "Generator":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class CustomTemplateGenerator(Generator):
    """Renders a compiled placeholder template."""

    def __init__(
        self, template: CustomTemplate, config: Config | None, fields: Sequence[Field]
    ) -> None:
        super().__init__(config, fields)
        self._check_declared(template.ordered_fields)
        self.template = template
        self._plan: tuple[tuple[bytes | None, Field, FieldConfig | None], ...] = tuple(
            (template.prefixes[name], self.fields[name], self.field_config(name))
            for name in template.ordered_fields
        )

    def emit(self, state: GenState, sink: BinarySink) -> None:
        """Write one record: each prefix and value in order, then the trailer."""

        for prefix, fld, cfg in self._plan:
            if prefix:
                self._write(sink, prefix)
            self._write(sink, synthesize(fld, cfg, state))
        if self.template.trailing:
            self._write(sink, self.template.trailing)


def new_generator(config: Config | None, fields: Sequence[Field]) -> CustomTemplateGenerator:
    """Return a generator rendering every field of ``fields`` as a JSON object."""

    if not fields:
        raise ConfigurationError("at least one field is required when no template is given")
    cfg = config if config is not None else Config([])
    template = generate_custom_template_from_fields(cfg, fields)
    log.debug("generated flat template for %d fields", len(fields))
    return CustomTemplateGenerator(compile_custom_template(template), cfg, fields)


def new_generator_with_custom_template(
    template: bytes, config: Config | None, fields: Sequence[Field]
) -> CustomTemplateGenerator:
    """Return a generator for a ``{{.name}}`` placeholder ``template``."""

    compiled = compile_custom_template(template)
    log.debug("compiled placeholder template with %d fields", len(compiled.ordered_fields))
    return CustomTemplateGenerator(compiled, config, fields)


def new_generator_with_text_template(
    template: bytes, config: Config | None, fields: Sequence[Field]
) -> "TextTemplateGenerator":
    """Return a generator for a Jinja2 ``template``."""

    from .text_template import TextTemplateGenerator

    return TextTemplateGenerator(template, config, fields)


def new_generator_for(
    template_type: str | TemplateType,
    template: bytes | None,
    config: Config | None,
    fields: Sequence[Field],
) -> Generator:
    """Select a construction path from ``template_type``.

    An empty or missing ``template`` selects the flat JSON path regardless of
    ``template_type``; the selector is still validated.
    """

    kind = TemplateType.parse(template_type)
    if not template:
        return new_generator(config, fields)
    if kind is TemplateType.PLACEHOLDER:
        return new_generator_with_custom_template(template, config, fields)
    return new_generator_with_text_template(template, config, fields)
