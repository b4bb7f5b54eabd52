"""Jinja2 template backend.

Templates call ``generate("field.name")`` wherever a value is wanted::

    {"ts": "{{ generate("@timestamp") }}", "pid": {{ generate("process.pid") }}}

Field names passed as string literals are checked against the declared fields
when the generator is built; names computed at render time are checked on
use.  The backend holds a Jinja2 environment until :meth:`close` is called.
"""

from __future__ import annotations

from collections.abc import Sequence

import jinja2
from jinja2 import nodes

from corpusgen.config import Config
from corpusgen.utils.errors import ConfigurationError, TemplateError

from .fields import Field
from .generator import BinarySink, Generator
from .state import GenState
from .synth import synthesize

__all__ = ["GENERATE_FUNCTION", "TextTemplateGenerator", "referenced_fields"]

GENERATE_FUNCTION = "generate"


def referenced_fields(ast: nodes.Template) -> set[str]:
    """Return the literal field names passed to ``generate`` in ``ast``."""

    names: set[str] = set()
    for call in ast.find_all(nodes.Call):
        if not isinstance(call.node, nodes.Name) or call.node.name != GENERATE_FUNCTION:
            continue
        if call.args and isinstance(call.args[0], nodes.Const):
            value = call.args[0].value
            if isinstance(value, str):
                names.add(value)
    return names


class TextTemplateGenerator(Generator):
    """Renders a Jinja2 template, one record per :meth:`emit`."""

    def __init__(self, template: bytes, config: Config | None, fields: Sequence[Field]) -> None:
        super().__init__(config, fields)
        try:
            source = template.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TemplateError("template is not valid UTF-8") from exc

        env = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        try:
            ast = env.parse(source)
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateError(f"invalid template (line {exc.lineno}): {exc.message}") from exc
        self._check_declared(referenced_fields(ast))

        self._env: jinja2.Environment | None = env
        self._template: jinja2.Template | None = env.from_string(ast)

    def emit(self, state: GenState, sink: BinarySink) -> None:
        if self._template is None:
            raise RuntimeError("generator is closed")

        def generate(name: str) -> str:
            fld = self.fields.get(name)
            if fld is None:
                raise ConfigurationError(f"template references undeclared field: {name}")
            return synthesize(fld, self.field_config(name), state).decode("utf-8")

        rendered = self._template.render({GENERATE_FUNCTION: generate})
        self._write(sink, rendered.encode("utf-8"))

    def close(self) -> None:
        self._template = None
        self._env = None
