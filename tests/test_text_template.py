from __future__ import annotations

import io
import json

import pytest

from corpusgen.config import load_config_from_yaml
from corpusgen.genlib import Field, FieldType, GenState, new_generator_with_text_template
from corpusgen.genlib.text_template import referenced_fields
from corpusgen.utils.errors import ConfigurationError, TemplateError

FIELDS = [
    Field("host.name", FieldType.KEYWORD),
    Field("bytes", FieldType.INTEGER),
    Field("tier", FieldType.CONSTANT_KEYWORD, value="gold"),
]

TEMPLATE = (
    b'{"host": "{{ generate("host.name") }}", "bytes": {{ generate("bytes") }},'
    b' "tier": {{ generate("tier") }}}'
)


def test_renders_json() -> None:
    g = new_generator_with_text_template(TEMPLATE, None, FIELDS)
    state = GenState(5)
    for _ in range(20):
        buf = io.BytesIO()
        g.emit(state, buf)
        record = json.loads(buf.getvalue())
        assert isinstance(record["host"], str)
        assert isinstance(record["bytes"], int)
        assert record["tier"] == "gold"
    g.close()


def test_control_flow_and_cardinality() -> None:
    cfg = load_config_from_yaml(b"- name: host.name\n  cardinality: 500")
    template = b'{% for _ in range(3) %}{{ generate("host.name") }} {% endfor %}'
    g = new_generator_with_text_template(template, cfg, FIELDS)
    state = GenState()
    words: set[str] = set()
    for _ in range(10):
        buf = io.BytesIO()
        g.emit(state, buf)
        words.update(buf.getvalue().decode("utf-8").split())
    assert len(words) == 2


def test_referenced_fields() -> None:
    import jinja2

    ast = jinja2.Environment().parse('{{ generate("a") }}{{ generate(name) }}{{ other("b") }}')
    assert referenced_fields(ast) == {"a"}


def test_undeclared_field_rejected() -> None:
    with pytest.raises(ConfigurationError, match="missing"):
        new_generator_with_text_template(b'{{ generate("missing") }}', None, FIELDS)


def test_dynamic_undeclared_field_fails_on_emit() -> None:
    template = b'{% set n = "miss" ~ "ing" %}{{ generate(n) }}'
    g = new_generator_with_text_template(template, None, FIELDS)
    with pytest.raises(ConfigurationError):
        g.emit(GenState(), io.BytesIO())


def test_syntax_error() -> None:
    with pytest.raises(TemplateError):
        new_generator_with_text_template(b"{{ generate(", None, FIELDS)


def test_emit_after_close() -> None:
    with new_generator_with_text_template(TEMPLATE, None, FIELDS) as g:
        g.emit(GenState(), io.BytesIO())
    with pytest.raises(RuntimeError):
        g.emit(GenState(), io.BytesIO())
