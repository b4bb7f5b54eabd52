from __future__ import annotations

import io
import json
import stat
from pathlib import Path

import pytest

from corpusgen.config import load_config_from_yaml
from corpusgen.corpus import GeneratorCorpus, bulk_create_action, sanitize_filename
from corpusgen.genlib import Field, FieldType
from corpusgen.utils.errors import ConfigurationError, WriteError

STAMP = 1647345675


def _corpus(tmp_path: Path, **kwargs: object) -> GeneratorCorpus:
    return GeneratorCorpus(location=tmp_path / "corpora", timestamp=lambda: STAMP, **kwargs)  # type: ignore[arg-type]


def _write_fields(tmp_path: Path) -> Path:
    path = tmp_path / "fields.yml"
    path.write_text(
        "- name: host.ip\n  type: ip\n- name: count\n  type: integer\n", encoding="utf-8"
    )
    return path


def test_sanitize_filename() -> None:
    assert sanitize_filename("a b:c/d\\e") == "a-b-c-d-e"
    assert sanitize_filename("plain.name") == "plain.name"


def test_bulk_payload_filenames(tmp_path: Path) -> None:
    corpus = _corpus(tmp_path)
    assert corpus.bulk_payload_filename("my fields") == f"{STAMP}-my-fields.ndjson"
    assert corpus.bulk_payload_filename_with_template("/x/events.tpl") == f"{STAMP}-events.tpl"


def test_events_payload_honours_budget(tmp_path: Path) -> None:
    corpus = _corpus(tmp_path, seed=1)
    sink = io.BytesIO()
    fields = [Field("n", FieldType.LONG)]
    create = bulk_create_action("idx")
    written = corpus.events_payload_from_fields(None, fields, 5000, create, sink)
    data = sink.getvalue()
    assert written == len(data) >= 5000
    lines = data.decode("utf-8").splitlines()
    assert len(lines) % 2 == 0
    record_len = len(lines[-2]) + len(lines[-1]) + 2
    assert written - record_len < 5000
    for action, record in zip(lines[0::2], lines[1::2]):
        assert json.loads(action) == {"create": {"_index": "idx"}}
        assert isinstance(json.loads(record)["n"], int)


def test_events_payload_write_error(tmp_path: Path) -> None:
    class _Closed(io.BytesIO):
        def write(self, data):  # type: ignore[override]
            raise OSError("disk full")

    corpus = _corpus(tmp_path)
    with pytest.raises(WriteError):
        corpus.events_payload_from_fields(
            None, [Field("b", FieldType.BOOL)], 10, b"", _Closed()
        )


def test_generate(tmp_path: Path) -> None:
    cfg = load_config_from_yaml(b"- name: count\n  value: 7\n")
    corpus = _corpus(tmp_path, config=cfg)
    path = corpus.generate(_write_fields(tmp_path), "2kB")
    assert path == tmp_path / "corpora" / f"{STAMP}-fields.ndjson"
    assert path.stat().st_size >= 2000
    assert stat.S_IMODE(path.stat().st_mode) & 0o007 == 0
    for line in path.read_text(encoding="utf-8").splitlines():
        assert json.loads(line)["count"] == 7


def test_generate_with_template(tmp_path: Path) -> None:
    template = tmp_path / "events.tpl"
    template.write_text("ip={{.host.ip}} n={{.count}}", encoding="utf-8")
    corpus = _corpus(tmp_path, seed="t")
    path = corpus.generate_with_template(template, _write_fields(tmp_path), 512)
    assert path.name == f"{STAMP}-events.tpl"
    for line in path.read_text(encoding="utf-8").splitlines():
        assert line.startswith("ip=") and " n=" in line


def test_generate_with_jinja_template(tmp_path: Path) -> None:
    template = tmp_path / "events.j2"
    template.write_text('{{ generate("count") }}', encoding="utf-8")
    corpus = _corpus(tmp_path, template_type="jinja")
    path = corpus.generate_with_template(template, _write_fields(tmp_path), 256)
    assert all(line.isdigit() for line in path.read_text(encoding="utf-8").splitlines())


def test_empty_template_rejected(tmp_path: Path) -> None:
    template = tmp_path / "empty.tpl"
    template.write_bytes(b"")
    with pytest.raises(ConfigurationError):
        _corpus(tmp_path).generate_with_template(template, _write_fields(tmp_path), 10)


def test_unknown_template_type(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        _corpus(tmp_path, template_type="mustache")
