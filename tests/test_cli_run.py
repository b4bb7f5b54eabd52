from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from corpusgen.cli import SEED_ENV, app

FIELDS = """\
- name: event
  type: group
  fields:
    - name: id
      type: keyword
    - name: duration
      type: long
- name: source.ip
  type: ip
- name: success
  type: bool
"""


@pytest.fixture
def fields_path(tmp_path: Path) -> Path:
    path = tmp_path / "fields.yml"
    path.write_text(FIELDS, encoding="utf-8")
    return path


def test_cli_generate(tmp_path: Path, fields_path: Path) -> None:
    out_dir = tmp_path / "corpora"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["generate", "--fields", str(fields_path), "--tot-size", "2kB", "--location", str(out_dir)],
    )
    assert result.exit_code == 0
    out = Path(result.stdout.strip())
    assert out.parent == out_dir
    assert out.name.endswith("-fields.ndjson")
    assert out.stat().st_size >= 2000
    for line in out.read_text(encoding="utf-8").splitlines():
        record = json.loads(line)
        assert set(record) == {"event.id", "event.duration", "source.ip", "success"}


def test_cli_generate_with_index(tmp_path: Path, fields_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--fields",
            str(fields_path),
            "--tot-size",
            "1kB",
            "--index",
            "logs-test",
            "--location",
            str(tmp_path),
        ],
    )
    assert result.exit_code == 0
    lines = Path(result.stdout.strip()).read_text(encoding="utf-8").splitlines()
    assert lines[0::2] == [json.dumps({"create": {"_index": "logs-test"}})] * (len(lines) // 2)
    assert len(lines) % 2 == 0


def test_cli_seed_from_environment(
    tmp_path: Path, fields_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(SEED_ENV, "fixed")
    runner = CliRunner()
    contents = []
    for name in ("a", "b"):
        result = runner.invoke(
            app,
            [
                "generate",
                "--fields",
                str(fields_path),
                "--tot-size",
                "4kB",
                "--location",
                str(tmp_path / name),
            ],
        )
        assert result.exit_code == 0
        contents.append(Path(result.stdout.strip()).read_bytes())
    assert contents[0] == contents[1]


def test_cli_generate_with_jinja_template(tmp_path: Path, fields_path: Path) -> None:
    template = tmp_path / "events.j2"
    template.write_text(
        '{"id": "{{ generate("event.id") }}", "ok": {{ generate("success") }}}',
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate-with-template",
            "--template",
            str(template),
            "--fields",
            str(fields_path),
            "--tot-size",
            "1kB",
            "--template-type",
            "jinja",
            "--location",
            str(tmp_path / "out"),
            "--verbose",
        ],
    )
    assert result.exit_code == 0
    out = Path(result.stdout.strip().splitlines()[-1])
    assert out.name.endswith("-events.j2")
    for line in out.read_text(encoding="utf-8").splitlines():
        record = json.loads(line)
        assert record["ok"] in (True, False)
    assert "Wrote" in result.stderr
