from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from corpusgen.cli import app


def _fields(tmp_path: Path, body: str = "- name: id\n  type: long\n") -> Path:
    path = tmp_path / "fields.yml"
    path.write_text(body, encoding="utf-8")
    return path


def test_missing_fields_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.yml"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["generate", "--fields", str(missing), "--tot-size", "1kB", "--location", str(tmp_path)],
    )
    assert result.exit_code == 3
    assert str(missing) in result.stderr


def test_bad_size(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--fields",
            str(_fields(tmp_path)),
            "--tot-size",
            "lots",
            "--location",
            str(tmp_path / "out"),
        ],
    )
    assert result.exit_code == 4


def test_bad_config(tmp_path: Path) -> None:
    bad_cfg = tmp_path / "bad.yml"
    bad_cfg.write_text("- name: id\n  cardinality: 0\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--fields",
            str(_fields(tmp_path)),
            "--tot-size",
            "1kB",
            "--config",
            str(bad_cfg),
            "--location",
            str(tmp_path / "out"),
        ],
    )
    assert result.exit_code == 4


def test_unknown_field_type(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--fields",
            str(_fields(tmp_path, "- name: id\n  type: text\n")),
            "--tot-size",
            "1kB",
            "--location",
            str(tmp_path / "out"),
        ],
    )
    assert result.exit_code == 4
    assert "text" in result.stderr


def test_unknown_template_type(tmp_path: Path) -> None:
    template = tmp_path / "events.tpl"
    template.write_text("{{.id}}", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate-with-template",
            "--template",
            str(template),
            "--fields",
            str(_fields(tmp_path)),
            "--tot-size",
            "1kB",
            "--template-type",
            "mustache",
            "--location",
            str(tmp_path / "out"),
        ],
    )
    assert result.exit_code == 4
    assert "mustache" in result.stderr


def test_synthesis_failure(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("- name: id\n  value: not-a-number\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--fields",
            str(_fields(tmp_path)),
            "--tot-size",
            "1kB",
            "--config",
            str(cfg),
            "--location",
            str(tmp_path / "out"),
        ],
    )
    assert result.exit_code == 5
    assert "not-a-number" in result.stderr


def test_date_range_overflow(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("- name: ts\n  range: 1e15\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--fields",
            str(_fields(tmp_path, "- name: ts\n  type: date\n")),
            "--tot-size",
            "64kB",
            "--config",
            str(cfg),
            "--location",
            str(tmp_path / "out"),
        ],
    )
    assert result.exit_code == 5
    assert "out of range" in result.stderr
