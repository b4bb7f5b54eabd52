"""Typer-based command line interface for corpus generation.

``generate`` writes a JSON-lines corpus built from a field definition file;
``generate-with-template`` renders a placeholder or Jinja2 template instead.
The seed may be given with ``--seed`` or the ``CORPUSGEN_SEED`` environment
variable; without one every run differs.

Exit codes
----------
0 success
3 I/O error (missing input, unwritable location, rejected write)
4 configuration error (bad YAML, unknown field type, bad size or template)
5 generation error (value synthesis failed)
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import Optional

import typer

from .config import load_config
from .corpus import GeneratorCorpus
from .utils.errors import ConfigurationError, CorpusGenError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="corpusgen",
    help="Generate size-bounded synthetic corpora. Use 'corpusgen generate' to start.",
)

SEED_ENV = "CORPUSGEN_SEED"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


def _build_corpus(
    config_path: Path | None,
    location: Path,
    template_type: str,
    seed: str | None,
) -> GeneratorCorpus:
    try:
        cfg = load_config(config_path)
        return GeneratorCorpus(cfg, location, template_type=template_type, seed=seed)
    except ConfigurationError as exc:
        _safe_exit(4, str(exc))
    except OSError as exc:
        _safe_exit(3, str(exc))
    raise AssertionError("unreachable")  # pragma: no cover


def _run(verbose: bool, action: Callable[[], Path]) -> Path:
    with Timing() as t:
        try:
            path = action()
        except ConfigurationError as exc:
            _safe_exit(4, str(exc))
        except OSError as exc:
            _safe_exit(3, str(exc))
        except CorpusGenError as exc:
            msg = f"{type(exc).__name__}: {exc}" if verbose else str(exc)
            _safe_exit(5, msg)
    if verbose:
        size = path.stat().st_size
        typer.echo(f"Wrote {size} bytes in {t.ms:.1f} ms", err=True)
    return path


@app.callback()
def main() -> None:
    """Entry point for the corpusgen command group."""
    pass


@app.command()
def generate(  # noqa: PLR0913
    fields_path: Path = typer.Option(  # noqa: B008
        ..., "--fields", help="YAML field definitions"
    ),
    tot_size: str = typer.Option(  # noqa: B008
        ..., "--tot-size", help="Corpus size, e.g. 4096, 10MB or 1GiB"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML per-field generation config"
    ),
    location: Path = typer.Option(  # noqa: B008
        Path("corpora"), "--location", help="Directory receiving the corpus"
    ),
    index: Optional[str] = typer.Option(  # noqa: B008
        None, "--index", help="Prefix each record with a bulk create action for this index"
    ),
    seed: Optional[str] = typer.Option(  # noqa: B008
        None, "--seed", envvar=SEED_ENV, help="Seed for reproducible output"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Generate a JSON-lines corpus holding every declared field."""

    configure_logging(verbose)
    corpus = _build_corpus(config_path, location, "placeholder", seed)
    if verbose:
        typer.echo("Loaded config", err=True)
    path = _run(verbose, lambda: corpus.generate(fields_path, tot_size, index=index))
    typer.echo(str(path))


@app.command("generate-with-template")
def generate_with_template(  # noqa: PLR0913
    template_path: Path = typer.Option(  # noqa: B008
        ..., "--template", help="Template file"
    ),
    fields_path: Path = typer.Option(  # noqa: B008
        ..., "--fields", help="YAML field definitions"
    ),
    tot_size: str = typer.Option(  # noqa: B008
        ..., "--tot-size", help="Corpus size, e.g. 4096, 10MB or 1GiB"
    ),
    template_type: str = typer.Option(  # noqa: B008
        "placeholder", "--template-type", help="Template backend [placeholder|jinja]"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML per-field generation config"
    ),
    location: Path = typer.Option(  # noqa: B008
        Path("corpora"), "--location", help="Directory receiving the corpus"
    ),
    seed: Optional[str] = typer.Option(  # noqa: B008
        None, "--seed", envvar=SEED_ENV, help="Seed for reproducible output"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Generate a corpus by rendering a template once per record."""

    configure_logging(verbose)
    corpus = _build_corpus(config_path, location, template_type, seed)
    if verbose:
        typer.echo(f"Using {corpus.template_type.value} template backend", err=True)
    path = _run(
        verbose,
        lambda: corpus.generate_with_template(template_path, fields_path, tot_size),
    )
    typer.echo(str(path))
