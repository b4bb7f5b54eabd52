"""Smoke tests for package import and version."""

import corpusgen


def test_import_package() -> None:
    assert isinstance(corpusgen, object)


def test_version() -> None:
    assert corpusgen.__version__ == "0.1.0"


def test_public_api() -> None:
    assert callable(corpusgen.new_generator)
    assert callable(corpusgen.new_generator_with_custom_template)
    assert callable(corpusgen.new_generator_with_text_template)
