import pytest

from corpusgen.utils.errors import ConfigurationError, SizeFormatError
from corpusgen.utils.size import parse_size


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("4096", 4096),
        ("10B", 10),
        ("10kB", 10_000),
        ("10MB", 10_000_000),
        ("1.5 GB", 1_500_000_000),
        ("2KiB", 2048),
        ("1MiB", 1024**2),
        (" 3 gib ", 3 * 1024**3),
        ("1TB", 10**12),
    ],
)
def test_parse_size(text: str, expected: int) -> None:
    assert parse_size(text) == expected


@pytest.mark.parametrize("text", ["", "MB", "-1MB", "10 parsecs", "1,5MB"])
def test_invalid_size(text: str) -> None:
    with pytest.raises(SizeFormatError):
        parse_size(text)
    assert issubclass(SizeFormatError, ConfigurationError)
