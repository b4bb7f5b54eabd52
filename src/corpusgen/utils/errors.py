"""Typed exceptions for configuration, synthesis and output failures."""


class CorpusGenError(Exception):
    """Base class for all corpusgen errors."""


class ConfigurationError(CorpusGenError, ValueError):
    """Raised for malformed configuration, field definitions or templates."""


class TemplateError(ConfigurationError):
    """Raised when a template cannot be parsed or compiled."""


class SizeFormatError(ConfigurationError):
    """Raised when a human-readable size string cannot be parsed."""


class SynthesisError(CorpusGenError, ValueError):
    """Raised when a field value cannot be produced or serialized."""


class WriteError(CorpusGenError, OSError):
    """Raised when the output sink rejects a write."""
