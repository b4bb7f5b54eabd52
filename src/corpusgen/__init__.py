"""Synthetic corpus generation for ingestion testing."""

from .config import Config, FieldConfig, load_config, load_config_from_yaml
from .genlib import (
    Field,
    FieldType,
    GenState,
    new_generator,
    new_generator_with_custom_template,
    new_generator_with_text_template,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "Field",
    "FieldConfig",
    "FieldType",
    "GenState",
    "__version__",
    "load_config",
    "load_config_from_yaml",
    "new_generator",
    "new_generator_with_custom_template",
    "new_generator_with_text_template",
]
