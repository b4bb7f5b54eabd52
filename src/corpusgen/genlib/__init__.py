"""Generation engine: template parsing, value synthesis and generators."""

from .fields import Field, Fields, FieldType, load_fields, load_fields_from_yaml
from .generator import (
    CustomTemplateGenerator,
    Generator,
    TemplateType,
    new_generator,
    new_generator_for,
    new_generator_with_custom_template,
    new_generator_with_text_template,
)
from .state import GenState
from .template import (
    CustomTemplate,
    compile_custom_template,
    generate_custom_template_from_fields,
    parse_custom_template,
)
from .value import Value, ValueKind, decode_record

__all__ = [
    "CustomTemplate",
    "CustomTemplateGenerator",
    "Field",
    "FieldType",
    "Fields",
    "GenState",
    "Generator",
    "TemplateType",
    "Value",
    "ValueKind",
    "compile_custom_template",
    "decode_record",
    "generate_custom_template_from_fields",
    "load_fields",
    "load_fields_from_yaml",
    "new_generator",
    "new_generator_for",
    "new_generator_with_custom_template",
    "new_generator_with_text_template",
    "parse_custom_template",
]
