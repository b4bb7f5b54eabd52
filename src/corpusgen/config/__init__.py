"""Per-field generation configuration.

A configuration file is a YAML sequence with at most one entry per field::

    - name: event.id
      cardinality: 250
    - name: process.pid
      fuzziness: 0.1
      range: 100
    - name: service.name
      value: checkout

Entries naming fields that are not declared are ignored by the generators.
"""

from .schema import Config, FieldConfig, load_config, load_config_from_yaml

__all__ = ["Config", "FieldConfig", "load_config", "load_config_from_yaml"]
