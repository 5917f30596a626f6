"""
Configuration Management Module.

Handles loading and validation of:
- Run files (YAML/JSON) holding default run options.
- Environment fallbacks for the connection string.
"""

from kivtest.config.loader import ConfigLoader, ConfigurationError
from kivtest.config.schema_registry import SchemaRegistry, SchemaValidationError

__all__ = ["ConfigLoader", "ConfigurationError", "SchemaRegistry", "SchemaValidationError"]
