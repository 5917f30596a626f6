"""
Schema Registry Module.

Loads the JSON schemas bundled with kivtest and validates run files against
them with jsonschema (Draft 7).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from loguru import logger

# Schemas shipped with the package.
DEFAULT_SCHEMA_DIR = Path(__file__).parent / "schemas"


class SchemaValidationError(Exception):
    """Raised when a schema cannot be loaded or a document does not match it."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


def _format_error(error: jsonschema.ValidationError) -> str:
    path = " -> ".join(str(p) for p in error.absolute_path) or "(root)"
    return f"  [{path}] {error.message}"


class SchemaRegistry:
    """
    Named Draft 7 validators, built on first use.

    Attributes:
        schema_dir: Directory holding ``<name>.json`` schema files.
    """

    def __init__(self, schema_dir: str | Path = DEFAULT_SCHEMA_DIR) -> None:
        self.schema_dir = Path(schema_dir)
        self._validators: Dict[str, jsonschema.Draft7Validator] = {}
        logger.debug(f"SchemaRegistry initialized — schema_dir={self.schema_dir}")

    def validator(self, schema_name: str) -> jsonschema.Draft7Validator:
        """
        Get the validator for a schema, loading and checking it on first use.

        Raises:
            FileNotFoundError: If ``<schema_name>.json`` does not exist.
            SchemaValidationError: If the file is not JSON or not a valid
                                   Draft 7 schema.
        """
        if schema_name in self._validators:
            return self._validators[schema_name]

        schema_path = self.schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(
                f"Schema not found: {schema_name} (expected at {schema_path})"
            )

        try:
            schema: Any = json.loads(schema_path.read_text(encoding="utf-8"))
            jsonschema.Draft7Validator.check_schema(schema)
        except (OSError, json.JSONDecodeError) as e:
            raise SchemaValidationError(f"Failed to load schema {schema_name}: {e}") from e
        except jsonschema.SchemaError as e:
            raise SchemaValidationError(f"Invalid schema {schema_name}: {e.message}") from e

        validator = jsonschema.Draft7Validator(schema)
        self._validators[schema_name] = validator
        logger.debug(f"Schema loaded: {schema_name}")
        return validator

    def validate(self, data: Dict[str, Any], schema_name: str) -> None:
        """
        Validate a document against a named schema.

        Raises:
            SchemaValidationError: Listing every violation, ordered by path.
        """
        violations = sorted(
            self.validator(schema_name).iter_errors(data),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        if not violations:
            logger.debug(f"Validation passed: {schema_name}")
            return

        messages = [_format_error(e) for e in violations]
        raise SchemaValidationError(
            f"Schema validation failed for '{schema_name}' "
            f"({len(messages)} error(s)):\n" + "\n".join(messages),
            errors=messages,
        )
