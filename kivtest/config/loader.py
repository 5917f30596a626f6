"""
Configuration Loader Module.

Reads YAML or JSON run files, validates them against the bundled JSON
schema and applies the environment fallback for the DSN.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from kivtest.config.schema_registry import DEFAULT_SCHEMA_DIR, SchemaRegistry, SchemaValidationError

# Environment variable consulted when no DSN is configured.
DSN_ENV_VAR = "KIVIK_TEST_DSN"

DEFAULT_RUN_FILE = "kivtest.yaml"

RUN_OPTIONS_SCHEMA = "run_options_schema"


class ConfigurationError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""

    pass


class ConfigLoader:
    """
    Loads run files.

    Attributes:
        config_dir: Directory searched first for relative filenames.
        schema_registry: Validators for the bundled schemas.
    """

    SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}

    def __init__(
        self,
        config_dir: str | Path = ".",
        schema_dir: str | Path | None = None,
    ) -> None:
        self.config_dir = Path(config_dir)
        self.schema_registry = SchemaRegistry(schema_dir or DEFAULT_SCHEMA_DIR)
        logger.debug(f"ConfigLoader initialized — config_dir={self.config_dir}")

    def load(self, filename: str, schema_name: Optional[str] = None) -> Dict[str, Any]:
        """
        Read a configuration file, validating it when a schema is named.

        Args:
            filename: Path of the file, relative to config_dir or the
                      current directory, or absolute.
            schema_name: Bundled schema to validate against (file stem).

        Returns:
            Parsed configuration as a dictionary.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the file cannot be read or parsed, or
                                fails validation.
        """
        file_path = self._resolve_path(filename)
        logger.info(f"Loading configuration: {file_path}")
        data = self._read_file(file_path)

        if schema_name:
            try:
                self.schema_registry.validate(data, schema_name)
            except SchemaValidationError as e:
                raise ConfigurationError(f"{file_path}: {e}") from e
        return data

    def load_run_options(self, filename: str = DEFAULT_RUN_FILE) -> Dict[str, Any]:
        """
        Load and validate a run file, then apply environment fallbacks.

        The DSN falls back to the KIVIK_TEST_DSN environment variable when
        the file does not set one.

        Returns:
            Run options as a dictionary (keys of RunOptions).
        """
        data = self.load(filename, schema_name=RUN_OPTIONS_SCHEMA)
        if not data.get("dsn") and os.environ.get(DSN_ENV_VAR):
            data["dsn"] = os.environ[DSN_ENV_VAR]
            logger.debug(f"DSN taken from ${DSN_ENV_VAR}")
        return data

    def _resolve_path(self, filename: str) -> Path:
        path = Path(filename)
        if path.is_absolute():
            candidates = [path]
        else:
            candidates = [self.config_dir / path, path]

        for candidate in candidates:
            if candidate.is_file():
                return candidate
        raise FileNotFoundError(
            f"Configuration file not found: {filename} "
            f"(searched in {self.config_dir} and current directory)"
        )

    def _read_file(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML or JSON file into a mapping."""
        suffix = file_path.suffix.lower()
        if suffix not in self.SUPPORTED_EXTENSIONS:
            raise ConfigurationError(
                f"Unsupported file format '{suffix}'. "
                f"Supported: {sorted(self.SUPPORTED_EXTENSIONS)}"
            )

        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read file {file_path}: {e}") from e

        try:
            if suffix == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to parse {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping (dict), "
                f"got {type(data).__name__}: {file_path}"
            )
        return data
