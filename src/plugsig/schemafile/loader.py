# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML loader for command schema files."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from plugsig.model.schema import CommandSchema

# ###############
# Public Interface
# ###############

SCHEMA_FILE_SUFFIXES = (".yaml", ".yml")


class SchemaFileError(Exception):
    """Raised when a schema file cannot be read or does not describe a schema."""


def load_schema(path: Path) -> CommandSchema:
    """Load and validate a command schema file.

    Args:
        path: Path to the YAML schema file.

    Returns:
        The validated :class:`CommandSchema`. Loading only checks the shape
        of the document; the compiler checks the schema itself.

    Raises:
        SchemaFileError: If the file cannot be read, contains invalid YAML,
            or does not conform to the schema file layout.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SchemaFileError(f"Schema file not found: {path}") from None
    except OSError as exc:
        raise SchemaFileError(f"Cannot read schema file '{path}': {exc}") from exc

    return parse_schema(text, source_label=str(path))


def parse_schema(text: str, source_label: str = "<string>") -> CommandSchema:
    """Parse schema YAML text into a CommandSchema.

    An empty document is an empty schema.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        SchemaFileError: If the YAML is invalid or does not match the layout.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaFileError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SchemaFileError(f"{source_label}: schema file must be a YAML mapping")

    try:
        return CommandSchema.model_validate(data)
    except ValidationError as exc:
        raise SchemaFileError(f"Invalid schema file {source_label}: {exc}") from exc
