# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading command schemas from YAML files."""

from plugsig.schemafile.loader import SCHEMA_FILE_SUFFIXES, SchemaFileError, load_schema, parse_schema

__all__ = [
    "SCHEMA_FILE_SUFFIXES",
    "SchemaFileError",
    "load_schema",
    "parse_schema",
]
