# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema compiler: argument typing, per-variant compilation, and signature sets."""

from plugsig.compiler.arguments import (
    ArgKind,
    ArgType,
    FlagArg,
    InvalidArg,
    OptionalArg,
    RequiredArg,
    ResolvedType,
    SchemaError,
    SchemaErrorKind,
    classify_field,
    resolve_type,
)
from plugsig.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from plugsig.compiler.binding import CallBinding, Command
from plugsig.compiler.build import CompiledSchema, CompilerError, check_schema, compile_schema
from plugsig.compiler.variant import VariantCompilation, compile_variant

__all__ = [
    "ArgKind",
    "ArgType",
    "RequiredArg",
    "OptionalArg",
    "FlagArg",
    "InvalidArg",
    "ResolvedType",
    "SchemaError",
    "SchemaErrorKind",
    "resolve_type",
    "classify_field",
    "Command",
    "CallBinding",
    "VariantCompilation",
    "compile_variant",
    "CompiledSchema",
    "CompilerError",
    "check_schema",
    "compile_schema",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
]
