# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compile declarative plugin command schemas into host signatures and typed call bindings."""

from plugsig.compiler import CompiledSchema, CompilerError, SchemaError, compile_schema
from plugsig.model import CommandSchema, FieldSpec, Role, VariantSpec
from plugsig.model.call import CallError, EvaluatedCall, LabeledError, Span
from plugsig.runtime import Plugin, serve_plugin
from plugsig.schemafile import SchemaFileError, load_schema

__version__ = "0.1.0"

__all__ = [
    "CommandSchema",
    "VariantSpec",
    "FieldSpec",
    "Role",
    "compile_schema",
    "CompiledSchema",
    "CompilerError",
    "SchemaError",
    "EvaluatedCall",
    "Span",
    "LabeledError",
    "CallError",
    "Plugin",
    "serve_plugin",
    "load_schema",
    "SchemaFileError",
]
