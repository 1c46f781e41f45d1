# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema and signature models for plugsig."""

from plugsig.model.schema import CommandSchema, FieldSpec, Role, VariantSpec
from plugsig.model.signature import ParamDescriptor, ParamRole, SignatureDescriptor, SyntaxShape
from plugsig.model.types import (
    ListTypeRef,
    MapTypeRef,
    NamedTypeRef,
    OptionalTypeRef,
    PrimitiveType,
    PrimitiveTypeRef,
    TypeRef,
    TypeSyntaxError,
    format_type_ref,
    parse_type_ref,
)

__all__ = [
    # Declared types
    "PrimitiveType",
    "PrimitiveTypeRef",
    "ListTypeRef",
    "MapTypeRef",
    "OptionalTypeRef",
    "NamedTypeRef",
    "TypeRef",
    "TypeSyntaxError",
    "parse_type_ref",
    "format_type_ref",
    # Schema
    "Role",
    "FieldSpec",
    "VariantSpec",
    "CommandSchema",
    # Signatures
    "SyntaxShape",
    "ParamRole",
    "ParamDescriptor",
    "SignatureDescriptor",
]
