# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Argument typing: resolving declared types and classifying fields.

The types in this module sit between the declarative schema and the host's
signature model. A field's declared type is first resolved to an
:class:`ArgType` (unwrapping at most one ``Optional``), then combined with the
field's role tag into an :class:`ArgKind`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from plugsig.model.schema import FieldSpec, Role
from plugsig.model.signature import SyntaxShape
from plugsig.model.types import OptionalTypeRef, PrimitiveType, PrimitiveTypeRef, TypeRef, format_type_ref

# ###############
# Public Interface
# ###############


class SchemaErrorKind(Enum):
    """Category of a compile-time schema error."""

    UNSUPPORTED_TYPE = "unsupported-type"
    ROLE_TYPE_MISMATCH = "role-type-mismatch"
    MISSING_ROLE = "missing-role"
    ORDERING = "ordering"
    MISSING_COMMAND_NAME = "missing-command-name"
    DUPLICATE_COMMAND_NAME = "duplicate-command-name"
    DUPLICATE_FIELD = "duplicate-field"
    INVALID_FIELD_NAME = "invalid-field-name"
    INVALID_CLASS_NAME = "invalid-class-name"
    INVALID_SHORT_FLAG = "invalid-short-flag"


@dataclass(frozen=True)
class SchemaError:
    """A structural error in a command schema.

    Attributes:
        kind: Category of the error.
        message: Human-readable description of the error.
        command: Name of the command the error belongs to, if known.
        field: Name of the offending field, if the error concerns one.
    """

    kind: SchemaErrorKind
    message: str
    command: str | None = None
    field: str | None = None


class ArgType(Enum):
    """Leaf value type of an argument."""

    STRING = "String"
    BOOL = "Bool"

    @property
    def shape(self) -> SyntaxShape:
        return _SHAPES[self]

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]


@dataclass(frozen=True)
class ResolvedType:
    """Outcome of type resolution: the leaf ArgType and whether it was optional-wrapped."""

    is_optional: bool
    arg_type: ArgType


@dataclass(frozen=True)
class RequiredArg:
    arg_type: ArgType


@dataclass(frozen=True)
class OptionalArg:
    arg_type: ArgType


@dataclass(frozen=True)
class FlagArg:
    """A flag. ``arg_type`` is None for a boolean switch that carries no value."""

    arg_type: ArgType | None = None

    @property
    def is_switch(self) -> bool:
        return self.arg_type is None


@dataclass(frozen=True)
class InvalidArg:
    error: SchemaError


ArgKind = RequiredArg | OptionalArg | FlagArg | InvalidArg


def unwrap_optional(type_ref: TypeRef) -> tuple[bool, TypeRef]:
    """Split off one ``Optional`` wrapper.

    Returns ``(True, inner)`` for ``Optional<inner>`` and ``(False, type_ref)``
    for anything else.
    """
    if isinstance(type_ref, OptionalTypeRef):
        return True, type_ref.inner_type
    return False, type_ref


def resolve_type(type_ref: TypeRef) -> ResolvedType | None:
    """Resolve a declared type to an argument type.

    Returns None when the leaf type (after unwrapping one ``Optional``) is
    not a supported argument type. Callers turn that into a schema error.
    """
    is_optional, leaf = unwrap_optional(type_ref)
    if not isinstance(leaf, PrimitiveTypeRef):
        return None
    arg_type = _ARG_TYPES.get(leaf.primitive)
    if arg_type is None:
        return None
    return ResolvedType(is_optional=is_optional, arg_type=arg_type)


def classify_field(field: FieldSpec, *, command: str | None = None) -> ArgKind:
    """Combine a field's role tag and declared type into an ArgKind.

    Role tags are checked in the fixed precedence REQUIRED > OPTIONAL > FLAG
    and the first one present decides the kind. A field that should carry
    one tag but carries several is therefore classified by the strongest one.

    - required: type must not be optional-wrapped -> RequiredArg
    - optional: type must be optional-wrapped -> OptionalArg of the inner type
    - flag: optional-wrapped -> FlagArg with a value type; plain Bool -> switch
    - no tag: InvalidArg

    Every failure comes back as an :class:`InvalidArg`; this function never raises.
    """
    ctx = _field_context(field.name, command)
    role = effective_role(field.roles)
    if role is None:
        return _invalid(SchemaErrorKind.MISSING_ROLE, f"{ctx} is missing a role tag", field, command)

    resolved = resolve_type(field.type)
    if resolved is None:
        return _invalid(
            SchemaErrorKind.UNSUPPORTED_TYPE,
            f"{ctx} has unsupported argument type '{format_type_ref(field.type)}'",
            field,
            command,
        )

    if role is Role.REQUIRED:
        if resolved.is_optional:
            return _invalid(
                SchemaErrorKind.ROLE_TYPE_MISMATCH,
                f"{ctx} is required and must not be optional-wrapped",
                field,
                command,
            )
        return RequiredArg(resolved.arg_type)

    if role is Role.OPTIONAL:
        if not resolved.is_optional:
            return _invalid(
                SchemaErrorKind.ROLE_TYPE_MISMATCH,
                f"{ctx} is optional and must be optional-wrapped",
                field,
                command,
            )
        return OptionalArg(resolved.arg_type)

    if resolved.is_optional:
        return FlagArg(resolved.arg_type)
    if resolved.arg_type is ArgType.BOOL:
        return FlagArg(None)
    return _invalid(
        SchemaErrorKind.ROLE_TYPE_MISMATCH,
        f"{ctx} is a flag and must be Bool or optional-wrapped",
        field,
        command,
    )


ROLE_PRECEDENCE: tuple[Role, ...] = (Role.REQUIRED, Role.OPTIONAL, Role.FLAG)


def effective_role(roles: list[Role]) -> Role | None:
    """Return the role that wins under ROLE_PRECEDENCE, or None if no tag is present."""
    for role in ROLE_PRECEDENCE:
        if role in roles:
            return role
    return None


# ################
# Implementation
# ################

_ARG_TYPES: dict[PrimitiveType, ArgType] = {
    PrimitiveType.STRING: ArgType.STRING,
    PrimitiveType.BOOL: ArgType.BOOL,
}

_SHAPES: dict[ArgType, SyntaxShape] = {
    ArgType.STRING: SyntaxShape.STRING,
    ArgType.BOOL: SyntaxShape.BOOLEAN,
}

_PYTHON_TYPES: dict[ArgType, type] = {
    ArgType.STRING: str,
    ArgType.BOOL: bool,
}


def _field_context(field_name: str, command: str | None) -> str:
    if command is None:
        return f"Field '{field_name}'"
    return f"Field '{field_name}' of command '{command}'"


def _invalid(kind: SchemaErrorKind, message: str, field: FieldSpec, command: str | None) -> InvalidArg:
    return InvalidArg(SchemaError(kind=kind, message=message, command=command, field=field.name))
