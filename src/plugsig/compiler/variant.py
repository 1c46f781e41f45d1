# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of a single command variant.

Walks the variant's fields in declaration order and emits, side by side, the
signature fragment the host sees and the binding fragment that reads the
same field back out of a call. Positional indices are shared between the
two so that they cannot drift apart.
"""

from __future__ import annotations

import keyword
import logging
import re
from dataclasses import dataclass, field

from plugsig.compiler.arguments import (
    FlagArg,
    InvalidArg,
    OptionalArg,
    RequiredArg,
    SchemaError,
    SchemaErrorKind,
    classify_field,
    effective_role,
)
from plugsig.compiler.binding import (
    CallBinding,
    Command,
    FieldReader,
    NamedValue,
    OptionalPositional,
    RequiredPositional,
    Switch,
    synthesize_command_model,
)
from plugsig.model.schema import FieldSpec, Role, VariantSpec
from plugsig.model.signature import ParamDescriptor, ParamRole, SignatureDescriptor, SyntaxShape

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass
class VariantCompilation:
    """Result of compiling one variant.

    Attributes:
        name: Command name, or None if the variant has none.
        signature: The signature descriptor; None when there are errors.
        binding: The call binding; None when there are errors.
        errors: Every schema error found in the variant.
    """

    name: str | None
    signature: SignatureDescriptor | None = None
    binding: CallBinding | None = None
    errors: list[SchemaError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def compile_variant(variant: VariantSpec, *, position: int = 0) -> VariantCompilation:
    """Compile one command variant into its signature and call binding.

    All errors in the variant are collected; a required field that follows
    an optional field or a flag is reported and the scan continues so that
    every ordering violation shows up in one pass.

    Args:
        variant: The variant to compile.
        position: Index of the variant in its schema, used to identify
            variants that have no name.

    Returns:
        A :class:`VariantCompilation`. ``signature`` and ``binding`` are set
        only when ``errors`` is empty.
    """
    return _VariantCompiler(variant, position).compile()


def derive_class_name(command: str) -> str:
    """Derive a class name from a command name, e.g. ``"mtg tutor"`` -> ``"MtgTutor"``."""
    parts = [p for p in re.split(r"[^0-9A-Za-z]+", command) if p]
    name = "".join(p[:1].upper() + p[1:] for p in parts)
    if not name or name[0].isdigit():
        name = "Command" + name
    return name


# ################
# Implementation
# ################

_SHORT_RE = re.compile(r"[0-9A-Za-z]")


class _VariantCompiler:
    """Walks the fields of one variant, tracking position and ordering state."""

    def __init__(self, variant: VariantSpec, position: int) -> None:
        self._variant = variant
        self._position = position
        self._name = variant.name.strip() if variant.name and variant.name.strip() else None
        self._ctx = f"command '{self._name}'" if self._name else f"command #{position}"
        self._errors: list[SchemaError] = []
        self._params: list[ParamDescriptor] = []
        self._readers: list[FieldReader] = []
        self._index = 0
        self._seen_non_required = False

    def compile(self) -> VariantCompilation:
        if self._name is None:
            self._errors.append(
                SchemaError(
                    kind=SchemaErrorKind.MISSING_COMMAND_NAME,
                    message=f"Command #{self._position} has no name",
                )
            )

        if self._variant.variant is not None and not _is_identifier(self._variant.variant):
            self._errors.append(
                SchemaError(
                    kind=SchemaErrorKind.INVALID_CLASS_NAME,
                    message=f"{self._ctx}: variant name '{self._variant.variant}' is not a valid class name",
                    command=self._name,
                )
            )

        self._check_field_names()
        self._check_short_flags()

        for field_spec in self._variant.fields:
            self._compile_field(field_spec)

        # A missing name is always among the errors.
        if self._errors or self._name is None:
            logger.debug("%s: %d error(s)", self._ctx, len(self._errors))
            return VariantCompilation(name=self._name, errors=self._errors)

        signature = SignatureDescriptor(
            name=self._name,
            usage=self._variant.usage or "",
            params=tuple(self._params),
        )
        readers = tuple(self._readers)
        class_name = self._variant.variant or derive_class_name(self._name)
        model: type[Command] = synthesize_command_model(class_name, self._name, readers, self._variant.usage)
        logger.debug("%s: compiled %d parameter(s) into %s", self._ctx, len(self._params), class_name)
        return VariantCompilation(
            name=self._name,
            signature=signature,
            binding=CallBinding(command=self._name, model=model, readers=readers),
        )

    def _compile_field(self, field_spec: FieldSpec) -> None:
        kind = classify_field(field_spec, command=self._name)
        usage = field_spec.usage or ""
        name = field_spec.name

        if isinstance(kind, InvalidArg):
            self._errors.append(kind.error)
            return

        if isinstance(kind, RequiredArg):
            if self._seen_non_required:
                self._errors.append(
                    SchemaError(
                        kind=SchemaErrorKind.ORDERING,
                        message=(
                            f"{self._ctx}: required field '{name}' may not follow optional or flag arguments"
                        ),
                        command=self._name,
                        field=name,
                    )
                )
                return
            self._params.append(
                ParamDescriptor(name=name, shape=kind.arg_type.shape, role=ParamRole.REQUIRED_POSITIONAL, usage=usage)
            )
            self._readers.append(RequiredPositional(field=name, index=self._index, arg_type=kind.arg_type))
            self._index += 1
            return

        self._seen_non_required = True

        if isinstance(kind, OptionalArg):
            self._params.append(
                ParamDescriptor(name=name, shape=kind.arg_type.shape, role=ParamRole.OPTIONAL_POSITIONAL, usage=usage)
            )
            self._readers.append(OptionalPositional(field=name, index=self._index, arg_type=kind.arg_type))
            self._index += 1
            return

        if not isinstance(kind, FlagArg):
            raise TypeError(f"Unexpected argument kind {kind!r} for field '{name}'")
        if kind.arg_type is None:
            self._params.append(
                ParamDescriptor(
                    name=name,
                    shape=SyntaxShape.BOOLEAN,
                    role=ParamRole.SWITCH,
                    usage=usage,
                    short=field_spec.short,
                )
            )
            self._readers.append(Switch(field=name))
        else:
            self._params.append(
                ParamDescriptor(
                    name=name,
                    shape=kind.arg_type.shape,
                    role=ParamRole.NAMED,
                    usage=usage,
                    short=field_spec.short,
                )
            )
            self._readers.append(NamedValue(field=name, arg_type=kind.arg_type))

    def _check_field_names(self) -> None:
        seen: set[str] = set()
        reported: set[str] = set()
        for field_spec in self._variant.fields:
            name = field_spec.name
            if name in seen:
                if name not in reported:
                    self._error(
                        SchemaErrorKind.DUPLICATE_FIELD,
                        f"{self._ctx}: duplicate field name '{name}'",
                        name,
                    )
                    reported.add(name)
            else:
                seen.add(name)

            if not _is_identifier(name) or name.startswith("_"):
                self._error(
                    SchemaErrorKind.INVALID_FIELD_NAME,
                    f"{self._ctx}: field name '{name}' is not a valid identifier",
                    name,
                )
            elif name.startswith("model_") or hasattr(Command, name):
                self._error(
                    SchemaErrorKind.INVALID_FIELD_NAME,
                    f"{self._ctx}: field name '{name}' is reserved",
                    name,
                )

    def _check_short_flags(self) -> None:
        seen: set[str] = set()
        for field_spec in self._variant.fields:
            short = field_spec.short
            if short is None:
                continue
            if field_spec.roles and not _is_flag(field_spec):
                self._error(
                    SchemaErrorKind.INVALID_SHORT_FLAG,
                    f"{self._ctx}: field '{field_spec.name}' has a short name but is not a flag",
                    field_spec.name,
                )
                continue
            if not _SHORT_RE.fullmatch(short):
                self._error(
                    SchemaErrorKind.INVALID_SHORT_FLAG,
                    f"{self._ctx}: short name '{short}' of field '{field_spec.name}' must be one letter or digit",
                    field_spec.name,
                )
                continue
            if short in seen:
                self._error(
                    SchemaErrorKind.INVALID_SHORT_FLAG,
                    f"{self._ctx}: short name '{short}' is used by more than one flag",
                    field_spec.name,
                )
            seen.add(short)

    def _error(self, kind: SchemaErrorKind, message: str, field_name: str) -> None:
        self._errors.append(SchemaError(kind=kind, message=message, command=self._name, field=field_name))


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _is_flag(field_spec: FieldSpec) -> bool:
    return effective_role(field_spec.roles) is Role.FLAG
