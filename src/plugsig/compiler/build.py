# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Whole-schema compilation: signature list plus name-dispatching call binding.

Every variant is compiled independently, then the results are checked
against each other (duplicate command names) and combined. Compilation is
all-or-nothing: a schema with any error yields no signatures and no bindings,
and the raised :class:`CompilerError` carries every error found.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from plugsig.compiler.arguments import SchemaError, SchemaErrorKind
from plugsig.compiler.binding import CallBinding, Command
from plugsig.compiler.variant import VariantCompilation, compile_variant
from plugsig.model.call import CallError, CallErrorKind, EvaluatedCall
from plugsig.model.schema import CommandSchema
from plugsig.model.signature import SignatureDescriptor

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a schema cannot be compiled.

    Attributes:
        errors: Every schema error found, in schema order.
    """

    def __init__(self, errors: list[SchemaError]) -> None:
        lines = "\n".join(f"  {e.message}" for e in errors)
        super().__init__(f"{len(errors)} schema error(s):\n{lines}")
        self.errors = errors


@dataclass(frozen=True)
class CompiledSchema:
    """The immutable output of compilation.

    Attributes:
        signatures: Signature descriptors in schema declaration order.
        bindings: Call binding per command name.
    """

    signatures: tuple[SignatureDescriptor, ...]
    bindings: Mapping[str, CallBinding]

    @property
    def command_names(self) -> list[str]:
        return [s.name for s in self.signatures]

    def command_type(self, name: str) -> type[Command]:
        """Return the typed command model of *name*.

        Raises:
            KeyError: If no command is called *name*.
        """
        return self.bindings[name].model

    def parse(self, name: str, call: EvaluatedCall) -> Command:
        """Bind *call* to the typed command value of the command called *name*.

        Raises:
            CallError: If *name* is unknown, a required positional is missing,
                or a value has the wrong type.
        """
        binding = self.bindings.get(name)
        if binding is None:
            raise CallError(
                CallErrorKind.UNKNOWN_COMMAND,
                "Unknown command name",
                f"'{name}' does not match any signature known to this plugin.",
                call.head,
            )
        return binding(call)


def check_schema(schema: CommandSchema) -> list[SchemaError]:
    """Return every schema error in *schema*; an empty list means it compiles."""
    _, errors = _compile_all(schema)
    return errors


def compile_schema(schema: CommandSchema) -> CompiledSchema:
    """Compile a command schema into signatures and call bindings.

    Args:
        schema: The command schema to compile.

    Returns:
        The :class:`CompiledSchema`.

    Raises:
        CompilerError: If any variant is invalid or a command name is
            declared more than once.
    """
    compilations, errors = _compile_all(schema)
    if errors:
        raise CompilerError(errors)

    signatures: list[SignatureDescriptor] = []
    bindings: dict[str, CallBinding] = {}
    for compilation in compilations:
        if compilation.signature is None or compilation.binding is None:
            raise RuntimeError(f"Variant '{compilation.name}' compiled without errors but produced no binding")
        signatures.append(compilation.signature)
        bindings[compilation.signature.name] = compilation.binding

    logger.info("Compiled %d command signature(s)", len(signatures))
    return CompiledSchema(signatures=tuple(signatures), bindings=MappingProxyType(bindings))


# ################
# Implementation
# ################


def _compile_all(schema: CommandSchema) -> tuple[list[VariantCompilation], list[SchemaError]]:
    compilations = [compile_variant(v, position=i) for i, v in enumerate(schema.commands)]
    errors = [e for c in compilations for e in c.errors]
    errors.extend(_check_duplicate_commands([c.name for c in compilations if c.name is not None]))
    return compilations, errors


def _check_duplicate_commands(names: list[str]) -> list[SchemaError]:
    """Return one SchemaError per command name declared more than once."""
    seen: set[str] = set()
    reported: set[str] = set()
    errors: list[SchemaError] = []
    for name in names:
        if name in seen:
            if name not in reported:
                errors.append(
                    SchemaError(
                        kind=SchemaErrorKind.DUPLICATE_COMMAND_NAME,
                        message=f"Duplicate command name '{name}'",
                        command=name,
                    )
                )
                reported.add(name)
        else:
            seen.add(name)
    return errors
