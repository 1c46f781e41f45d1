# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Call bindings: turning an evaluated call back into a typed command value.

Each command variant compiles to one :class:`CallBinding`, an ordered tuple of
field readers plus a pydantic model synthesized for that variant. Readers are
the binding fragments emitted by the variant compiler, one per field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, create_model

from plugsig.compiler.arguments import ArgType
from plugsig.model.call import CallError, CallErrorKind, EvaluatedCall

# ###############
# Public Interface
# ###############


class Command(BaseModel):
    """Base class of every synthesized typed command value.

    Subclasses are generated by the compiler, one per command variant, and
    carry the host-facing command name in ``command_name``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    command_name: ClassVar[str] = ""


@dataclass(frozen=True)
class RequiredPositional:
    """Read positional[index]; fail if absent."""

    field: str
    index: int
    arg_type: ArgType

    def read(self, call: EvaluatedCall, command: str) -> Any:
        value = call.positional[self.index] if self.index < len(call.positional) else None
        if value is None:
            raise CallError(
                CallErrorKind.MISSING_POSITIONAL,
                "Missing required positional argument",
                f"Command '{command}' expects '{self.field}' at position {self.index}.",
                call.head,
            )
        return _check_value(value, self.arg_type, command, f"positional argument '{self.field}'", call)


@dataclass(frozen=True)
class OptionalPositional:
    """Read positional[index] if present, else None."""

    field: str
    index: int
    arg_type: ArgType

    def read(self, call: EvaluatedCall, command: str) -> Any:
        value = call.positional[self.index] if self.index < len(call.positional) else None
        if value is None:
            return None
        return _check_value(value, self.arg_type, command, f"positional argument '{self.field}'", call)


@dataclass(frozen=True)
class Switch:
    """Read a boolean switch by name; absent means False."""

    field: str

    def read(self, call: EvaluatedCall, command: str) -> bool:
        if self.field not in call.named:
            return False
        value = call.named[self.field]
        # A switch given without a value is on.
        if value is None:
            return True
        return _check_value(value, ArgType.BOOL, command, f"switch '--{self.field}'", call)


@dataclass(frozen=True)
class NamedValue:
    """Read an optional named value by name and type-check it."""

    field: str
    arg_type: ArgType

    def read(self, call: EvaluatedCall, command: str) -> Any:
        value = call.named.get(self.field)
        if value is None:
            return None
        return _check_value(value, self.arg_type, command, f"flag '--{self.field}'", call)


FieldReader = RequiredPositional | OptionalPositional | Switch | NamedValue


@dataclass(frozen=True)
class CallBinding:
    """Binds calls of one command to instances of its typed command model."""

    command: str
    model: type[Command]
    readers: tuple[FieldReader, ...]

    def __call__(self, call: EvaluatedCall) -> Command:
        values = {reader.field: reader.read(call, self.command) for reader in self.readers}
        return self.model(**values)


def synthesize_command_model(
    class_name: str,
    command: str,
    readers: tuple[FieldReader, ...],
    usage: str | None = None,
) -> type[Command]:
    """Create the pydantic model class for one command variant.

    Field types follow the readers: required positionals are plain values,
    optional positionals and named values are ``T | None`` defaulting to
    None, and switches are ``bool`` defaulting to False.
    """
    definitions: dict[str, Any] = {}
    for reader in readers:
        if isinstance(reader, RequiredPositional):
            definitions[reader.field] = (reader.arg_type.python_type, ...)
        elif isinstance(reader, Switch):
            definitions[reader.field] = (bool, False)
        else:
            definitions[reader.field] = (reader.arg_type.python_type | None, None)

    model = create_model(class_name, __base__=Command, __doc__=usage, **definitions)
    model.command_name = command
    return model


# ################
# Implementation
# ################

_TYPE_NAMES: dict[ArgType, str] = {
    ArgType.STRING: "string",
    ArgType.BOOL: "boolean",
}


def _check_value(value: Any, arg_type: ArgType, command: str, what: str, call: EvaluatedCall) -> Any:
    if not isinstance(value, arg_type.python_type):
        raise CallError(
            CallErrorKind.TYPE_MISMATCH,
            f"Expected a {_TYPE_NAMES[arg_type]}",
            f"Command '{command}' got {type(value).__name__} {value!r} for {what}.",
            call.head,
        )
    return value
