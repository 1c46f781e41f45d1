# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarative command schema: commands, their fields, and role tags."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

from plugsig.model.types import TypeRef, parse_type_ref

# ###############
# Public Interface
# ###############


class Role(Enum):
    """Role tag of a field.

    A field should carry exactly one role. When several are present the
    compiler applies the precedence REQUIRED > OPTIONAL > FLAG.
    """

    REQUIRED = "required"
    OPTIONAL = "optional"
    FLAG = "flag"


class FieldSpec(BaseModel):
    """One argument of a command: a named, typed, role-tagged field."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    type: TypeRef
    roles: list[Role] = _Field(alias="role", default_factory=list)
    usage: str | None = None
    short: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_type_ref(value)
        return value

    @field_validator("roles", mode="before")
    @classmethod
    def _normalize_roles(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, Role)):
            value = [value]
        if isinstance(value, list):
            return [_ROLE_ALIASES.get(v, v) if isinstance(v, str) else v for v in value]
        return value


class VariantSpec(BaseModel):
    """One invocable command shape.

    Attributes:
        name: Command name as the host invokes it, e.g. ``"mtg tutor"``.
        usage: One-line documentation of the command.
        variant: Class name of the typed command value. Derived from *name*
            when omitted.
        fields: Arguments in declaration order.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str | None = None
    usage: str | None = None
    variant: str | None = None
    fields: list[FieldSpec] = _Field(default_factory=list)


class CommandSchema(BaseModel):
    """The full set of command variants compiled together."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    commands: list[VariantSpec] = _Field(default_factory=list)


# ################
# Implementation
# ################

_ROLE_ALIASES: dict[str, str] = {
    "req": Role.REQUIRED.value,
    "opt": Role.OPTIONAL.value,
}
