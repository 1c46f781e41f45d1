# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Host-facing signature descriptors produced by the compiler."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class SyntaxShape(Enum):
    """Value shape of a parameter as the host sees it."""

    STRING = "String"
    BOOLEAN = "Boolean"


class ParamRole(Enum):
    """How a parameter is supplied in a call."""

    REQUIRED_POSITIONAL = "required"
    OPTIONAL_POSITIONAL = "optional"
    SWITCH = "switch"
    NAMED = "named"

    @property
    def is_positional(self) -> bool:
        return self in (ParamRole.REQUIRED_POSITIONAL, ParamRole.OPTIONAL_POSITIONAL)


class ParamDescriptor(BaseModel):
    """A single parameter of a command signature.

    A switch has no value, so its *shape* is always ``Boolean``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    shape: SyntaxShape
    role: ParamRole
    usage: str = ""
    short: str | None = None


class SignatureDescriptor(BaseModel):
    """Name, documentation, and ordered parameters of one command."""

    model_config = ConfigDict(frozen=True)

    name: str
    usage: str = ""
    params: tuple[ParamDescriptor, ...] = _Field(default_factory=tuple)

    @property
    def required_positional(self) -> list[ParamDescriptor]:
        return [p for p in self.params if p.role is ParamRole.REQUIRED_POSITIONAL]

    @property
    def optional_positional(self) -> list[ParamDescriptor]:
        return [p for p in self.params if p.role is ParamRole.OPTIONAL_POSITIONAL]

    @property
    def flags(self) -> list[ParamDescriptor]:
        return [p for p in self.params if not p.role.is_positional]
