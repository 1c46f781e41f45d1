# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Incoming plugin calls and the labeled errors reported back to the host."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Span:
    """Source region of the call in the host's input, used to point at errors."""

    start: int
    end: int


@dataclass(frozen=True)
class EvaluatedCall:
    """A call as delivered by the host, with all arguments already evaluated.

    Attributes:
        positional: Positional values in call order.
        named: Flag name to value. A value of None means the flag was given
            without a value.
        head: Span of the command name, if the host supplied one.
    """

    positional: Sequence[Any] = ()
    named: Mapping[str, Any] = field(default_factory=dict)
    head: Span | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "positional", tuple(self.positional))
        object.__setattr__(self, "named", MappingProxyType(dict(self.named)))


class LabeledError(Exception):
    """An error the host renders with a short label and a longer message.

    Attributes:
        label: Short headline of the error.
        msg: Detailed explanation.
        span: Region of the call the error points at, if any.
    """

    def __init__(self, label: str, msg: str, span: Span | None = None) -> None:
        super().__init__(f"{label}: {msg}")
        self.label = label
        self.msg = msg
        self.span = span


class CallErrorKind(Enum):
    """Category of a per-call binding failure."""

    UNKNOWN_COMMAND = "unknown-command"
    MISSING_POSITIONAL = "missing-positional"
    TYPE_MISMATCH = "type-mismatch"


class CallError(LabeledError):
    """Raised when an incoming call cannot be bound to a typed command value.

    Only the offending call fails; the plugin keeps serving later calls.
    """

    def __init__(self, kind: CallErrorKind, label: str, msg: str, span: Span | None = None) -> None:
        super().__init__(label, msg, span)
        self.kind = kind
