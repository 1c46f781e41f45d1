# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declared field types for the plugsig schema model.

A declared type is what a schema author writes next to a field name, for
example ``String`` or ``Optional<String>``. Only a small subset of declared
types is usable as a plugin argument; that decision belongs to the compiler,
not to this module.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveType(Enum):
    """Primitive types a schema may declare."""

    STRING = "String"
    INT = "Int"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    BOOL = "Bool"
    BYTES = "Bytes"
    TIMESTAMP = "Timestamp"
    DATETIME = "Datetime"


class PrimitiveTypeRef(BaseModel):
    """Reference to a primitive type."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType


class ListTypeRef(BaseModel):
    """Reference to a parameterized List<T> type."""

    kind: Literal["list"] = "list"
    element_type: TypeRef


class MapTypeRef(BaseModel):
    """Reference to a parameterized Map<K, V> type."""

    kind: Literal["map"] = "map"
    key_type: TypeRef
    value_type: TypeRef


class OptionalTypeRef(BaseModel):
    """Reference to a parameterized Optional<T> type: a value that may be absent."""

    kind: Literal["optional"] = "optional"
    inner_type: TypeRef


class NamedTypeRef(BaseModel):
    """Reference to a named custom type."""

    kind: Literal["named"] = "named"
    name: str


# A declared type reference. The `kind` discriminator keeps dict input unambiguous.
TypeRef = Annotated[
    PrimitiveTypeRef | ListTypeRef | MapTypeRef | OptionalTypeRef | NamedTypeRef,
    _Field(discriminator="kind"),
]


class TypeSyntaxError(ValueError):
    """Raised when a textual type expression cannot be parsed."""


def parse_type_ref(text: str) -> TypeRef:
    """Parse a textual type expression into a TypeRef.

    Accepted forms::

        String                 primitive
        Optional<String>       optional wrapper (``Option<...>`` is an alias)
        List<Int>              list
        Map<String, Int>       map
        Card                   any other identifier is a named type

    Raises:
        TypeSyntaxError: If *text* is not a well-formed type expression.
    """
    tokens = _tokenize(text)
    parser = _TypeParser(tokens, text)
    type_ref = parser.parse_type()
    parser.expect_end()
    return type_ref


def format_type_ref(type_ref: TypeRef) -> str:
    """Render a TypeRef back into its textual form."""
    if isinstance(type_ref, PrimitiveTypeRef):
        return type_ref.primitive.value
    if isinstance(type_ref, ListTypeRef):
        return f"List<{format_type_ref(type_ref.element_type)}>"
    if isinstance(type_ref, MapTypeRef):
        return f"Map<{format_type_ref(type_ref.key_type)}, {format_type_ref(type_ref.value_type)}>"
    if isinstance(type_ref, OptionalTypeRef):
        return f"Optional<{format_type_ref(type_ref.inner_type)}>"
    if isinstance(type_ref, NamedTypeRef):
        return type_ref.name
    raise TypeError(f"Not a type reference: {type_ref!r}")


# Resolve forward references for models that use TypeRef.
ListTypeRef.model_rebuild()
MapTypeRef.model_rebuild()
OptionalTypeRef.model_rebuild()


# ################
# Implementation
# ################

_TOKEN_RE = re.compile(r"\s*(?:([A-Za-z_][A-Za-z0-9_]*)|(<|>|,))")

_PRIMITIVES_BY_NAME: dict[str, PrimitiveType] = {p.value: p for p in PrimitiveType}

_OPTIONAL_NAMES = frozenset({"Optional", "Option"})

_MAX_TYPE_DEPTH = 32


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    stripped_end = len(text.rstrip())
    while pos < stripped_end:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise TypeSyntaxError(f"Unexpected character {text[pos:].lstrip()[:1]!r} in type '{text}'")
        tokens.append(match.group(1) or match.group(2))
        pos = match.end()
    if not tokens:
        raise TypeSyntaxError("Empty type expression")
    return tokens


class _TypeParser:
    """Recursive-descent parser over the tokens of a single type expression."""

    def __init__(self, tokens: list[str], text: str) -> None:
        self._tokens = tokens
        self._pos = 0
        self._text = text
        self._depth = 0

    def parse_type(self) -> TypeRef:
        name = self._advance()
        if not (name[0].isalpha() or name[0] == "_"):
            raise TypeSyntaxError(f"Expected a type name in '{self._text}', got {name!r}")

        if self._peek() != "<":
            if name in _PRIMITIVES_BY_NAME:
                return PrimitiveTypeRef(primitive=_PRIMITIVES_BY_NAME[name])
            if name in _OPTIONAL_NAMES or name in ("List", "Map"):
                raise TypeSyntaxError(f"'{name}' requires type parameters in '{self._text}'")
            return NamedTypeRef(name=name)

        self._advance()  # consume '<'
        self._depth += 1
        if self._depth > _MAX_TYPE_DEPTH:
            raise TypeSyntaxError(f"Type expression nested more than {_MAX_TYPE_DEPTH} levels deep")
        params = [self.parse_type()]
        while self._peek() == ",":
            self._advance()
            params.append(self.parse_type())
        self._expect(">")
        self._depth -= 1

        if name in _OPTIONAL_NAMES:
            self._check_arity(name, params, 1)
            return OptionalTypeRef(inner_type=params[0])
        if name == "List":
            self._check_arity(name, params, 1)
            return ListTypeRef(element_type=params[0])
        if name == "Map":
            self._check_arity(name, params, 2)
            return MapTypeRef(key_type=params[0], value_type=params[1])
        raise TypeSyntaxError(f"Unknown generic type '{name}' in '{self._text}'")

    def expect_end(self) -> None:
        if self._pos != len(self._tokens):
            raise TypeSyntaxError(f"Unexpected {self._tokens[self._pos]!r} after type in '{self._text}'")

    def _check_arity(self, name: str, params: list[TypeRef], expected: int) -> None:
        if len(params) != expected:
            raise TypeSyntaxError(
                f"'{name}' takes {expected} type parameter(s), got {len(params)} in '{self._text}'"
            )

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _advance(self) -> str:
        token = self._peek()
        if token is None:
            raise TypeSyntaxError(f"Unexpected end of type expression '{self._text}'")
        self._pos += 1
        return token

    def _expect(self, token: str) -> None:
        actual = self._advance()
        if actual != token:
            raise TypeSyntaxError(f"Expected {token!r} in '{self._text}', got {actual!r}")
