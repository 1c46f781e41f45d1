# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for single-variant compilation."""

import pytest

from plugsig.compiler.arguments import ArgType, SchemaError, SchemaErrorKind
from plugsig.compiler.binding import NamedValue, OptionalPositional, RequiredPositional, Switch
from plugsig.compiler.variant import VariantCompilation, compile_variant, derive_class_name
from plugsig.model.schema import FieldSpec, Role, VariantSpec
from plugsig.model.signature import ParamDescriptor, ParamRole, SyntaxShape

# ###############
# Test Helpers
# ###############


def _req(name: str, type_text: str = "String", **kwargs: str) -> FieldSpec:
    return FieldSpec(name=name, type=type_text, roles=[Role.REQUIRED], **kwargs)


def _opt(name: str, type_text: str = "Optional<String>", **kwargs: str) -> FieldSpec:
    return FieldSpec(name=name, type=type_text, roles=[Role.OPTIONAL], **kwargs)


def _flag(name: str, type_text: str = "Bool", **kwargs: str) -> FieldSpec:
    return FieldSpec(name=name, type=type_text, roles=[Role.FLAG], **kwargs)


def _compile(*fields: FieldSpec, name: str | None = "cmd", **kwargs: str) -> VariantCompilation:
    return compile_variant(VariantSpec(name=name, fields=list(fields), **kwargs))


def _kinds(errors: list[SchemaError]) -> list[SchemaErrorKind]:
    return [e.kind for e in errors]


def _assert_ok(result: VariantCompilation) -> None:
    assert result.ok, f"Expected no errors but got: {[e.message for e in result.errors]}"


# ###############
# Valid variants
# ###############


class TestTutorExample:
    def test_signature(self) -> None:
        result = _compile(
            _req("card_name"),
            _flag("fuzzy", usage="Fuzzy match on the card name."),
            name="tutor",
        )
        _assert_ok(result)
        assert result.signature is not None
        assert result.signature.name == "tutor"
        assert result.signature.params == (
            ParamDescriptor(name="card_name", shape=SyntaxShape.STRING, role=ParamRole.REQUIRED_POSITIONAL),
            ParamDescriptor(
                name="fuzzy",
                shape=SyntaxShape.BOOLEAN,
                role=ParamRole.SWITCH,
                usage="Fuzzy match on the card name.",
            ),
        )

    def test_binding_fragments(self) -> None:
        result = _compile(_req("card_name"), _flag("fuzzy"), name="tutor")
        assert result.binding is not None
        assert result.binding.readers == (
            RequiredPositional(field="card_name", index=0, arg_type=ArgType.STRING),
            Switch(field="fuzzy"),
        )


class TestParameterShapes:
    def test_all_roles_in_order(self) -> None:
        result = _compile(
            _req("a"),
            _req("b", "Bool"),
            _opt("c"),
            _flag("d"),
            _flag("e", "Optional<String>", short="e"),
            _opt("f", "Optional<Bool>"),
        )
        _assert_ok(result)
        assert result.signature is not None and result.binding is not None
        assert [(p.name, p.role, p.shape) for p in result.signature.params] == [
            ("a", ParamRole.REQUIRED_POSITIONAL, SyntaxShape.STRING),
            ("b", ParamRole.REQUIRED_POSITIONAL, SyntaxShape.BOOLEAN),
            ("c", ParamRole.OPTIONAL_POSITIONAL, SyntaxShape.STRING),
            ("d", ParamRole.SWITCH, SyntaxShape.BOOLEAN),
            ("e", ParamRole.NAMED, SyntaxShape.STRING),
            ("f", ParamRole.OPTIONAL_POSITIONAL, SyntaxShape.BOOLEAN),
        ]
        assert result.signature.params[4].short == "e"

    def test_flags_do_not_consume_positional_indices(self) -> None:
        result = _compile(_req("a"), _flag("d"), _opt("c"), _flag("e", "Optional<Bool>"), _opt("f"))
        assert result.binding is not None
        assert result.binding.readers == (
            RequiredPositional(field="a", index=0, arg_type=ArgType.STRING),
            Switch(field="d"),
            OptionalPositional(field="c", index=1, arg_type=ArgType.STRING),
            NamedValue(field="e", arg_type=ArgType.BOOL),
            OptionalPositional(field="f", index=2, arg_type=ArgType.STRING),
        )

    def test_usage_is_carried_over(self) -> None:
        result = _compile(_req("name", usage="Name of the card."), usage="Searches for cards.")
        assert result.signature is not None
        assert result.signature.usage == "Searches for cards."
        assert result.signature.params[0].usage == "Name of the card."

    def test_missing_usage_is_empty_string(self) -> None:
        result = _compile(_req("name"))
        assert result.signature is not None
        assert result.signature.usage == ""
        assert result.signature.params[0].usage == ""

    def test_variant_without_fields(self) -> None:
        result = _compile(name="syn note info")
        _assert_ok(result)
        assert result.signature is not None
        assert result.signature.params == ()

    def test_name_is_stripped(self) -> None:
        result = _compile(_req("x"), name="  mtg tutor ")
        assert result.signature is not None
        assert result.signature.name == "mtg tutor"


class TestCommandModel:
    def test_class_name_from_variant(self) -> None:
        result = _compile(_req("card_name"), name="mtg tutor", variant="Tutor")
        assert result.binding is not None
        assert result.binding.model.__name__ == "Tutor"

    def test_class_name_derived_from_command(self) -> None:
        result = _compile(_req("card_name"), name="mtg tutor")
        assert result.binding is not None
        assert result.binding.model.__name__ == "MtgTutor"
        assert result.binding.model.command_name == "mtg tutor"

    def test_model_fields_follow_roles(self) -> None:
        result = _compile(_req("a"), _opt("b"), _flag("c"), _flag("d", "Optional<String>"))
        assert result.binding is not None
        model = result.binding.model
        assert model(a="x") == model(a="x", b=None, c=False, d=None)
        assert model.model_fields["a"].is_required()
        assert not model.model_fields["c"].is_required()

    def test_usage_becomes_docstring(self) -> None:
        result = _compile(_req("a"), usage="Does things.")
        assert result.binding is not None
        assert result.binding.model.__doc__ == "Does things."

    @pytest.mark.parametrize(
        ("command", "expected"),
        [
            ("mtg tutor", "MtgTutor"),
            ("syn note get", "SynNoteGet"),
            ("note-list", "NoteList"),
            ("x", "X"),
            ("2fa", "Command2fa"),
            ("!!", "Command"),
        ],
    )
    def test_derive_class_name(self, command: str, expected: str) -> None:
        assert derive_class_name(command) == expected


# ###############
# Ordering
# ###############


class TestOrdering:
    def test_required_after_optional_names_field(self) -> None:
        result = _compile(_opt("name"), _req("id"))
        assert _kinds(result.errors) == [SchemaErrorKind.ORDERING]
        assert result.errors[0].field == "id"
        assert "'id'" in result.errors[0].message
        assert result.signature is None
        assert result.binding is None

    def test_required_after_flag(self) -> None:
        result = _compile(_flag("fuzzy"), _req("card_name"))
        assert _kinds(result.errors) == [SchemaErrorKind.ORDERING]
        assert result.errors[0].field == "card_name"

    def test_all_ordering_violations_reported(self) -> None:
        result = _compile(_req("a"), _flag("b"), _req("c"), _opt("d"), _req("e"))
        assert _kinds(result.errors) == [SchemaErrorKind.ORDERING, SchemaErrorKind.ORDERING]
        assert [e.field for e in result.errors] == ["c", "e"]

    def test_invalid_field_does_not_start_the_non_required_tail(self) -> None:
        """A field that fails classification is reported on its own and ignored for ordering."""
        result = _compile(_opt("a", "Optional<Int>"), _req("b"))
        assert _kinds(result.errors) == [SchemaErrorKind.UNSUPPORTED_TYPE]


# ###############
# Other schema errors
# ###############


class TestSchemaErrors:
    def test_missing_name(self) -> None:
        result = _compile(_req("a"), name=None)
        assert _kinds(result.errors) == [SchemaErrorKind.MISSING_COMMAND_NAME]
        assert result.name is None

    def test_blank_name(self) -> None:
        result = compile_variant(VariantSpec(name="   "), position=3)
        assert _kinds(result.errors) == [SchemaErrorKind.MISSING_COMMAND_NAME]
        assert "#3" in result.errors[0].message

    def test_errors_from_several_fields_are_collected(self) -> None:
        result = _compile(
            FieldSpec(name="a", type="String"),
            _req("b", "Int"),
            _opt("c", "String"),
            _flag("d", "String"),
        )
        assert _kinds(result.errors) == [
            SchemaErrorKind.MISSING_ROLE,
            SchemaErrorKind.UNSUPPORTED_TYPE,
            SchemaErrorKind.ROLE_TYPE_MISMATCH,
            SchemaErrorKind.ROLE_TYPE_MISMATCH,
        ]

    def test_duplicate_field_reported_once(self) -> None:
        result = _compile(_req("a"), _flag("a"), _flag("a", "Optional<String>"))
        assert _kinds(result.errors) == [SchemaErrorKind.DUPLICATE_FIELD]

    @pytest.mark.parametrize("name", ["card-name", "1st", "class", "_hidden", "with space"])
    def test_invalid_field_names(self, name: str) -> None:
        result = _compile(_req(name))
        assert SchemaErrorKind.INVALID_FIELD_NAME in _kinds(result.errors)

    @pytest.mark.parametrize("name", ["model_config", "model_dump", "json", "copy", "command_name"])
    def test_reserved_field_names(self, name: str) -> None:
        result = _compile(_req(name))
        assert _kinds(result.errors) == [SchemaErrorKind.INVALID_FIELD_NAME]
        assert "reserved" in result.errors[0].message

    def test_invalid_variant_class_name(self) -> None:
        result = _compile(_req("a"), variant="mtg tutor")
        assert _kinds(result.errors) == [SchemaErrorKind.INVALID_CLASS_NAME]


class TestShortFlags:
    def test_short_on_positional_is_error(self) -> None:
        result = _compile(_req("a", short="a"))
        assert _kinds(result.errors) == [SchemaErrorKind.INVALID_SHORT_FLAG]

    @pytest.mark.parametrize("short", ["", "ab", "-", "é", "a\n"])
    def test_short_must_be_one_letter_or_digit(self, short: str) -> None:
        result = _compile(_flag("fuzzy", short=short))
        assert _kinds(result.errors) == [SchemaErrorKind.INVALID_SHORT_FLAG]

    def test_duplicate_short(self) -> None:
        result = _compile(_flag("fuzzy", short="f"), _flag("force", short="f"))
        assert _kinds(result.errors) == [SchemaErrorKind.INVALID_SHORT_FLAG]
        assert result.errors[0].field == "force"
