# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Authoring checks for command schemas.

These checks never block compilation. They flag schemas that compile but
will read poorly in the host's help output, or that lean on the role
precedence rule instead of tagging each field once.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from plugsig.compiler.arguments import effective_role
from plugsig.model.schema import CommandSchema, VariantSpec

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal authoring issue.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running authoring checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)


def validate_schema(schema: CommandSchema) -> ValidationResult:
    """Run all authoring checks on a command schema.

    Checks performed:

    1. **Undocumented commands**: a command without ``usage`` shows up in the
       host's help without a description.

    2. **Undocumented parameters**: same, for individual fields.

    3. **Multiple role tags**: a field tagged with more than one role is
       classified by precedence (required > optional > flag). The warning
       names the role that won.

    Args:
        schema: The command schema to check. It does not need to compile.

    Returns:
        A :class:`ValidationResult` with the warnings found.
    """
    result = ValidationResult()
    for position, variant in enumerate(schema.commands):
        result.warnings.extend(_check_variant(variant, position))
    return result


# ################
# Implementation
# ################


def _check_variant(variant: VariantSpec, position: int) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    ctx = f"command '{variant.name}'" if variant.name else f"command #{position}"

    if not variant.usage:
        warnings.append(ValidationWarning(f"{ctx} has no usage text"))

    for field_spec in variant.fields:
        if not field_spec.usage:
            warnings.append(ValidationWarning(f"{ctx}: parameter '{field_spec.name}' has no usage text"))

        distinct = list(dict.fromkeys(field_spec.roles))
        winner = effective_role(distinct)
        if len(distinct) > 1 and winner is not None:
            tags = ", ".join(r.value for r in distinct)
            warnings.append(
                ValidationWarning(
                    f"{ctx}: field '{field_spec.name}' has several role tags ({tags}); treated as {winner.value}"
                )
            )

    return warnings
