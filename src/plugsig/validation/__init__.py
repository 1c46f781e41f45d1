# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Authoring checks for command schemas."""

from plugsig.validation.checks import ValidationResult, ValidationWarning, validate_schema

__all__ = [
    "ValidationResult",
    "ValidationWarning",
    "validate_schema",
]
