# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for plugsig."""
