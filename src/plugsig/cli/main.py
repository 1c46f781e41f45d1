# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the plugsig command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from plugsig.compiler.artifact import serialize, write_artifact
from plugsig.compiler.build import CompilerError, check_schema, compile_schema
from plugsig.schemafile.loader import SCHEMA_FILE_SUFFIXES, SchemaFileError, load_schema
from plugsig.validation.checks import validate_schema

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the plugsig CLI."""
    parser = argparse.ArgumentParser(
        prog="plugsig",
        description="plugsig: compile plugin command schemas into host signatures",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check command schema files for errors",
        description="Compile and lint command schema files, reporting every error and warning.",
    )
    check_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Schema file, or directory searched for *.yaml / *.yml files (default: current directory)",
    )

    # signatures subcommand
    signatures_parser = subparsers.add_parser(
        "signatures",
        help="Emit the signature artifact of a schema file",
        description="Compile a command schema file and write its signature list as JSON.",
    )
    signatures_parser.add_argument(
        "schema",
        help="Schema file to compile",
    )
    signatures_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the artifact to this file instead of standard output",
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "signatures":
        return _cmd_signatures(args)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    path = Path(args.path).resolve()

    if not path.exists():
        print(f"Error: '{path}' does not exist.", file=sys.stderr)
        return 1

    if path.is_dir():
        schema_files = sorted(f for f in path.rglob("*") if f.is_file() and f.suffix in SCHEMA_FILE_SUFFIXES)
    else:
        schema_files = [path]

    if not schema_files:
        print("No schema files found.")
        return 0

    print(f"Checking {len(schema_files)} schema file(s)...")
    has_errors = False
    for schema_file in schema_files:
        try:
            schema = load_schema(schema_file)
        except SchemaFileError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            has_errors = True
            continue

        for warning in validate_schema(schema).warnings:
            print(f"Warning: {schema_file.name}: {warning.message}")
        for error in check_schema(schema):
            print(f"Error: {schema_file.name}: {error.message}", file=sys.stderr)
            has_errors = True

    if has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_signatures(args: argparse.Namespace) -> int:
    """Handle the signatures subcommand."""
    schema_file = Path(args.schema).resolve()

    try:
        schema = load_schema(schema_file)
    except SchemaFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        compiled = compile_schema(schema)
    except CompilerError as exc:
        for error in exc.errors:
            print(f"Error: {error.message}", file=sys.stderr)
        return 1

    if args.output is None:
        print(serialize(compiled.signatures))
        return 0

    output = Path(args.output)
    try:
        write_artifact(compiled.signatures, output)
    except OSError as exc:
        print(f"Error: cannot write '{output}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {len(compiled.signatures)} signature(s) to '{output}'.")
    return 0
