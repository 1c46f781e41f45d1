#!/usr/bin/env python3
# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, example schemas, and build.

Usage::

    tools/ci.py                 # run every step
    tools/ci.py --fail-fast     # stop at the first failing step
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=plugsig", "--cov-report=term-missing"]),
    ("Example schemas", ["uv", "run", "plugsig", "check", "tests/data/schemas/valid"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run the CI steps and print a summary; return the process exit code."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--fail-fast", action="store_true", help="Stop after the first failing step")
    args = parser.parse_args()

    results: list[tuple[str, bool, float]] = []
    for name, cmd in STEPS:
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_REPO_ROOT)
        passed = proc.returncode == 0
        results.append((name, passed, time.monotonic() - start))
        if args.fail_fast and not passed:
            break

    _banner("Summary")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    skipped = len(STEPS) - len(results)
    if skipped:
        print(chalk.yellow(f"  {skipped} step(s) skipped"))
    print()
    return 0 if all(passed for _, passed, _ in results) and not skipped else 1


# ################
# Implementation
# ################

_REPO_ROOT = Path(__file__).resolve().parent.parent


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}\n{chalk.blue(title)}\n{sep}")


if __name__ == "__main__":
    sys.exit(main())
