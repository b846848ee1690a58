#!/usr/bin/env python3
# Copyright 2026 DRec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the DRec checks locally: format, lint, type check, tests, and build.

Pass step names to run a subset, e.g. ``tools/ci.py lint tests``.
"""

import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "types": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=drec", "--cov-report=term-missing"],
    "build": ["uv", "build"],
}


def main(argv: list[str]) -> int:
    """Run the selected steps (all by default) and print a summary."""
    unknown = [name for name in argv if name not in STEPS]
    if unknown:
        print(chalk.red(f"Unknown step(s): {', '.join(unknown)}; choose from {', '.join(STEPS)}"))
        return 2

    results = [_run_step(name, STEPS[name]) for name in argv or STEPS]
    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(f"{name}: {' '.join(cmd[2:] if cmd[:2] == ['uv', 'run'] else cmd)}"))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=pathlib.Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for name, passed, elapsed in results:
        paint = chalk.green if passed else chalk.red
        print(paint(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
