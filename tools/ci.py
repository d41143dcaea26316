#!/usr/bin/env python3
# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the fbpgraph checks locally: format, lint, type check, tests, and build."""

import argparse
import subprocess
import sys
import time
from pathlib import Path
from typing import NamedTuple

from yachalk import chalk

# ###############
# Public Interface
# ###############


class Step(NamedTuple):
    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("types", "Type check", ["uv", "run", "ty", "check", "src/"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=fbpgraph", "--cov-report=term-missing"]),
    Step("build", "Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps and print a summary.

    Returns:
        0 if every step that ran passed, 1 otherwise.
    """
    parser = argparse.ArgumentParser(description="Run the fbpgraph CI checks locally.")
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        choices=[step.key for step in STEPS],
        help="Skip a step (may be given more than once)",
    )
    args = parser.parse_args(argv)

    results: list[tuple[str, bool, float]] = []
    for step in STEPS:
        if step.key in args.skip:
            continue
        _banner(step.title)
        start = time.monotonic()
        proc = subprocess.run(step.command, cwd=_repo_root())
        results.append((step.title, proc.returncode == 0, time.monotonic() - start))

    _banner("  Summary")
    for title, passed, elapsed in results:
        paint = chalk.green if passed else chalk.red
        print(paint(f"  {'PASS' if passed else 'FAIL'}  {title} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    sys.exit(main())
