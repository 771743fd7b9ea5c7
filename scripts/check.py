#!/usr/bin/env python3
"""Cross-platform composite quality checks for local and CI use."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path


def _run_checked(*, label: str, command: list[str], env: dict[str, str]) -> None:
    print(label, flush=True)
    completed = subprocess.run(command, env=env, check=False)
    if completed.returncode != 0:
        raise SystemExit(f"{label} failed with exit code {completed.returncode}.")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run repository quality checks.")
    parser.add_argument("--skip-lint-format-typecheck", action="store_true")
    parser.add_argument("--skip-policy-checks", action="store_true")
    parser.add_argument("--skip-tests", action="store_true")
    args = parser.parse_args()

    root = Path(__file__).resolve().parent.parent
    os.chdir(root)

    env = os.environ.copy()
    env["PYTHONPATH"] = "."
    env.setdefault("QT_QPA_PLATFORM", "offscreen")

    if not args.skip_lint_format_typecheck:
        _run_checked(label="Running ruff...", command=["uv", "run", "ruff", "check", "vlist", "tests"], env=env)
        _run_checked(label="Running mypy...", command=["uv", "run", "mypy"], env=env)

    if not args.skip_policy_checks:
        _run_checked(
            label="Checking env read placement...",
            command=[sys.executable, "scripts/check_env_read_placement.py", "--root", "vlist"],
            env=env,
        )

    if not args.skip_tests:
        _run_checked(
            label="Running vlist tests with coverage gate...",
            command=[
                "uv",
                "run",
                "pytest",
                "tests/vlist",
                "--cov=vlist",
                "--cov-report=term-missing",
                "--cov-fail-under=85",
            ],
            env=env,
        )

    print("All selected checks passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
