#!/usr/bin/env python3
"""Restrict environment reads to the configuration module."""

from __future__ import annotations

import argparse
import ast
from pathlib import Path

ALLOWED_FILES = {
    "vlist/runtime/config.py",
}


def _is_env_read(node: ast.AST) -> bool:
    # os.getenv(...) / os.environ.get(...)
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Attribute):
        fn = node.func
        if fn.attr == "getenv" and isinstance(fn.value, ast.Name) and fn.value.id == "os":
            return True
        if fn.attr == "get" and _is_os_environ(fn.value):
            return True
    # os.environ[...]
    return isinstance(node, ast.Subscript) and _is_os_environ(node.value)


def _is_os_environ(node: ast.AST) -> bool:
    return (
        isinstance(node, ast.Attribute)
        and node.attr == "environ"
        and isinstance(node.value, ast.Name)
        and node.value.id == "os"
    )


def _check_file(path: Path, rel: str) -> list[str]:
    if rel in ALLOWED_FILES:
        return []
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    return [
        f"{rel}:{node.lineno} env read outside the config module"
        for node in ast.walk(tree)
        if _is_env_read(node)
    ]


def main() -> int:
    parser = argparse.ArgumentParser(description="Check env read placement.")
    parser.add_argument("--root", default="vlist")
    args = parser.parse_args()

    root = Path(args.root)
    violations: list[str] = []
    for path in sorted(root.rglob("*.py")):
        violations.extend(_check_file(path, path.as_posix()))

    if violations:
        print("Env read placement violations:")
        for line in violations:
            print(f"  {line}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
