#!/usr/bin/env python
"""Require snake_case module names under relay/, tests/ and linting/."""

from __future__ import annotations

import re
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

CHECK_ROOTS = ("relay", "tests", "linting")
ALLOWED = {"__init__.py", "__main__.py"}
SNAKE_CASE = re.compile(r"^[a-z][a-z0-9_]*\.py$")


def main() -> int:
    violations: list[str] = []
    for root_name in CHECK_ROOTS:
        root_dir = ROOT / root_name
        if not root_dir.is_dir():
            continue
        for py_file in sorted(root_dir.rglob("*.py")):
            if "__pycache__" in py_file.parts or py_file.name in ALLOWED:
                continue
            if not SNAKE_CASE.match(py_file.name):
                violations.append(f"  {py_file.relative_to(ROOT)} (expected snake_case .py filename)")

    if violations:
        print("File naming violations:", file=sys.stderr)
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
