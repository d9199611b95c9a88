#!/usr/bin/env python
"""Allow at most one top-level non-dataclass class per module under relay/."""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_DIR = ROOT / "relay"


def _decorator_name(decorator: ast.expr) -> str | None:
    target = decorator.func if isinstance(decorator, ast.Call) else decorator
    if isinstance(target, ast.Name):
        return target.id
    if isinstance(target, ast.Attribute):
        return target.attr
    return None


def _plain_classes(path: Path) -> list[str]:
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []
    names: list[str] = []
    for node in tree.body:
        if not isinstance(node, ast.ClassDef):
            continue
        if any(_decorator_name(d) == "dataclass" for d in node.decorator_list):
            continue
        names.append(node.name)
    return names


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(PACKAGE_DIR.rglob("*.py")):
        names = _plain_classes(py_file)
        if len(names) > 1:
            violations.append(f"  {py_file.relative_to(ROOT)}: {len(names)} classes ({', '.join(names)})")

    if violations:
        print("One non-dataclass-class-per-file violations:", file=sys.stderr)
        for violation in violations:
            print(violation, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
