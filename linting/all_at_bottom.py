#!/usr/bin/env python
"""Require ``__all__`` to be a single top-level assignment placed last in its module.

Modules without ``__all__`` are skipped. Mutations (``+=``, ``.append``,
``.extend``) are rejected.
"""

from __future__ import annotations

import ast
import sys
import argparse
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DIRS = ("relay", "tests")


def _is_all(node: ast.AST) -> bool:
    return isinstance(node, ast.Name) and node.id == "__all__"


def _defines_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return len(node.targets) == 1 and _is_all(node.targets[0])
    if isinstance(node, ast.AnnAssign):
        return _is_all(node.target) and node.value is not None
    return False


def _mutates_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.AugAssign):
        return _is_all(node.target)
    if isinstance(node, ast.Assign):
        return any(_is_all(t) for t in node.targets) and not _defines_all(node)
    if isinstance(node, ast.Expr) and isinstance(node.value, ast.Call):
        func = node.value.func
        return isinstance(func, ast.Attribute) and _is_all(func.value)
    return False


def _check_file(path: Path) -> list[str]:
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []

    rel = path.relative_to(ROOT)
    definitions = [idx for idx, node in enumerate(tree.body) if _defines_all(node)]
    violations = [
        f"  {rel}:{node.lineno} `__all__` must not be mutated" for node in tree.body if _mutates_all(node)
    ]
    if not definitions:
        return violations
    if len(definitions) > 1:
        violations.append(f"  {rel}: `__all__` assigned {len(definitions)} times")
        return violations
    for node in tree.body[definitions[0] + 1 :]:
        violations.append(f"  {rel}:{node.lineno} {type(node).__name__} after `__all__`")
    return violations


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check that __all__ is defined once, at the bottom.")
    parser.add_argument("--dirs", nargs="+", default=list(DEFAULT_DIRS))
    args = parser.parse_args(argv)

    violations: list[str] = []
    for name in args.dirs:
        scan_dir = ROOT / name
        if not scan_dir.is_dir():
            continue
        for py_file in sorted(scan_dir.rglob("*.py")):
            if "__pycache__" in py_file.parts:
                continue
            violations.extend(_check_file(py_file))

    if violations:
        print("__all__ placement violations:", file=sys.stderr)
        for violation in violations:
            print(violation, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
