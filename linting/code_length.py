#!/usr/bin/env python
"""Cap code lines per module (300) and per function (60) under relay/.

Blank lines, comment-only lines and docstrings are not counted. Barrel
``__init__.py`` files (imports and ``__all__`` only) are exempt from the
module limit.
"""

from __future__ import annotations

import io
import ast
import sys
import tokenize
from pathlib import Path

FILE_LIMIT = 300
FUNCTION_LIMIT = 60

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_DIR = ROOT / "relay"


def _uncounted_lines(source: str, tree: ast.Module) -> set[int]:
    skipped: set[int] = set()
    try:
        for tok in tokenize.generate_tokens(io.StringIO(source).readline):
            if tok.type == tokenize.COMMENT:
                skipped.add(tok.start[0])
    except tokenize.TokenError:
        pass
    for node in ast.walk(tree):
        if not isinstance(node, (ast.Module, ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)):
            continue
        first = node.body[0] if node.body else None
        if isinstance(first, ast.Expr) and isinstance(first.value, ast.Constant) and isinstance(first.value.value, str):
            skipped.update(range(first.lineno, first.end_lineno + 1))
    return skipped


def _count(lines: list[str], start: int, end: int, skipped: set[int]) -> int:
    return sum(1 for no in range(start, end + 1) if no not in skipped and lines[no - 1].strip())


def _is_barrel(path: Path, tree: ast.Module) -> bool:
    if path.name != "__init__.py":
        return False
    for node in tree.body:
        if isinstance(node, (ast.Import, ast.ImportFrom, ast.Pass)):
            continue
        if isinstance(node, ast.Expr) and isinstance(node.value, ast.Constant):
            continue
        if isinstance(node, (ast.Assign, ast.AnnAssign)):
            continue
        return False
    return True


def _check_file(path: Path) -> list[str]:
    try:
        source = path.read_text(encoding="utf-8")
        tree = ast.parse(source)
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []

    rel = path.relative_to(ROOT)
    lines = source.splitlines()
    skipped = _uncounted_lines(source, tree)
    violations: list[str] = []

    if lines and not _is_barrel(path, tree):
        total = _count(lines, 1, len(lines), skipped)
        if total > FILE_LIMIT:
            violations.append(f"  {rel}: {total} code lines (limit {FILE_LIMIT})")

    for node in ast.walk(tree):
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            size = _count(lines, node.lineno, node.end_lineno, skipped)
            if size > FUNCTION_LIMIT:
                violations.append(f"  {rel}:{node.lineno} {node.name} -> {size} code lines (limit {FUNCTION_LIMIT})")
    return violations


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(PACKAGE_DIR.rglob("*.py")):
        violations.extend(_check_file(py_file))

    if violations:
        print("Code length violations:", file=sys.stderr)
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
