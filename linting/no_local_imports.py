#!/usr/bin/env python
"""Reject imports inside function, method or class bodies in serving code.

The session and HTTP layers keep every import at module scope so import
failures show up at startup rather than on the first request.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TARGET_DIRS = (
    ROOT / "relay" / "runtime",
    ROOT / "relay" / "session",
    ROOT / "relay" / "handlers",
)

_SCOPES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)


def _local_imports(path: Path) -> list[str]:
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []

    rel = path.relative_to(ROOT)
    found: list[str] = []
    for scope in ast.walk(tree):
        if not isinstance(scope, _SCOPES):
            continue
        for node in ast.walk(scope):
            if isinstance(node, (ast.Import, ast.ImportFrom)):
                found.append(f"  {rel}:{node.lineno} local import in `{scope.name}`")
    return sorted(set(found))


def main() -> int:
    violations: list[str] = []
    for base in TARGET_DIRS:
        if not base.is_dir():
            continue
        for py_file in sorted(base.rglob("*.py")):
            violations.extend(_local_imports(py_file))

    if not violations:
        return 0
    print("Local import violations:", file=sys.stderr)
    for v in violations:
        print(v, file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
