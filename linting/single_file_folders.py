#!/usr/bin/env python
"""Reject folders that only wrap a single file or a single subfolder.

``__init__.py`` and cache directories do not count as children. The top-level
roots themselves (relay/, tests/, linting/) are not checked.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

CHECK_ROOTS = ("relay", "tests", "linting")
IGNORE_FILES = {"__init__.py"}
IGNORE_DIR_PREFIXES = ("__pycache__", ".")


def _ignored_dir(name: str) -> bool:
    return name.startswith(IGNORE_DIR_PREFIXES)


def _folder_violation(folder: Path) -> str | None:
    files = [p.name for p in folder.iterdir() if p.is_file() and p.suffix == ".py" and p.name not in IGNORE_FILES]
    dirs = [p.name for p in folder.iterdir() if p.is_dir() and not _ignored_dir(p.name)]
    rel = folder.relative_to(ROOT)
    total = len(files) + len(dirs)
    if total == 0:
        return f"  {rel}/ has no substantive children - flatten/remove the folder"
    if total > 1:
        return None
    if files:
        return f"  {rel}/ has only {files[0]} - flatten to {rel}.py"
    return f"  {rel}/ only wraps {dirs[0]}/ - flatten/remove the wrapper folder"


def _walk(folder: Path) -> list[Path]:
    found: list[Path] = []
    for child in sorted(folder.iterdir()):
        if child.is_dir() and not _ignored_dir(child.name):
            found.append(child)
            found.extend(_walk(child))
    return found


def main() -> int:
    violations: list[str] = []
    for root_name in CHECK_ROOTS:
        root_dir = ROOT / root_name
        if not root_dir.is_dir():
            continue
        for folder in _walk(root_dir):
            violation = _folder_violation(folder)
            if violation:
                violations.append(violation)

    if violations:
        print("Single-file folder violations:", file=sys.stderr)
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
