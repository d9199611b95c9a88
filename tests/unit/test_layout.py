"""Repository layout policies from linting/ hold for the current tree."""

from __future__ import annotations

import pytest

from linting import all_at_bottom, code_length, file_names, no_local_imports, one_class_per_file, single_file_folders


@pytest.mark.parametrize(
    "check",
    [
        one_class_per_file.main,
        single_file_folders.main,
        code_length.main,
        no_local_imports.main,
        file_names.main,
    ],
    ids=["one_class_per_file", "single_file_folders", "code_length", "no_local_imports", "file_names"],
)
def test_layout_policy_passes(check) -> None:
    assert check() == 0


def test_all_is_last_statement() -> None:
    assert all_at_bottom.main([]) == 0


def test_single_file_folder_is_reported(tmp_path, monkeypatch) -> None:
    wrapper = tmp_path / "relay" / "handlers" / "http"
    wrapper.mkdir(parents=True)
    (wrapper / "routes.py").write_text("")
    (wrapper / "__init__.py").write_text("")
    monkeypatch.setattr(single_file_folders, "ROOT", tmp_path)

    assert single_file_folders.main() == 1


def test_two_plain_classes_are_reported(tmp_path, monkeypatch) -> None:
    package = tmp_path / "relay"
    package.mkdir()
    (package / "events.py").write_text(
        "from dataclasses import dataclass\n\n"
        "class A:\n    pass\n\n"
        "class B:\n    pass\n\n"
        "@dataclass\nclass C:\n    x: int\n"
    )
    monkeypatch.setattr(one_class_per_file, "ROOT", tmp_path)
    monkeypatch.setattr(one_class_per_file, "PACKAGE_DIR", package)

    assert one_class_per_file.main() == 1
