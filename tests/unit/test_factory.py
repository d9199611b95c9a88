from __future__ import annotations

from pathlib import Path

import pytest

from relay.errors import RuntimeNotFoundError
from relay.config.browser import BROWSER_CANDIDATE_PATHS, candidate_paths_for
from relay.session.factory import ConnectionFactory, locate_runtime
from relay.session.connection import BrowserConnection

from tests.support.builders import make_settings


def test_candidate_paths_for_platforms() -> None:
    assert candidate_paths_for("linux") == BROWSER_CANDIDATE_PATHS["linux"]
    assert candidate_paths_for("darwin") == BROWSER_CANDIDATE_PATHS["darwin"]
    assert candidate_paths_for("win32") == BROWSER_CANDIDATE_PATHS["win32"]
    assert candidate_paths_for("sunos5") == ()


def test_locate_runtime_prefers_first_existing_candidate(tmp_path: Path) -> None:
    present = tmp_path / "chromium"
    present.write_text("")
    missing = tmp_path / "chrome"

    assert locate_runtime(None, (str(missing), str(present))) == str(present)


def test_locate_runtime_override_must_exist(tmp_path: Path) -> None:
    override = str(tmp_path / "nope")

    with pytest.raises(RuntimeNotFoundError) as exc:
        locate_runtime(override, ("/usr/bin/chromium",), exists=lambda path: path != override)
    assert exc.value.override == override
    assert override in str(exc.value)


def test_locate_runtime_reports_searched_paths() -> None:
    candidates = ("/a/chromium", "/b/chrome")

    with pytest.raises(RuntimeNotFoundError) as exc:
        locate_runtime(None, candidates, exists=lambda _path: False)
    assert exc.value.searched == candidates
    assert "BROWSER_EXECUTABLE_PATH" in str(exc.value)


def test_factory_builds_unstarted_connection(tmp_path: Path) -> None:
    settings = make_settings(tmp_path)
    factory = ConnectionFactory(browser=settings.browser, session=settings.session)

    launch = factory.build_launch_config("/usr/bin/chromium")
    assert launch.executable_path == "/usr/bin/chromium"
    assert launch.headless is True

    connection = factory.create_connection(launch, factory.store_dir)
    assert isinstance(connection, BrowserConnection)
    assert connection.store_dir == tmp_path / "auth" / "session-test"
    assert not connection.store_dir.exists()
