"""Connection factory: locate Chromium, build launch config, construct connections."""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Callable

from relay.errors import RuntimeNotFoundError
from relay.state.launch import LaunchConfig
from relay.state.settings import BrowserSettings, SessionSettings

from .connection import BrowserConnection
from .protocols import Connection

logger = logging.getLogger(__name__)

PathExists = Callable[[str], bool]


def _path_exists(path: str) -> bool:
    return Path(path).exists()


def locate_runtime(
    override: str | None,
    candidates: tuple[str, ...],
    *,
    exists: PathExists = _path_exists,
) -> str:
    if override:
        if not exists(override):
            raise RuntimeNotFoundError(searched=(override,), override=override)
        return override

    for path in candidates:
        if exists(path):
            return path
    raise RuntimeNotFoundError(searched=tuple(candidates))


class ConnectionFactory:
    def __init__(
        self,
        *,
        browser: BrowserSettings,
        session: SessionSettings,
        exists: PathExists = _path_exists,
    ) -> None:
        self._browser = browser
        self._session = session
        self._exists = exists

    @property
    def store_dir(self) -> Path:
        return self._session.store_dir

    def locate_runtime(self) -> str:
        path = locate_runtime(
            self._browser.executable_override,
            self._browser.candidate_paths,
            exists=self._exists,
        )
        logger.info("factory: chromium executable verified at %s", path)
        return path

    def build_launch_config(self, executable_path: str) -> LaunchConfig:
        return LaunchConfig(
            executable_path=executable_path,
            headless=self._browser.headless,
            args=tuple(self._browser.launch_args),
        )

    def create_connection(self, launch: LaunchConfig, store_dir: Path) -> Connection:
        logger.info("factory: new connection (store=%s)", store_dir)
        return BrowserConnection(
            launch=launch,
            store_dir=store_dir,
            web_url=self._session.web_url,
            auth_timeout_s=self._session.auth_timeout_s,
            watch_tick_s=self._session.watch_tick_s,
        )


__all__ = ["ConnectionFactory", "locate_runtime"]
