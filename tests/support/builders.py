"""Builders for settings, session state and runtime deps used across tests."""

from __future__ import annotations

from pathlib import Path

from relay.state import RuntimeDeps, SessionState
from relay.state.settings import AppSettings, AuthSettings, BrowserSettings, SessionSettings
from relay.session.dispatcher import Dispatcher
from relay.session.lifecycle import LifecycleManager

from .fakes import FakeFactory, FakeConnection


def ready_state() -> tuple[SessionState, FakeConnection]:
    state = SessionState()
    connection = FakeConnection()
    state.begin_connecting(connection)
    state.mark_ready(connection)
    return state, connection


def make_settings(
    tmp_path: Path,
    *,
    secret_key: str = "",
    environment: str = "production",
    init_timeout_s: float = 0.2,
) -> AppSettings:
    return AppSettings(
        auth=AuthSettings(secret_key=secret_key),
        browser=BrowserSettings(
            executable_override=None,
            candidate_paths=(),
            headless=True,
            launch_args=(),
        ),
        session=SessionSettings(
            auth_dir=tmp_path / "auth",
            client_id="test",
            web_url="https://web.whatsapp.com/",
            init_timeout_s=init_timeout_s,
            auth_timeout_s=60.0,
            watch_tick_s=1.0,
            clear_on_auth_failure=False,
            autostart=False,
        ),
        environment=environment,
    )


def make_deps(settings: AppSettings, factory: FakeFactory) -> RuntimeDeps:
    session = SessionState()
    lifecycle = LifecycleManager(state=session, factory=factory)
    return RuntimeDeps(
        settings=settings,
        session=session,
        lifecycle=lifecycle,
        dispatcher=Dispatcher(state=session),
    )


__all__ = ["make_deps", "make_settings", "ready_state"]
