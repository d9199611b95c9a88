"""Runtime dependency construction (session state + lifecycle + dispatch)."""

from __future__ import annotations

import logging

from relay.state import RuntimeDeps
from relay.state.session import SessionState
from relay.state.settings import AppSettings
from relay.session.factory import ConnectionFactory
from relay.session.dispatcher import Dispatcher
from relay.session.lifecycle import LifecycleManager

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    session = SessionState()
    factory = ConnectionFactory(browser=settings.browser, session=settings.session)
    lifecycle = LifecycleManager(
        state=session,
        factory=factory,
        clear_on_auth_failure=settings.session.clear_on_auth_failure,
    )
    dispatcher = Dispatcher(state=session)

    logger.info(
        "runtime: session store=%s secret_key_required=%s",
        settings.session.store_dir,
        bool(settings.auth.secret_key),
    )
    return RuntimeDeps(
        settings=settings,
        session=session,
        lifecycle=lifecycle,
        dispatcher=dispatcher,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
