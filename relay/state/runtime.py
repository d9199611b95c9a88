"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from relay.state.session import SessionState
    from relay.state.settings import AppSettings
    from relay.session.dispatcher import Dispatcher
    from relay.session.lifecycle import LifecycleManager


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    session: SessionState
    lifecycle: LifecycleManager
    dispatcher: Dispatcher

    async def shutdown(self) -> None:
        try:
            await self.lifecycle.shutdown()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
