"""Session lifecycle: build, start and supervise the single messaging connection."""

from __future__ import annotations

import shutil
import asyncio
import logging
import threading
import contextlib
from typing import Any
from functools import partial
from collections.abc import Callable

from relay.state.phase import SessionPhase
from relay.state.events import ConnectionEvent
from relay.state.session import SessionState, SessionSnapshot

from .builder import ConnectionBuilder
from .protocols import Connection

logger = logging.getLogger(__name__)

PairingHandler = Callable[[str], None]


def log_pairing_code(code: str) -> None:
    logger.warning("session: pairing required; scan the code from the WhatsApp app (Linked devices)")
    logger.warning("session: pairing code: %s", code)


class LifecycleManager:
    """Owns every write to ``SessionState``.

    At most one initialization attempt is in flight: the check of the state,
    the factory call and the publication of the new connection happen under
    one mutex with no suspension point in between. Readiness is reached
    out-of-band through connection events; callers poll ``is_ready()``.
    """

    def __init__(
        self,
        *,
        state: SessionState,
        factory: ConnectionBuilder,
        on_pairing: PairingHandler | None = None,
        clear_on_auth_failure: bool = False,
    ) -> None:
        self._state = state
        self._factory = factory
        self._on_pairing = on_pairing or log_pairing_code
        self._clear_on_auth_failure = bool(clear_on_auth_failure)
        self._attempt_lock = threading.Lock()
        self._background: set[asyncio.Task] = set()
        self._retiring: set[asyncio.Task] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    def snapshot(self) -> SessionSnapshot:
        return self._state.snapshot()

    def is_ready(self) -> bool:
        snap = self._state.snapshot()
        return snap.ready and snap.connection is not None

    def get_connection(self) -> Connection | None:
        return self._state.connection

    async def ensure_ready(self) -> Connection | None:
        snap = self._state.snapshot()
        if snap.ready and snap.connection is not None:
            logger.debug("session: already ready")
            return snap.connection
        if snap.connecting:
            logger.info("session: initialization already in progress")
            return None

        # The previous connection must release the credential store first.
        if self._retiring:
            await asyncio.gather(*list(self._retiring), return_exceptions=True)

        try:
            connection = self._begin_attempt()
        except Exception:
            logger.exception("session: failed to build connection")
            raise
        if connection is None:
            return None

        try:
            await connection.start()
        except BaseException as exc:
            if isinstance(exc, Exception):
                logger.exception("session: failed to start connection")
            else:
                logger.info("session: connection start interrupted")
            self._state.abort(connection)
            await self._close_quietly(connection)
            raise

        logger.info("session: connection started; waiting for ready event")
        return None

    def start_background(self) -> asyncio.Task:
        """Run ``ensure_ready`` without waiting; failures are logged, not raised."""
        task = asyncio.create_task(self.ensure_ready())
        self._background.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    async def initialize(self, *, timeout_s: float) -> bool:
        """Start an attempt and wait up to *timeout_s* for it.

        Timing out only stops waiting: the attempt keeps running in the
        background. Errors raised by the attempt propagate to the caller.
        """
        if self.is_ready():
            return True
        task = self.start_background()
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout_s)
        except TimeoutError:
            logger.info("session: initialization still in progress after %.1fs", timeout_s)
            return False
        return self.is_ready()

    async def shutdown(self) -> None:
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

        snap = self._state.snapshot()
        if snap.connection is not None:
            self._state.mark_down(snap.connection, SessionPhase.DISCONNECTED)
            await self._close_quietly(snap.connection)
        if self._retiring:
            await asyncio.gather(*list(self._retiring), return_exceptions=True)
        logger.info("session: shut down")

    def _begin_attempt(self) -> Connection | None:
        with self._attempt_lock:
            snap = self._state.snapshot()
            if snap.connecting or (snap.ready and snap.connection is not None):
                return None

            store_dir = self._factory.store_dir
            logger.info("session: initializing (store=%s, resumable=%s)", store_dir, store_dir.exists())
            executable_path = self._factory.locate_runtime()
            launch = self._factory.build_launch_config(executable_path)
            connection = self._factory.create_connection(launch, store_dir)
            self._subscribe(connection)
            if not self._state.begin_connecting(connection):
                return None
            return connection

    def _subscribe(self, connection: Connection) -> None:
        connection.on(ConnectionEvent.PAIRING, partial(self._handle_pairing, connection))
        connection.on(ConnectionEvent.AUTHENTICATED, partial(self._handle_authenticated, connection))
        connection.on(ConnectionEvent.LOADING, partial(self._handle_loading, connection))
        connection.on(ConnectionEvent.READY, partial(self._handle_ready, connection))
        connection.on(ConnectionEvent.AUTH_FAILURE, partial(self._handle_auth_failure, connection))
        connection.on(ConnectionEvent.DISCONNECTED, partial(self._handle_disconnected, connection))

    def _is_current(self, connection: Connection) -> bool:
        return self._state.connection is connection

    def _handle_pairing(self, connection: Connection, code: str) -> None:
        if not self._is_current(connection):
            return
        self._on_pairing(code)

    def _handle_authenticated(self, connection: Connection) -> None:
        if self._is_current(connection):
            logger.info("session: authenticated")

    def _handle_loading(self, connection: Connection, percent: Any = None, message: Any = None) -> None:
        if self._is_current(connection):
            logger.info("session: loading %s%% %s", percent, message or "")

    def _handle_ready(self, connection: Connection) -> None:
        if self._state.mark_ready(connection):
            logger.info("session: ready")
        else:
            logger.debug("session: ignoring ready from a replaced connection")

    def _handle_auth_failure(self, connection: Connection, reason: Any = None) -> None:
        if not self._state.mark_down(connection, SessionPhase.AUTH_FAILED):
            return
        logger.error("session: authentication failure: %s", reason)
        self._retire(connection, wipe_store=self._clear_on_auth_failure)

    def _handle_disconnected(self, connection: Connection, reason: Any = None) -> None:
        if not self._state.mark_down(connection, SessionPhase.DISCONNECTED):
            return
        logger.warning("session: disconnected: %s", reason)
        self._retire(connection, wipe_store=False)

    def _retire(self, connection: Connection, *, wipe_store: bool) -> None:
        task = asyncio.get_running_loop().create_task(self._close_and_cleanup(connection, wipe_store=wipe_store))
        self._retiring.add(task)
        task.add_done_callback(self._retiring.discard)

    async def _close_and_cleanup(self, connection: Connection, *, wipe_store: bool) -> None:
        await self._close_quietly(connection)
        if wipe_store:
            store_dir = self._factory.store_dir
            logger.warning("session: discarding credential store %s", store_dir)
            await asyncio.to_thread(shutil.rmtree, store_dir, True)

    async def _close_quietly(self, connection: Connection) -> None:
        with contextlib.suppress(Exception):
            await connection.close()

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("session: background initialization failed: %s", exc)


__all__ = ["LifecycleManager", "PairingHandler", "log_pairing_code"]
