"""WhatsApp Web connection driven through a persistent Playwright Chromium context."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from pathlib import Path

from playwright.async_api import Page, Playwright, BrowserContext, async_playwright

from relay.state.launch import LaunchConfig
from relay.errors import ConnectionClosedError
from relay.state.events import ConnectionEvent
from relay.state.dispatch import RecipientIdentity

from .events import EventHandler, ConnectionEvents
from .scripts import RESOLVE_SCRIPT, SEND_TEXT_SCRIPT, LOGIN_STATE_SCRIPT, IS_REGISTERED_SCRIPT

logger = logging.getLogger(__name__)

REASON_LOGOUT = "LOGOUT"
REASON_BROWSER_CLOSED = "browser closed"
REASON_AUTH_TIMEOUT = "auth timeout"
REASON_READY_TIMEOUT = "ready timeout"


class BrowserConnection:
    """One Chromium profile (the credential store) hosting one WhatsApp Web page.

    ``start()`` launches the browser and opens the page; a background watch loop
    then turns page state into lifecycle events: ``pairing`` whenever a new QR
    payload is shown, ``authenticated`` once the chat list renders, ``ready``
    once the page's module registry is usable. Losing the page or seeing a
    pairing code again after ``ready`` is reported as ``disconnected``; neither
    a pairing code nor the chat list within ``auth_timeout_s`` is reported as
    ``auth_failure``, and a chat list that does not become usable within the
    same window as ``disconnected``.
    """

    def __init__(
        self,
        *,
        launch: LaunchConfig,
        store_dir: Path,
        web_url: str,
        auth_timeout_s: float,
        watch_tick_s: float,
    ) -> None:
        self._launch = launch
        self._store_dir = store_dir
        self._web_url = web_url
        self._auth_timeout_s = float(auth_timeout_s)
        self._watch_tick_s = max(0.05, float(watch_tick_s))

        self._events = ConnectionEvents()
        self._playwright: Playwright | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._watch_task: asyncio.Task | None = None

        self._closing = False
        self._down = False
        self._authenticated = False
        self._ready = False
        self._pairing_code: str | None = None
        self._auth_deadline: float | None = None
        self._ready_deadline: float | None = None

    @property
    def store_dir(self) -> Path:
        return self._store_dir

    def on(self, event: ConnectionEvent, handler: EventHandler) -> None:
        self._events.subscribe(event, handler)

    async def start(self) -> None:
        if self._context is not None:
            return
        if self._closing:
            raise ConnectionClosedError("connection was closed")

        self._store_dir.mkdir(parents=True, exist_ok=True)
        logger.info("connection: launching chromium (profile=%s)", self._store_dir)

        self._playwright = await async_playwright().start()
        try:
            self._context = await self._playwright.chromium.launch_persistent_context(
                user_data_dir=str(self._store_dir),
                executable_path=self._launch.executable_path,
                headless=self._launch.headless,
                args=list(self._launch.args),
            )
            self._context.on("close", self._handle_context_close)
            pages = self._context.pages
            self._page = pages[0] if pages else await self._context.new_page()
            await self._page.goto(self._web_url, wait_until="domcontentloaded")
        except BaseException:
            # Closing the context fires its close listener; a failed start is not a disconnect.
            self._closing = True
            await self._teardown()
            raise

        self._auth_deadline = asyncio.get_running_loop().time() + self._auth_timeout_s
        self._watch_task = asyncio.create_task(self._watch_loop())

    async def close(self) -> None:
        self._closing = True
        task = self._watch_task
        self._watch_task = None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        await self._teardown()

    async def resolve(self, address: str) -> RecipientIdentity | None:
        page = self._require_page()
        serialized = await page.evaluate(RESOLVE_SCRIPT, address)
        if not serialized:
            return None
        serialized = str(serialized)
        return RecipientIdentity(serialized=serialized, user=serialized.split("@", 1)[0])

    async def is_registered(self, chat_id: str) -> bool:
        page = self._require_page()
        return bool(await page.evaluate(IS_REGISTERED_SCRIPT, chat_id))

    async def send_text(self, identity: RecipientIdentity, body: str) -> str | None:
        page = self._require_page()
        message_id = await page.evaluate(SEND_TEXT_SCRIPT, {"chatId": identity.serialized, "body": body})
        return str(message_id) if message_id else None

    def _require_page(self) -> Page:
        if self._page is None or self._closing:
            raise ConnectionClosedError("connection is not started")
        return self._page

    async def _teardown(self) -> None:
        context = self._context
        playwright = self._playwright
        self._context = None
        self._page = None
        self._playwright = None
        if context is not None:
            with contextlib.suppress(Exception):
                await context.close()
        if playwright is not None:
            with contextlib.suppress(Exception):
                await playwright.stop()

    def _handle_context_close(self, _context: Any) -> None:
        if self._closing:
            return
        self._emit_down(ConnectionEvent.DISCONNECTED, REASON_BROWSER_CLOSED)

    def _emit_down(self, event: ConnectionEvent, reason: str) -> None:
        if self._down:
            return
        self._down = True
        self._events.emit(event, reason)

    def apply_login_state(self, state: dict[str, Any], *, now: float) -> bool:
        """Translate one page-state sample into events. Returns False to stop watching."""
        kind = state.get("state")

        if kind == "pairing":
            if self._ready:
                self._emit_down(ConnectionEvent.DISCONNECTED, REASON_LOGOUT)
                return False
            # The operator is pairing; the code refreshes on its own.
            self._auth_deadline = None
            self._ready_deadline = None
            self._authenticated = False
            code = state.get("code")
            if isinstance(code, str) and code and code != self._pairing_code:
                self._pairing_code = code
                self._events.emit(ConnectionEvent.PAIRING, code)
            return True

        if kind == "main":
            if not self._authenticated:
                self._authenticated = True
                self._auth_deadline = None
                self._ready_deadline = now + self._auth_timeout_s
                self._events.emit(ConnectionEvent.AUTHENTICATED)
            if not self._ready and state.get("injected"):
                self._ready = True
                self._ready_deadline = None
                self._events.emit(ConnectionEvent.READY)
        elif kind == "loading" and not self._ready:
            self._events.emit(ConnectionEvent.LOADING, state.get("percent", 0), state.get("message", ""))

        return self._check_deadlines(now)

    def _check_deadlines(self, now: float) -> bool:
        if self._auth_deadline is not None and now >= self._auth_deadline:
            self._emit_down(ConnectionEvent.AUTH_FAILURE, REASON_AUTH_TIMEOUT)
            return False
        # Logged in but the page never became usable.
        if self._ready_deadline is not None and now >= self._ready_deadline:
            self._emit_down(ConnectionEvent.DISCONNECTED, REASON_READY_TIMEOUT)
            return False
        return True

    async def _watch_loop(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            while not self._closing:
                page = self._page
                if page is None:
                    return
                state = await page.evaluate(LOGIN_STATE_SCRIPT)
                if not isinstance(state, dict):
                    state = {}
                if not self.apply_login_state(state, now=loop.time()):
                    return
                await asyncio.sleep(self._watch_tick_s)
        except asyncio.CancelledError:
            return
        except Exception as exc:
            if self._closing:
                return
            logger.warning("connection: page watch stopped: %s", exc)
            self._emit_down(ConnectionEvent.DISCONNECTED, str(exc) or type(exc).__name__)


__all__ = ["BrowserConnection"]
