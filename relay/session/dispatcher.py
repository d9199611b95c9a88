"""Outbound message dispatch over the ready session."""

from __future__ import annotations

import logging

from relay.errors import SessionNotReadyError
from relay.state.session import SessionState
from relay.config.session import CHAT_ID_SUFFIX
from relay.state.dispatch import LookupResult, DispatchResult, DispatchErrorKind

from .classify import describe_kind, classify_send_failure

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, *, state: SessionState) -> None:
        self._state = state

    async def send(self, address: str, body: str) -> DispatchResult:
        """Resolve *address* and submit *body*; one attempt, failures returned as results.

        *address* must already be normalized (digits only, no leading zeros).
        """
        snap = self._state.snapshot()
        connection = snap.connection
        if not snap.ready or connection is None:
            return DispatchResult.failure(
                DispatchErrorKind.NOT_READY,
                describe_kind(DispatchErrorKind.NOT_READY),
            )

        logger.info("dispatch: resolving recipient %s", address)
        try:
            identity = await connection.resolve(address)
        except Exception:
            logger.exception("dispatch: recipient resolution failed for %s", address)
            return DispatchResult.failure(
                DispatchErrorKind.RECIPIENT_RESOLUTION_FAILED,
                describe_kind(DispatchErrorKind.RECIPIENT_RESOLUTION_FAILED),
            )

        if identity is None:
            logger.info("dispatch: %s is not registered", address)
            return DispatchResult.failure(
                DispatchErrorKind.RECIPIENT_NOT_REGISTERED,
                f"The number {address} is not registered on WhatsApp. Please verify the number includes "
                "the country code (e.g., +5511999999999).",
            )

        try:
            message_id = await connection.send_text(identity, body)
        except Exception as exc:
            kind = classify_send_failure(exc)
            logger.exception("dispatch: send to %s failed (kind=%s)", identity.serialized, kind.value)
            return DispatchResult.failure(kind, describe_kind(kind))

        logger.info("dispatch: sent to %s (message_id=%s)", identity.serialized, message_id)
        return DispatchResult.ok()

    async def lookup(self, address: str) -> LookupResult:
        """Registration check for *address*; resolution of the full identity is best-effort."""
        snap = self._state.snapshot()
        connection = snap.connection
        if not snap.ready or connection is None:
            raise SessionNotReadyError(describe_kind(DispatchErrorKind.NOT_READY))

        chat_id = f"{address}{CHAT_ID_SUFFIX}"
        registered = await connection.is_registered(chat_id)

        identity = None
        try:
            identity = await connection.resolve(address)
        except Exception as exc:
            logger.info("dispatch: could not resolve %s (non-critical): %s", address, exc)

        return LookupResult(number=address, chat_id=chat_id, registered=registered, identity=identity)


__all__ = ["Dispatcher"]
