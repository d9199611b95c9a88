from __future__ import annotations

import pytest

from relay.errors import SessionNotReadyError
from relay.state.session import SessionState
from relay.state.dispatch import DispatchErrorKind
from relay.session.classify import describe_kind
from relay.session.dispatcher import Dispatcher

from tests.support.fakes import FakeConnection
from tests.support.builders import ready_state


@pytest.mark.asyncio
async def test_send_not_ready_skips_resolution() -> None:
    state = SessionState()
    connection = FakeConnection()
    state.begin_connecting(connection)

    result = await Dispatcher(state=state).send("5511999999999", "hi")
    assert result.success is False
    assert result.kind is DispatchErrorKind.NOT_READY
    assert connection.resolved == []


@pytest.mark.asyncio
async def test_send_success() -> None:
    state, connection = ready_state()

    result = await Dispatcher(state=state).send("5511999999999", "*Alice*\n\nHello")
    assert result.success is True
    assert result.to_dict() == {"success": True}
    identity, body = connection.sent[0]
    assert identity.serialized == "5511999999999@c.us"
    assert body == "*Alice*\n\nHello"


@pytest.mark.asyncio
async def test_send_unregistered_recipient() -> None:
    state, connection = ready_state()
    connection.unregistered.add("000")

    result = await Dispatcher(state=state).send("000", "hi")
    assert result.kind is DispatchErrorKind.RECIPIENT_NOT_REGISTERED
    assert "000" in (result.detail or "")
    assert connection.sent == []


@pytest.mark.asyncio
async def test_send_resolution_fault() -> None:
    state, connection = ready_state()
    connection.resolve_error = RuntimeError("evaluation failed")

    result = await Dispatcher(state=state).send("5511999999999", "hi")
    assert result.kind is DispatchErrorKind.RECIPIENT_RESOLUTION_FAILED
    assert connection.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("message", "kind"),
    [
        ("Error: Lid is missing in chat table (LID)", DispatchErrorKind.INVALID_ADDRESS_FORMAT),
        ("wid error: not registered", DispatchErrorKind.RECIPIENT_NOT_REGISTERED),
        ("Protocol error: Target closed", DispatchErrorKind.SEND_FAILED),
    ],
)
async def test_send_failures_are_classified(message: str, kind: DispatchErrorKind) -> None:
    state, connection = ready_state()
    connection.send_error = RuntimeError(message)

    result = await Dispatcher(state=state).send("5511999999999", "hi")
    assert result.kind is kind
    assert result.detail == describe_kind(kind)


@pytest.mark.asyncio
async def test_lookup_requires_ready_session() -> None:
    with pytest.raises(SessionNotReadyError):
        await Dispatcher(state=SessionState()).lookup("5511999999999")


@pytest.mark.asyncio
async def test_lookup_reports_registration_and_identity() -> None:
    state, _connection = ready_state()

    result = await Dispatcher(state=state).lookup("5511999999999")
    assert result.chat_id == "5511999999999@c.us"
    assert result.registered is True
    assert result.identity is not None
    assert result.identity.user == "5511999999999"


@pytest.mark.asyncio
async def test_lookup_tolerates_resolution_failure() -> None:
    state, connection = ready_state()
    connection.resolve_error = RuntimeError("boom")
    connection.registered = False

    result = await Dispatcher(state=state).lookup("5511999999999")
    assert result.registered is False
    assert result.identity is None


@pytest.mark.asyncio
async def test_lookup_propagates_registration_errors() -> None:
    state, connection = ready_state()
    connection.is_registered_error = RuntimeError("page crashed")

    with pytest.raises(RuntimeError, match="page crashed"):
        await Dispatcher(state=state).lookup("5511999999999")
