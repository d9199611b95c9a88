from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from relay.errors import RuntimeNotFoundError
from relay.state.phase import SessionPhase
from relay.state.session import SessionState
from relay.state.events import ConnectionEvent
from relay.session.lifecycle import LifecycleManager
from relay.session.dispatcher import Dispatcher

from tests.support.fakes import FakeFactory


def _manager(factory: FakeFactory, **kwargs) -> LifecycleManager:
    return LifecycleManager(state=SessionState(), factory=factory, **kwargs)


@pytest.mark.asyncio
async def test_ready_event_marks_session_ready(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test")
    manager = _manager(factory)

    assert await manager.ensure_ready() is None
    assert manager.snapshot().connecting is True
    assert manager.is_ready() is False

    factory.last.emit(ConnectionEvent.READY)
    assert manager.is_ready() is True
    assert manager.get_connection() is factory.last
    assert await manager.ensure_ready() is factory.last
    assert len(factory.connections) == 1


@pytest.mark.asyncio
async def test_concurrent_ensure_ready_builds_one_connection(tmp_path: Path) -> None:
    gate = asyncio.Event()
    factory = FakeFactory(tmp_path / "session-test", gate=gate)
    manager = _manager(factory)

    first = asyncio.create_task(manager.ensure_ready())
    second = asyncio.create_task(manager.ensure_ready())
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert len(factory.connections) == 1
    assert await asyncio.wait_for(second, timeout=1.0) is None

    gate.set()
    assert await asyncio.wait_for(first, timeout=1.0) is None
    assert factory.last.start_calls == 1


@pytest.mark.asyncio
async def test_start_failure_rolls_back_and_raises(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test", start_error=RuntimeError("launch failed"))
    manager = _manager(factory)

    with pytest.raises(RuntimeError, match="launch failed"):
        await manager.ensure_ready()

    snap = manager.snapshot()
    assert snap.connection is None
    assert snap.connecting is False
    assert snap.ready is False
    assert factory.last.closed is True


@pytest.mark.asyncio
async def test_missing_runtime_propagates_without_state_change(tmp_path: Path) -> None:
    error = RuntimeNotFoundError(searched=("/usr/bin/chromium",))
    factory = FakeFactory(tmp_path / "session-test", runtime_error=error)
    manager = _manager(factory)

    with pytest.raises(RuntimeNotFoundError):
        await manager.ensure_ready()

    assert factory.connections == []
    snap = manager.snapshot()
    assert snap.connecting is False
    assert snap.phase is SessionPhase.UNINITIALIZED


@pytest.mark.asyncio
async def test_disconnect_drops_connection_and_allows_retry(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test", ready_on_start=True)
    manager = _manager(factory)
    await manager.ensure_ready()
    first = factory.last
    assert manager.is_ready() is True

    first.emit(ConnectionEvent.DISCONNECTED, "LOGOUT")
    snap = manager.snapshot()
    assert snap.connection is None
    assert snap.ready is False
    assert snap.phase is SessionPhase.DISCONNECTED

    await manager.ensure_ready()
    assert first.closed is True
    assert len(factory.connections) == 2
    assert manager.get_connection() is factory.last
    assert manager.is_ready() is True


@pytest.mark.asyncio
async def test_events_from_replaced_connection_are_ignored(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test")
    pairing_codes: list[str] = []
    manager = _manager(factory, on_pairing=pairing_codes.append)
    await manager.ensure_ready()
    stale = factory.last
    stale.emit(ConnectionEvent.DISCONNECTED, "browser closed")

    await manager.ensure_ready()
    current = factory.last
    assert current is not stale

    stale.emit(ConnectionEvent.READY)
    stale.emit(ConnectionEvent.PAIRING, "stale-code")
    stale.emit(ConnectionEvent.DISCONNECTED, "late")
    assert manager.is_ready() is False
    assert manager.get_connection() is current
    assert pairing_codes == []

    current.emit(ConnectionEvent.PAIRING, "fresh-code")
    assert pairing_codes == ["fresh-code"]


@pytest.mark.asyncio
async def test_auth_failure_keeps_credentials_by_default(tmp_path: Path) -> None:
    store_dir = tmp_path / "session-test"
    store_dir.mkdir()
    factory = FakeFactory(store_dir)
    manager = _manager(factory)
    await manager.ensure_ready()

    factory.last.emit(ConnectionEvent.AUTH_FAILURE, "auth timeout")
    assert manager.snapshot().phase is SessionPhase.AUTH_FAILED

    await manager.shutdown()
    assert factory.last.closed is True
    assert store_dir.exists()


@pytest.mark.asyncio
async def test_auth_failure_can_wipe_credentials(tmp_path: Path) -> None:
    store_dir = tmp_path / "session-test"
    store_dir.mkdir()
    (store_dir / "Cookies").write_text("x")
    factory = FakeFactory(store_dir)
    manager = _manager(factory, clear_on_auth_failure=True)
    await manager.ensure_ready()

    factory.last.emit(ConnectionEvent.AUTH_FAILURE, "auth timeout")
    await manager.shutdown()
    assert not store_dir.exists()


@pytest.mark.asyncio
async def test_initialize_timeout_leaves_attempt_running(tmp_path: Path) -> None:
    gate = asyncio.Event()
    factory = FakeFactory(tmp_path / "session-test", gate=gate, ready_on_start=True)
    manager = _manager(factory)

    assert await manager.initialize(timeout_s=0.05) is False
    assert manager.snapshot().connecting is True

    gate.set()
    for _ in range(20):
        if manager.is_ready():
            break
        await asyncio.sleep(0.01)
    assert manager.is_ready() is True
    assert factory.last.start_calls == 1


@pytest.mark.asyncio
async def test_initialize_returns_true_when_ready(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test", ready_on_start=True)
    manager = _manager(factory)

    assert await manager.initialize(timeout_s=1.0) is True
    assert await manager.initialize(timeout_s=1.0) is True
    assert len(factory.connections) == 1


@pytest.mark.asyncio
async def test_initialize_surfaces_attempt_errors(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test", runtime_error=RuntimeNotFoundError(searched=()))
    manager = _manager(factory)

    with pytest.raises(RuntimeNotFoundError):
        await manager.initialize(timeout_s=1.0)


@pytest.mark.asyncio
async def test_shutdown_closes_live_connection(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test", ready_on_start=True)
    manager = _manager(factory)
    await manager.ensure_ready()

    await manager.shutdown()
    assert factory.last.closed is True
    assert manager.get_connection() is None
    assert manager.is_ready() is False


@pytest.mark.asyncio
async def test_pairing_then_ready_allows_sending(tmp_path: Path) -> None:
    factory = FakeFactory(tmp_path / "session-test")
    pairing_codes: list[str] = []
    state = SessionState()
    manager = LifecycleManager(state=state, factory=factory, on_pairing=pairing_codes.append)
    dispatcher = Dispatcher(state=state)

    assert await manager.ensure_ready() is None
    connection = factory.last

    connection.emit(ConnectionEvent.PAIRING, "2@abc,def")
    snap = manager.snapshot()
    assert pairing_codes == ["2@abc,def"]
    assert snap.connecting is True
    assert snap.ready is False

    connection.emit(ConnectionEvent.AUTHENTICATED)
    connection.emit(ConnectionEvent.LOADING, 50, "WhatsApp")
    assert manager.snapshot() == snap

    connection.emit(ConnectionEvent.READY)
    snap = manager.snapshot()
    assert snap.ready is True
    assert snap.connecting is False

    result = await dispatcher.send("5511999999999", "hi")
    assert result.to_dict() == {"success": True}
    assert connection.sent[0][1] == "hi"


@pytest.mark.asyncio
async def test_cancelled_start_rolls_back(tmp_path: Path) -> None:
    gate = asyncio.Event()
    factory = FakeFactory(tmp_path / "session-test", gate=gate)
    manager = _manager(factory)

    task = manager.start_background()
    await asyncio.sleep(0)
    assert manager.snapshot().connecting is True

    await manager.shutdown()

    assert task.cancelled() is True
    snap = manager.snapshot()
    assert snap.connection is None
    assert snap.connecting is False
    assert factory.last.closed is True
    assert len(factory.connections) == 1

    gate.set()
    await manager.ensure_ready()
    assert len(factory.connections) == 2
