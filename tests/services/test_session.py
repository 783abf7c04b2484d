"""Client session lifecycle tests."""

import asyncio
import logging

import pytest

from wa_gateway.errors import ClientNotReadyError, ClientSetupError
from wa_gateway.models.config import APIConfig
from wa_gateway.services.session import ClientSession

from conftest import FakeClient


async def _settle():
    """Let background initialization tasks run."""
    for _ in range(3):
        await asyncio.sleep(0)


def _session(client: FakeClient, **config) -> ClientSession:
    return ClientSession(APIConfig(**config), client_factory=lambda options: client)


@pytest.mark.asyncio
async def test_start_initializes_client_in_background():
    client = FakeClient()
    session = _session(client)

    assert session.start() == "Client initialization started"
    await _settle()

    assert session.ready is True
    assert session.require_client() is client


@pytest.mark.asyncio
async def test_start_reports_already_initialized_when_ready():
    session = _session(FakeClient())
    session.start()
    await _settle()

    assert session.start() == "Client already initialized"


@pytest.mark.asyncio
async def test_start_reports_initialization_in_progress():
    client = FakeClient()
    started = asyncio.Event()

    async def slow_initialize():
        started.set()
        await asyncio.sleep(10)

    client.initialize = slow_initialize
    session = _session(client)
    session.start()
    await started.wait()

    assert session.initializing is True
    assert session.start() == "Client initialization in progress"
    await session.close()


@pytest.mark.asyncio
async def test_start_passes_configured_options_to_factory():
    received = []

    def factory(options):
        received.append(options)
        return FakeClient(options)

    session = ClientSession(
        APIConfig(client_id="sales", auth_data_path="/data/auth", headless=True),
        client_factory=factory
    )
    session.start()
    await _settle()

    assert received[0].client_id == "sales"
    assert received[0].auth_data_path == "/data/auth"
    assert received[0].headless is True


@pytest.mark.asyncio
async def test_start_without_configured_factory_raises_setup_error():
    session = ClientSession(APIConfig(client_factory=""))

    with pytest.raises(ClientSetupError, match="No client factory configured"):
        session.start()


@pytest.mark.asyncio
async def test_start_wraps_factory_failures():
    def factory(options):
        raise RuntimeError("browser missing")

    session = ClientSession(APIConfig(), client_factory=factory)

    with pytest.raises(ClientSetupError, match="browser missing"):
        session.start()


@pytest.mark.asyncio
async def test_failed_initialization_leaves_session_not_ready(caplog):
    client = FakeClient()

    async def failing_initialize():
        raise RuntimeError("Failed to launch the browser process")

    client.initialize = failing_initialize
    session = _session(client)

    with caplog.at_level(logging.ERROR):
        session.start()
        await _settle()

    assert session.ready is False
    assert "initialization failed" in caplog.text
    with pytest.raises(ClientNotReadyError):
        session.require_client()


@pytest.mark.asyncio
async def test_disconnect_and_auth_failure_clear_readiness():
    client = FakeClient()
    session = _session(client)
    session.start()
    await _settle()

    client.fire("disconnected", "LOGOUT")
    assert session.ready is False

    await client.emit("ready")
    assert session.ready is True

    client.fire("auth_failure", "bad session")
    assert session.ready is False


@pytest.mark.asyncio
async def test_qr_and_pairing_code_are_kept_until_ready():
    client = FakeClient(auto_ready=False)
    session = _session(client)
    session.start()
    await _settle()

    client.fire("qr", "2@abc,def")
    client.fire("code", "ABCD-EFGH")
    assert session.last_qr == "2@abc,def"
    assert session.pairing_code == "ABCD-EFGH"

    await client.emit("ready")
    assert session.last_qr is None
    assert session.pairing_code is None


@pytest.mark.asyncio
async def test_restart_after_disconnect_destroys_previous_client():
    clients = [FakeClient(), FakeClient()]
    session = ClientSession(APIConfig(), client_factory=lambda options: clients.pop(0))
    session.start()
    await _settle()
    first = session.client

    first.fire("disconnected", "NAVIGATION")
    assert session.start() == "Client initialization started"
    await _settle()

    assert first.destroyed is True
    assert session.client is not first
    assert session.ready is True


@pytest.mark.asyncio
async def test_close_destroys_client():
    client = FakeClient()
    session = _session(client)
    session.start()
    await _settle()

    await session.close()

    assert client.destroyed is True
    assert session.ready is False
    assert session.client is None


@pytest.mark.asyncio
async def test_replaced_client_cannot_raise_readiness():
    old, new = FakeClient(), FakeClient(auto_ready=False)
    clients = [old, new]
    session = ClientSession(APIConfig(), client_factory=lambda options: clients.pop(0))
    session.start()
    await _settle()

    async def failing_destroy():
        raise RuntimeError("Target closed")

    old.destroy = failing_destroy
    old.fire("disconnected", "NAVIGATION")
    session.start()
    await _settle()
    assert session.client is new
    assert session.ready is False

    await old.emit("ready")
    old.fire("qr", "2@stale")

    assert session.ready is False
    assert session.last_qr is None
    with pytest.raises(ClientNotReadyError):
        session.require_client()

    await new.emit("ready")
    assert session.require_client() is new


@pytest.mark.asyncio
async def test_failed_initialization_of_replaced_client_keeps_current_state():
    old = FakeClient()
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow_failing_initialize():
        started.set()
        await release.wait()
        raise RuntimeError("Navigation timeout")

    old.initialize = slow_failing_initialize
    new = FakeClient()
    clients = [old, new]
    session = ClientSession(APIConfig(), client_factory=lambda options: clients.pop(0))
    session.start()
    await started.wait()
    old_task = session._init_task

    # Simulate a restart that installed a new, ready client
    session.client = new
    session._register_handlers(new)
    await new.emit("ready")

    release.set()
    await old_task

    assert session.ready is True
    assert session.require_client() is new
