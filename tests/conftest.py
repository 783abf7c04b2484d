"""Pytest fixtures and an in-memory WhatsApp client."""

import inspect
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from wa_client import ClientOptions, WhatsAppClient
from wa_gateway.main import create_app
from wa_gateway.models.config import APIConfig

MESSAGE_METHODS = (
    "reply", "delete", "react", "edit", "pin", "unpin",
    "download_media", "get_quoted_message",
)
CHAT_METHODS = (
    "send_message", "pin", "archive", "mute", "send_state_typing",
    "send_state_recording", "clear_state", "get_labels", "change_labels",
    "fetch_messages", "set_subject", "set_description", "leave",
    "add_participants",
)


class FakeId:
    def __init__(self, serialized: str):
        self.serialized = serialized
        self.user = serialized.split("@")[0]


def make_message(message_id: str = "true_123@c.us_AAA", **overrides) -> SimpleNamespace:
    """A message as the client library would return it."""
    message = SimpleNamespace(
        id=FakeId(message_id),
        body="hello",
        type="chat",
        timestamp=1700000000,
        from_="123@c.us",
        to="456@c.us",
        author=None,
        from_me=True,
        has_media=False,
        has_quoted_msg=False,
        is_forwarded=False,
        is_status=False,
        is_starred=False,
        broadcast=False,
    )
    for name in MESSAGE_METHODS:
        setattr(message, name, AsyncMock())
    for name, value in overrides.items():
        setattr(message, name, value)
    return message


def make_chat(chat_id: str = "123@c.us", is_group: bool = False, **overrides) -> SimpleNamespace:
    """A chat; group chats also carry owner, participants and description."""
    chat = SimpleNamespace(
        id=FakeId(chat_id),
        name="Alice" if not is_group else "Team",
        is_group=is_group,
        is_read_only=False,
        unread_count=2,
        timestamp=1700000000,
        archived=False,
        pinned=False,
        is_muted=False,
        mute_expiration=0,
    )
    if is_group:
        chat.description = "Team chat"
        chat.owner = FakeId("111@c.us")
        chat.created_at = None
        chat.participants = [
            SimpleNamespace(id=FakeId("111@c.us"), is_admin=True, is_super_admin=True),
            SimpleNamespace(id=FakeId("222@c.us"), is_admin=False, is_super_admin=False),
        ]
    for name in CHAT_METHODS:
        setattr(chat, name, AsyncMock())
    chat.get_labels.return_value = []
    chat.fetch_messages.return_value = [make_message()]
    for name, value in overrides.items():
        setattr(chat, name, value)
    return chat


class FakeClient(WhatsAppClient):
    """
    In-memory client. Library calls are delegated to ``self.calls`` so tests
    can inspect arguments and script return values or failures.
    """

    def __init__(self, options: ClientOptions = None, auto_ready: bool = True):
        self.options = options
        self.auto_ready = auto_ready
        self.handlers = {}
        self.destroyed = False
        self.chats = {}
        self.messages = {}
        self.info = SimpleNamespace(pushname="Gateway", wid=FakeId("999@c.us"), platform="android")
        self.interface = SimpleNamespace(open_chat_window_at=AsyncMock())
        self.calls = AsyncMock()
        self.calls.send_message.return_value = make_message("true_123@c.us_SENT")
        self.calls.get_contacts.return_value = []
        self.calls.get_broadcasts.return_value = []

    def add_chat(self, chat):
        self.chats[chat.id.serialized] = chat
        return chat

    def add_message(self, message):
        self.messages[message.id.serialized] = message
        return message

    def on(self, event, handler):
        self.handlers[event] = handler

    async def emit(self, event, *args):
        result = self.handlers[event](*args)
        if inspect.isawaitable(result):
            await result

    def fire(self, event, *args):
        """Invoke a synchronous handler from test code."""
        self.handlers[event](*args)

    async def initialize(self):
        if self.auto_ready:
            await self.emit("authenticated")
            await self.emit("ready")

    async def destroy(self):
        self.destroyed = True

    async def get_wweb_version(self):
        return "2.3000.0"

    async def get_chat_by_id(self, chat_id):
        if chat_id not in self.chats:
            raise Exception("Chat not found")
        return self.chats[chat_id]

    async def get_message_by_id(self, message_id):
        if message_id not in self.messages:
            raise Exception("Message not found")
        return self.messages[message_id]

    async def get_chats(self):
        return list(self.chats.values())

    async def send_message(self, chat_id, content, **options):
        return await self.calls.send_message(chat_id, content, **options)

    async def get_contacts(self):
        return await self.calls.get_contacts()

    async def accept_invite(self, invite_code):
        return await self.calls.accept_invite(invite_code)

    async def create_group(self, title, participant_ids, **options):
        return await self.calls.create_group(title, participant_ids, **options)

    async def set_status(self, status):
        return await self.calls.set_status(status)

    async def approve_group_membership_requests(self, group_id, **options):
        return await self.calls.approve_group_membership_requests(group_id, **options)

    async def reject_group_membership_requests(self, group_id, **options):
        return await self.calls.reject_group_membership_requests(group_id, **options)

    async def get_contact_device_count(self, contact_id):
        return await self.calls.get_contact_device_count(contact_id)

    async def sync_history(self, chat_id):
        return await self.calls.sync_history(chat_id)

    async def get_broadcasts(self):
        return await self.calls.get_broadcasts()

    async def set_background_sync(self, enabled):
        return await self.calls.set_background_sync(enabled)


@pytest.fixture
def config():
    """Test configuration; the session starts with the app."""
    return APIConfig(init_on_startup=True, log_level="WARNING", max_upload_size_mb=1)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def app(config, fake_client):
    return create_app(config, client_factory=lambda options: fake_client)


@pytest.fixture
def api(app):
    """HTTP client for an app whose WhatsApp session is ready."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def chat(fake_client):
    return fake_client.add_chat(make_chat("123@c.us"))


@pytest.fixture
def group(fake_client):
    return fake_client.add_chat(make_chat("120363@g.us", is_group=True))


@pytest.fixture
def message(fake_client):
    return fake_client.add_message(make_message())
