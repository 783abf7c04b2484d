"""
Interface of the WhatsApp Web automation client driven by the gateway.

The library adapter plugged into the gateway must return an object
implementing ``WhatsAppClient``. Chats, messages and contacts it hands back
are opaque; the gateway only reads the attributes listed on the protocols
below and calls the listed coroutines.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union


class ClientEvent(str, Enum):
    """Lifecycle events emitted by the client."""
    QR = "qr"
    CODE = "code"
    LOADING_SCREEN = "loading_screen"
    AUTHENTICATED = "authenticated"
    AUTH_FAILURE = "auth_failure"
    READY = "ready"
    MESSAGE = "message"
    DISCONNECTED = "disconnected"


# Handlers may be plain functions or coroutine functions; the client awaits
# whatever they return when it is awaitable.
EventHandler = Callable[..., Union[None, Awaitable[None]]]


@dataclass
class ClientOptions:
    """Options passed to the client factory."""
    client_id: Optional[str] = None
    auth_data_path: str = ".wwebjs_auth"
    headless: bool = False


class WireId(Protocol):
    serialized: str


class UserId(Protocol):
    user: str
    serialized: str


class GroupParticipant(Protocol):
    id: UserId
    is_admin: bool
    is_super_admin: bool


class Label(Protocol):
    id: str
    name: str


class Media(Protocol):
    mimetype: str
    data: str
    filename: Optional[str]


class Message(Protocol):
    id: WireId
    body: str
    type: str
    timestamp: int
    from_: str
    to: str
    author: Optional[str]
    from_me: bool
    has_media: bool
    has_quoted_msg: bool
    is_forwarded: bool
    is_status: bool
    is_starred: bool
    broadcast: bool

    async def reply(self, content: Any, **options: Any) -> "Message": ...

    async def delete(self, everyone: bool = False) -> None: ...

    async def react(self, reaction: str) -> None: ...

    async def edit(self, content: str, **options: Any) -> Optional["Message"]: ...

    async def pin(self, duration: int) -> bool: ...

    async def unpin(self) -> bool: ...

    async def download_media(self) -> Optional[Media]: ...

    async def get_quoted_message(self) -> Optional["Message"]: ...


class Chat(Protocol):
    id: WireId
    name: str
    is_group: bool
    is_read_only: bool
    unread_count: int
    timestamp: int
    archived: bool
    pinned: bool
    is_muted: bool
    mute_expiration: int

    async def send_message(self, content: Any, **options: Any) -> Message: ...

    async def pin(self) -> bool: ...

    async def archive(self) -> None: ...

    async def mute(self, unmute_date: Optional[datetime] = None) -> None: ...

    async def send_state_typing(self) -> None: ...

    async def send_state_recording(self) -> None: ...

    async def clear_state(self) -> None: ...

    async def get_labels(self) -> List[Label]: ...

    async def change_labels(self, label_ids: List[str]) -> None: ...

    async def fetch_messages(self, limit: int = 50) -> List[Message]: ...


class GroupChat(Chat, Protocol):
    description: Optional[str]
    owner: Optional[UserId]
    created_at: Optional[datetime]
    participants: List[GroupParticipant]

    async def set_subject(self, subject: str) -> bool: ...

    async def set_description(self, description: str) -> bool: ...

    async def leave(self) -> None: ...

    async def add_participants(self, participant_ids: List[str], **options: Any) -> Any: ...


class Contact(Protocol):
    id: WireId
    name: Optional[str]
    pushname: Optional[str]
    number: Optional[str]
    is_me: bool
    is_user: bool
    is_group: bool
    is_wa_contact: bool
    is_my_contact: bool
    is_blocked: bool


class ClientInfo(Protocol):
    pushname: str
    wid: UserId
    platform: str


class ClientInterface(Protocol):
    async def open_chat_window_at(self, message_id: str) -> None: ...


class WhatsAppClient(ABC):
    """A browser-driven WhatsApp Web session."""

    info: Optional[ClientInfo] = None
    interface: ClientInterface

    @abstractmethod
    def on(self, event: str, handler: EventHandler) -> None:
        """Register a lifecycle event handler."""

    @abstractmethod
    async def initialize(self) -> None:
        """Launch the browser session and authenticate."""

    @abstractmethod
    async def destroy(self) -> None:
        """Close the browser session."""

    @abstractmethod
    async def get_wweb_version(self) -> str:
        """Version of the WhatsApp Web client loaded in the browser."""

    @abstractmethod
    async def send_message(self, chat_id: str, content: Any, **options: Any) -> Message:
        """Send text, a content object or media to a chat."""

    @abstractmethod
    async def get_message_by_id(self, message_id: str) -> Message: ...

    @abstractmethod
    async def get_chat_by_id(self, chat_id: str) -> Union[Chat, GroupChat]: ...

    @abstractmethod
    async def get_chats(self) -> List[Union[Chat, GroupChat]]: ...

    @abstractmethod
    async def get_contacts(self) -> List[Contact]: ...

    @abstractmethod
    async def accept_invite(self, invite_code: str) -> str: ...

    @abstractmethod
    async def create_group(self, title: str, participant_ids: List[str], **options: Any) -> Any: ...

    @abstractmethod
    async def set_status(self, status: str) -> None: ...

    @abstractmethod
    async def approve_group_membership_requests(self, group_id: str, **options: Any) -> List[Dict[str, Any]]: ...

    @abstractmethod
    async def reject_group_membership_requests(self, group_id: str, **options: Any) -> List[Dict[str, Any]]: ...

    @abstractmethod
    async def get_contact_device_count(self, contact_id: str) -> int: ...

    @abstractmethod
    async def sync_history(self, chat_id: str) -> bool: ...

    @abstractmethod
    async def get_broadcasts(self) -> List[Any]: ...

    @abstractmethod
    async def set_background_sync(self, enabled: bool) -> bool: ...
