"""Response models for the API."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime


class APIResponse(BaseModel):
    """Base for JSON responses; fields are camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(APIResponse):
    """Health check response."""
    status: str
    version: str


class StatusResponse(APIResponse):
    """Client session status."""
    ready: bool
    initializing: bool
    timestamp: datetime
    qr: Optional[str] = None
    pairing_code: Optional[str] = None


class InitializeResponse(APIResponse):
    message: str


class ActionResponse(APIResponse):
    """Acknowledges an operation performed by the client."""
    success: bool = True


class SendMessageResponse(ActionResponse):
    message_id: Optional[str] = None


class ResultResponse(ActionResponse):
    """Operation acknowledgement carrying the client's raw result."""
    result: Any = None


class SyncHistoryResponse(ActionResponse):
    is_synced: bool


class ChangeSyncResponse(ActionResponse):
    background_sync: bool


class ChatSummary(APIResponse):
    id: str
    name: Optional[str] = None
    is_group: bool
    unread_count: int = 0
    timestamp: Optional[int] = None


class ChatListResponse(APIResponse):
    count: int
    chats: List[ChatSummary]


class ChatDetail(APIResponse):
    """
    Chat information.

    Group-only fields (participants, description, owner, created_at) are
    left unset for individual chats and omitted from the response.
    """
    id: str
    name: Optional[str] = None
    is_group: bool
    is_read_only: bool = False
    unread_count: int = 0
    timestamp: Optional[int] = None
    archived: bool = False
    pinned: bool = False
    is_muted: bool = False
    mute_expiration: Optional[int] = None
    participants: Optional[List[Dict[str, Any]]] = None
    description: Optional[str] = None
    owner: Optional[str] = None
    created_at: Optional[Any] = None


class GroupInfoResponse(APIResponse):
    name: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[Any] = None
    owner: Optional[str] = None
    participant_count: int
    participants: List[Dict[str, Any]]


class MessageSummary(APIResponse):
    id: str
    body: Optional[str] = None
    type: Optional[str] = None
    timestamp: Optional[int] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    author: Optional[str] = None
    from_me: bool = False
    has_media: bool = False
    has_quoted_msg: bool = False


class MessageDetail(MessageSummary):
    is_forwarded: bool = False
    is_status: bool = False
    is_starred: bool = False
    broadcast: bool = False


class MessageListResponse(APIResponse):
    messages: List[MessageSummary]


class QuotedMessageResponse(APIResponse):
    id: str
    type: Optional[str] = None
    author: Optional[str] = None
    timestamp: Optional[int] = None
    has_media: bool = False
    body: Optional[str] = None


class MediaResponse(APIResponse):
    """Downloaded media; ``data`` is base64 encoded."""
    mimetype: str
    filename: Optional[str] = None
    data: str
    data_length: int


class ContactInfo(APIResponse):
    id: str
    name: Optional[str] = None
    pushname: Optional[str] = None
    number: Optional[str] = None
    is_me: bool = False
    is_user: bool = False
    is_group: bool = False
    is_wa_contact: bool = Field(default=False, alias="isWAContact")
    is_my_contact: bool = False
    is_blocked: bool = False


class ContactListResponse(APIResponse):
    contacts: List[ContactInfo]


class ClientInfoResponse(APIResponse):
    pushname: Optional[str] = None
    number: Optional[str] = None
    platform: Optional[str] = None


class DeviceCountResponse(APIResponse):
    device_count: int


class StatusesResponse(APIResponse):
    statuses: List[Any]


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = False
    error: Dict[str, Any]
    timestamp: datetime
