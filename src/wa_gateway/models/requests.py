"""Request models for the API."""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIRequest(BaseModel):
    """Base for JSON bodies; fields are camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Messages

class SendMessageRequest(APIRequest):
    to: str = Field(..., min_length=1, description="Phone number or chat id")
    message: str = Field(..., min_length=1)


class ReplyMessageRequest(APIRequest):
    message_id: str = Field(..., min_length=1)
    reply: str = Field(..., min_length=1)


class MessageRequest(APIRequest):
    """Body naming a single message."""
    message_id: str = Field(..., min_length=1)


class DeleteMessageRequest(MessageRequest):
    for_everyone: bool = True


class EditMessageRequest(MessageRequest):
    new_text: str = Field(..., min_length=1)


class ReactionRequest(MessageRequest):
    reaction: str = Field(..., min_length=1, description="Emoji to react with")


class PinMessageRequest(MessageRequest):
    duration: int = Field(default=86400, gt=0, description="Pin duration in seconds")


class SendLocationRequest(APIRequest):
    to: str = Field(..., min_length=1)
    latitude: float
    longitude: float
    name: Optional[str] = None
    address: Optional[str] = None
    url: Optional[str] = None


class SendButtonsRequest(APIRequest):
    to: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    buttons: List[Dict[str, Any]]
    title: Optional[str] = None
    footer: Optional[str] = None


class SendListRequest(APIRequest):
    to: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    button_text: str = Field(..., min_length=1)
    sections: List[Dict[str, Any]]
    title: Optional[str] = None
    footer: Optional[str] = None


class SendPollRequest(APIRequest):
    to: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    options: List[str]
    allow_multiple_answers: bool = False
    message_secret: Optional[List[int]] = None


class SendVCardRequest(APIRequest):
    to: str = Field(..., min_length=1)
    v_card: str = Field(..., min_length=1)


class SendPreviewRequest(APIRequest):
    to: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)


class MentionUsersRequest(APIRequest):
    chat_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    mentions: List[str]


class GroupMention(APIRequest):
    subject: str
    id: str


class MentionGroupsRequest(APIRequest):
    chat_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    group_mentions: Union[List[GroupMention], GroupMention]


# Chats

class ChatRequest(APIRequest):
    """Body naming a single chat."""
    chat_id: str = Field(..., min_length=1)


class MuteChatRequest(ChatRequest):
    duration: int = Field(default=20, gt=0, description="Mute duration in seconds")


class UpdateLabelsRequest(ChatRequest):
    label_ids: List[str]


class AddLabelsRequest(ChatRequest):
    new_label_ids: List[str]


# Groups

class SetSubjectRequest(ChatRequest):
    subject: str = Field(..., min_length=1)


class SetDescriptionRequest(ChatRequest):
    description: str = Field(..., min_length=1)


class JoinGroupRequest(APIRequest):
    invite_code: str = Field(..., min_length=1)


class AddMembersRequest(ChatRequest):
    participants: List[str]


class CreateGroupRequest(APIRequest):
    title: str = Field(..., min_length=1)
    participants: List[str]


class MembershipRequestsRequest(ChatRequest):
    requester_ids: Optional[Union[List[str], str]] = None
    sleep: Optional[Union[List[int], int]] = Field(
        default=None,
        description="Delay between requests in ms, or a [min, max] range"
    )


# Account

class SetStatusRequest(APIRequest):
    status: str = Field(..., min_length=1)


class ChangeSyncRequest(APIRequest):
    enabled: bool = True
