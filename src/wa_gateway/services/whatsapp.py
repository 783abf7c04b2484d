"""Service translating API operations into calls on the WhatsApp client."""

import functools
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Union

from fastapi.encoders import jsonable_encoder

from wa_client import (
    Buttons,
    ListMessage,
    Location,
    MessageMedia,
    Poll,
    WhatsAppClient,
    serialized_id,
    to_chat_id,
    to_chat_ids,
)

from ..errors import (
    ClientOperationError,
    GatewayError,
    NoMediaError,
    NoQuotedMessageError,
    NotAGroupError,
    NotOwnMessageError,
)
from ..models.config import APIConfig

logger = logging.getLogger(__name__)


def forwards_client_errors(func):
    """Re-raise anything the client throws as a ClientOperationError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except GatewayError:
            raise
        except Exception as e:
            logger.error(f"{func.__name__} failed: {e}")
            raise ClientOperationError(str(e) or e.__class__.__name__) from e

    return wrapper


def _participant_dict(participant) -> Dict[str, Any]:
    return {
        "id": serialized_id(participant.id),
        "isAdmin": bool(getattr(participant, "is_admin", False)),
        "isSuperAdmin": bool(getattr(participant, "is_super_admin", False)),
    }


def _owner_user(owner) -> Optional[str]:
    if owner is None:
        return None
    return getattr(owner, "user", None) or serialized_id(owner)


def _message_summary(message) -> Dict[str, Any]:
    return {
        "id": serialized_id(message.id),
        "body": message.body,
        "type": message.type,
        "timestamp": message.timestamp,
        "from_": message.from_,
        "to": message.to,
        "author": message.author,
        "from_me": message.from_me,
        "has_media": message.has_media,
        "has_quoted_msg": message.has_quoted_msg,
    }


class WhatsAppService:
    """Operations exposed over HTTP, each backed by one or two client calls."""

    def __init__(self, client: WhatsAppClient, config: APIConfig):
        self.client = client
        self.config = config

    async def _get_group(self, chat_id: str):
        chat = await self.client.get_chat_by_id(chat_id)
        if not chat.is_group:
            raise NotAGroupError()
        return chat

    # Messages

    @forwards_client_errors
    async def send_message(self, to: str, message: str) -> Dict[str, Any]:
        result = await self.client.send_message(to_chat_id(to), message)
        return {"message_id": serialized_id(result.id) if result is not None else None}

    @forwards_client_errors
    async def reply_message(self, message_id: str, reply: str) -> None:
        message = await self.client.get_message_by_id(message_id)
        await message.reply(reply)

    @forwards_client_errors
    async def send_location(
        self,
        to: str,
        latitude: float,
        longitude: float,
        name: Optional[str] = None,
        address: Optional[str] = None,
        url: Optional[str] = None
    ) -> None:
        location = Location(latitude, longitude, name=name, address=address, url=url)
        await self.client.send_message(to_chat_id(to), location)

    @forwards_client_errors
    async def mention_users(self, chat_id: str, message: str, mentions: List[str]) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.send_message(message, mentions=to_chat_ids(mentions))

    @forwards_client_errors
    async def mention_groups(
        self,
        chat_id: str,
        message: str,
        group_mentions: Union[List[Dict[str, str]], Dict[str, str]]
    ) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.send_message(message, group_mentions=group_mentions)

    @forwards_client_errors
    async def delete_message(self, message_id: str, for_everyone: bool = True) -> None:
        message = await self.client.get_message_by_id(message_id)
        if not message.from_me:
            raise NotOwnMessageError("Can only delete own messages")
        await message.delete(for_everyone)

    @forwards_client_errors
    async def edit_message(self, message_id: str, new_text: str) -> None:
        message = await self.client.get_message_by_id(message_id)
        if not message.from_me:
            raise NotOwnMessageError("Can only edit own messages")
        await message.edit(new_text)

    @forwards_client_errors
    async def send_buttons(
        self,
        to: str,
        body: str,
        buttons: List[Dict[str, Any]],
        title: Optional[str] = None,
        footer: Optional[str] = None
    ) -> None:
        await self.client.send_message(to_chat_id(to), Buttons(body, buttons, title, footer))

    @forwards_client_errors
    async def send_list(
        self,
        to: str,
        body: str,
        button_text: str,
        sections: List[Dict[str, Any]],
        title: Optional[str] = None,
        footer: Optional[str] = None
    ) -> None:
        list_message = ListMessage(body, button_text, sections, title, footer)
        await self.client.send_message(to_chat_id(to), list_message)

    @forwards_client_errors
    async def send_reaction(self, message_id: str, reaction: str) -> None:
        message = await self.client.get_message_by_id(message_id)
        await message.react(reaction)

    @forwards_client_errors
    async def send_poll(
        self,
        to: str,
        question: str,
        options: List[str],
        allow_multiple_answers: bool = False,
        message_secret: Optional[List[int]] = None
    ) -> None:
        poll = Poll(
            question,
            options,
            allow_multiple_answers=allow_multiple_answers,
            message_secret=message_secret or None
        )
        await self.client.send_message(to_chat_id(to), poll)

    @forwards_client_errors
    async def pin_message(self, message_id: str, duration: int = 86400) -> Any:
        message = await self.client.get_message_by_id(message_id)
        return jsonable_encoder(await message.pin(duration))

    @forwards_client_errors
    async def unpin_message(self, message_id: str) -> Any:
        message = await self.client.get_message_by_id(message_id)
        return jsonable_encoder(await message.unpin())

    @forwards_client_errors
    async def send_media(
        self,
        to: str,
        media: MessageMedia,
        caption: Optional[str] = None,
        send_media_as_hd: bool = False,
        is_view_once: bool = False,
        send_audio_as_voice: bool = False
    ) -> None:
        await self.client.send_message(
            to_chat_id(to),
            media,
            caption=caption,
            send_media_as_hd=send_media_as_hd,
            is_view_once=is_view_once,
            send_audio_as_voice=send_audio_as_voice
        )

    @forwards_client_errors
    async def send_vcard(self, to: str, vcard: str) -> None:
        await self.client.send_message(to_chat_id(to), vcard)

    @forwards_client_errors
    async def send_preview(self, to: str, text: str) -> None:
        await self.client.send_message(to_chat_id(to), text, link_preview=True)

    @forwards_client_errors
    async def download_media(self, message_id: str) -> Dict[str, Any]:
        message = await self.client.get_message_by_id(message_id)
        if not message.has_media:
            raise NoMediaError()

        media = await message.download_media()
        if media is None:
            raise ClientOperationError("Media could not be downloaded")

        return {
            "mimetype": media.mimetype,
            "filename": media.filename,
            "data": media.data,
            "data_length": len(media.data),
        }

    @forwards_client_errors
    async def get_message_info(self, message_id: str) -> Dict[str, Any]:
        message = await self.client.get_message_by_id(message_id)
        info = _message_summary(message)
        info.update({
            "is_forwarded": message.is_forwarded,
            "is_status": message.is_status,
            "is_starred": message.is_starred,
            "broadcast": message.broadcast,
        })
        return info

    @forwards_client_errors
    async def get_quoted_message(self, message_id: str) -> Dict[str, Any]:
        message = await self.client.get_message_by_id(message_id)
        if not message.has_quoted_msg:
            raise NoQuotedMessageError()

        quoted = await message.get_quoted_message()
        if quoted is None:
            raise NoQuotedMessageError("Quoted message is no longer available")

        return {
            "id": serialized_id(quoted.id),
            "type": quoted.type,
            "author": quoted.author or quoted.from_,
            "timestamp": quoted.timestamp,
            "has_media": quoted.has_media,
            "body": quoted.body,
        }

    @forwards_client_errors
    async def jump_to_message(self, message_id: str) -> None:
        await self.client.interface.open_chat_window_at(message_id)

    # Chats

    @forwards_client_errors
    async def list_chats(self) -> Dict[str, Any]:
        chats = await self.client.get_chats()
        return {
            "count": len(chats),
            "chats": [
                {
                    "id": serialized_id(chat.id),
                    "name": chat.name,
                    "is_group": chat.is_group,
                    "unread_count": chat.unread_count,
                    "timestamp": chat.timestamp,
                }
                for chat in chats
            ],
        }

    @forwards_client_errors
    async def get_chat(self, chat_id: str) -> Dict[str, Any]:
        chat = await self.client.get_chat_by_id(chat_id)
        detail = {
            "id": serialized_id(chat.id),
            "name": chat.name,
            "is_group": chat.is_group,
            "is_read_only": chat.is_read_only,
            "unread_count": chat.unread_count,
            "timestamp": chat.timestamp,
            "archived": chat.archived,
            "pinned": chat.pinned,
            "is_muted": chat.is_muted,
            "mute_expiration": chat.mute_expiration,
        }
        if chat.is_group:
            detail.update({
                "participants": [_participant_dict(p) for p in chat.participants],
                "description": chat.description,
                "owner": serialized_id(chat.owner),
                "created_at": chat.created_at,
            })
        return detail

    @forwards_client_errors
    async def fetch_messages(self, chat_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        chat = await self.client.get_chat_by_id(chat_id)
        messages = await chat.fetch_messages(limit=limit or self.config.messages_default_limit)
        return [_message_summary(m) for m in messages]

    @forwards_client_errors
    async def pin_chat(self, chat_id: str) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.pin()

    @forwards_client_errors
    async def archive_chat(self, chat_id: str) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.archive()

    @forwards_client_errors
    async def mute_chat(self, chat_id: str, duration: int = 20) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.mute(datetime.now() + timedelta(seconds=duration))

    @forwards_client_errors
    async def send_typing(self, chat_id: str) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.send_state_typing()

    @forwards_client_errors
    async def send_recording(self, chat_id: str) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.send_state_recording()

    @forwards_client_errors
    async def clear_state(self, chat_id: str) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.clear_state()

    @forwards_client_errors
    async def update_labels(self, chat_id: str, label_ids: List[str]) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.change_labels(label_ids)

    @forwards_client_errors
    async def add_labels(self, chat_id: str, new_label_ids: List[str]) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        labels = [label.id for label in await chat.get_labels()]
        for label_id in new_label_ids:
            if label_id not in labels:
                labels.append(label_id)
        await chat.change_labels(labels)

    @forwards_client_errors
    async def remove_labels(self, chat_id: str) -> None:
        chat = await self.client.get_chat_by_id(chat_id)
        await chat.change_labels([])

    @forwards_client_errors
    async def sync_history(self, chat_id: str) -> bool:
        return await self.client.sync_history(chat_id)

    # Groups

    @forwards_client_errors
    async def set_subject(self, chat_id: str, subject: str) -> None:
        chat = await self._get_group(chat_id)
        await chat.set_subject(subject)

    @forwards_client_errors
    async def set_description(self, chat_id: str, description: str) -> None:
        chat = await self._get_group(chat_id)
        await chat.set_description(description)

    @forwards_client_errors
    async def leave_group(self, chat_id: str) -> None:
        chat = await self._get_group(chat_id)
        await chat.leave()

    @forwards_client_errors
    async def join_group(self, invite_code: str) -> None:
        await self.client.accept_invite(invite_code)

    @forwards_client_errors
    async def add_members(self, chat_id: str, participants: List[str]) -> Any:
        group = await self.client.get_chat_by_id(chat_id)
        result = await group.add_participants(to_chat_ids(participants))
        return jsonable_encoder(result)

    @forwards_client_errors
    async def create_group(self, title: str, participants: List[str]) -> Any:
        result = await self.client.create_group(title, to_chat_ids(participants))
        return jsonable_encoder(result)

    @forwards_client_errors
    async def get_group_info(self, chat_id: str) -> Dict[str, Any]:
        chat = await self._get_group(chat_id)
        participants = [_participant_dict(p) for p in chat.participants]
        return {
            "name": chat.name,
            "description": chat.description,
            "created_at": chat.created_at,
            "owner": _owner_user(chat.owner),
            "participant_count": len(participants),
            "participants": participants,
        }

    @forwards_client_errors
    async def approve_membership_requests(
        self,
        chat_id: str,
        requester_ids: Optional[Union[List[str], str]] = None,
        sleep: Optional[Union[List[int], int]] = None
    ) -> Any:
        options = self._membership_options(requester_ids, sleep)
        result = await self.client.approve_group_membership_requests(chat_id, **options)
        return jsonable_encoder(result)

    @forwards_client_errors
    async def reject_membership_requests(
        self,
        chat_id: str,
        requester_ids: Optional[Union[List[str], str]] = None,
        sleep: Optional[Union[List[int], int]] = None
    ) -> Any:
        options = self._membership_options(requester_ids, sleep)
        result = await self.client.reject_group_membership_requests(chat_id, **options)
        return jsonable_encoder(result)

    @staticmethod
    def _membership_options(requester_ids, sleep) -> Dict[str, Any]:
        options = {}
        if requester_ids is not None:
            options["requester_ids"] = requester_ids
        if sleep is not None:
            options["sleep"] = sleep
        return options

    # Account

    @forwards_client_errors
    async def get_info(self) -> Dict[str, Any]:
        info = self.client.info
        if info is None:
            raise ClientOperationError("Client info is not available yet")
        return {
            "pushname": info.pushname,
            "number": info.wid.user,
            "platform": info.platform,
        }

    @forwards_client_errors
    async def set_status(self, status: str) -> None:
        await self.client.set_status(status)

    @forwards_client_errors
    async def get_device_count(self, contact_id: str) -> int:
        return await self.client.get_contact_device_count(contact_id)

    @forwards_client_errors
    async def get_statuses(self) -> List[Any]:
        return jsonable_encoder(await self.client.get_broadcasts())

    @forwards_client_errors
    async def set_background_sync(self, enabled: bool = True) -> bool:
        return await self.client.set_background_sync(enabled)

    @forwards_client_errors
    async def list_contacts(self) -> List[Dict[str, Any]]:
        contacts = await self.client.get_contacts()
        return [
            {
                "id": serialized_id(contact.id),
                "name": contact.name,
                "pushname": contact.pushname,
                "number": contact.number,
                "is_me": contact.is_me,
                "is_user": contact.is_user,
                "is_group": contact.is_group,
                "is_wa_contact": contact.is_wa_contact,
                "is_my_contact": contact.is_my_contact,
                "is_blocked": contact.is_blocked,
            }
            for contact in contacts
        ]
