"""Endpoints for sending and managing messages."""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from wa_client import MessageMedia

from ..dependencies import get_config, get_whatsapp_service
from ..errors import UploadTooLargeError
from ..models.config import APIConfig
from ..models.requests import (
    DeleteMessageRequest,
    EditMessageRequest,
    MentionGroupsRequest,
    MentionUsersRequest,
    MessageRequest,
    PinMessageRequest,
    ReactionRequest,
    ReplyMessageRequest,
    SendButtonsRequest,
    SendListRequest,
    SendLocationRequest,
    SendMessageRequest,
    SendPollRequest,
    SendPreviewRequest,
    SendVCardRequest,
)
from ..models.responses import (
    ActionResponse,
    MediaResponse,
    MessageDetail,
    QuotedMessageResponse,
    ResultResponse,
    SendMessageResponse,
)
from ..services.whatsapp import WhatsAppService

router = APIRouter(tags=["messages"])


@router.post("/send-message", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Send a text message to a phone number or chat id."""
    result = await service.send_message(request.to, request.message)
    return SendMessageResponse(**result)


@router.post("/reply-message", response_model=ActionResponse)
async def reply_message(
    request: ReplyMessageRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Reply to a specific message, quoting it."""
    await service.reply_message(request.message_id, request.reply)
    return ActionResponse()


@router.post("/send-location", response_model=ActionResponse)
async def send_location(
    request: SendLocationRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """
    Send a map pin.

    ``latitude`` and ``longitude`` are required, but 0 is a valid value for
    either (a point on the equator or the prime meridian).
    """
    await service.send_location(
        request.to,
        request.latitude,
        request.longitude,
        name=request.name,
        address=request.address,
        url=request.url
    )
    return ActionResponse()


@router.post("/mention-users", response_model=ActionResponse)
async def mention_users(
    request: MentionUsersRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.mention_users(request.chat_id, request.message, request.mentions)
    return ActionResponse()


@router.post("/mention-groups", response_model=ActionResponse)
async def mention_groups(
    request: MentionGroupsRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    if isinstance(request.group_mentions, list):
        group_mentions = [mention.model_dump() for mention in request.group_mentions]
    else:
        group_mentions = request.group_mentions.model_dump()
    await service.mention_groups(request.chat_id, request.message, group_mentions)
    return ActionResponse()


@router.post("/delete-message", response_model=ActionResponse)
async def delete_message(
    request: DeleteMessageRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Delete one of our own messages, for everyone by default."""
    await service.delete_message(request.message_id, request.for_everyone)
    return ActionResponse()


@router.post("/edit-message", response_model=ActionResponse)
async def edit_message(
    request: EditMessageRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.edit_message(request.message_id, request.new_text)
    return ActionResponse()


@router.post("/send-buttons", response_model=ActionResponse)
async def send_buttons(
    request: SendButtonsRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.send_buttons(
        request.to,
        request.body,
        request.buttons,
        title=request.title,
        footer=request.footer
    )
    return ActionResponse()


@router.post("/send-list", response_model=ActionResponse)
async def send_list(
    request: SendListRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.send_list(
        request.to,
        request.body,
        request.button_text,
        request.sections,
        title=request.title,
        footer=request.footer
    )
    return ActionResponse()


@router.post("/send-reaction", response_model=ActionResponse)
async def send_reaction(
    request: ReactionRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.send_reaction(request.message_id, request.reaction)
    return ActionResponse()


@router.post("/send-poll", response_model=ActionResponse)
async def send_poll(
    request: SendPollRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.send_poll(
        request.to,
        request.question,
        request.options,
        allow_multiple_answers=request.allow_multiple_answers,
        message_secret=request.message_secret
    )
    return ActionResponse()


@router.post("/pin-message", response_model=ResultResponse)
async def pin_message(
    request: PinMessageRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Pin a message for ``duration`` seconds (24 hours by default)."""
    result = await service.pin_message(request.message_id, request.duration)
    return ResultResponse(result=result)


@router.post("/unpin-message", response_model=ResultResponse)
async def unpin_message(
    request: MessageRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    result = await service.unpin_message(request.message_id)
    return ResultResponse(result=result)


@router.post("/send-media", response_model=ActionResponse)
async def send_media(
    media: UploadFile = File(..., description="File to send"),
    to: str = Form(..., min_length=1),
    caption: Optional[str] = Form(None),
    send_media_as_hd: bool = Form(False, alias="sendMediaAsHd"),
    is_view_once: bool = Form(False, alias="isViewOnce"),
    send_audio_as_voice: bool = Form(False, alias="sendAudioAsVoice"),
    config: APIConfig = Depends(get_config),
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """
    Send an uploaded file as a media message.

    The upload is sent as multipart form data with the file in the ``media``
    field. Images, video, audio and documents are accepted; the file's
    content type decides how WhatsApp renders it.
    """
    content = await media.read()
    size_mb = len(content) / (1024 * 1024)
    if size_mb > config.max_upload_size_mb:
        raise UploadTooLargeError(
            f"File size exceeds limit of {config.max_upload_size_mb}MB",
            details=f"Received file size: {size_mb:.2f}MB"
        )

    message_media = MessageMedia.from_bytes(
        content,
        mimetype=media.content_type or "application/octet-stream",
        filename=media.filename
    )
    await service.send_media(
        to,
        message_media,
        caption=caption,
        send_media_as_hd=send_media_as_hd,
        is_view_once=is_view_once,
        send_audio_as_voice=send_audio_as_voice
    )
    return ActionResponse()


@router.post("/send-vcard", response_model=ActionResponse)
async def send_vcard(
    request: SendVCardRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.send_vcard(request.to, request.v_card)
    return ActionResponse()


@router.post("/send-preview", response_model=ActionResponse)
async def send_preview(
    request: SendPreviewRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Send a text message with a link preview."""
    await service.send_preview(request.to, request.text)
    return ActionResponse()


@router.get("/download-media/{message_id}", response_model=MediaResponse)
async def download_media(
    message_id: str,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Download a message's media, returned base64 encoded."""
    media = await service.download_media(message_id)
    return MediaResponse(**media)


@router.get("/message-info/{message_id}", response_model=MessageDetail)
async def get_message_info(
    message_id: str,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    info = await service.get_message_info(message_id)
    return MessageDetail(**info)


@router.get("/quoted-message/{message_id}", response_model=QuotedMessageResponse)
async def get_quoted_message(
    message_id: str,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    quoted = await service.get_quoted_message(message_id)
    return QuotedMessageResponse(**quoted)


@router.post("/jump-to-message", response_model=ActionResponse)
async def jump_to_message(
    request: MessageRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Open the chat window scrolled to the given message."""
    await service.jump_to_message(request.message_id)
    return ActionResponse()
