"""Endpoints for reading and managing chats."""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_whatsapp_service
from ..models.requests import (
    AddLabelsRequest,
    ChatRequest,
    MuteChatRequest,
    UpdateLabelsRequest,
)
from ..models.responses import (
    ActionResponse,
    ChatDetail,
    ChatListResponse,
    MessageListResponse,
    MessageSummary,
    SyncHistoryResponse,
)
from ..services.whatsapp import WhatsAppService

router = APIRouter(tags=["chats"])


@router.get("/chats", response_model=ChatListResponse)
async def list_chats(service: WhatsAppService = Depends(get_whatsapp_service)):
    """List all chats known to the session."""
    result = await service.list_chats()
    return ChatListResponse(**result)


@router.get("/chat/{chat_id}", response_model=ChatDetail, response_model_exclude_unset=True)
async def get_chat(
    chat_id: str,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """
    Get chat information.

    Group chats additionally report participants, description, owner and
    creation time.
    """
    detail = await service.get_chat(chat_id)
    return ChatDetail(**detail)


@router.get("/messages/{chat_id}", response_model=MessageListResponse)
async def list_messages(
    chat_id: str,
    limit: Optional[int] = Query(None, gt=0, description="Number of messages to fetch"),
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Fetch the most recent messages of a chat."""
    messages = await service.fetch_messages(chat_id, limit)
    return MessageListResponse(messages=[MessageSummary(**m) for m in messages])


@router.post("/pin-chat", response_model=ActionResponse)
async def pin_chat(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.pin_chat(request.chat_id)
    return ActionResponse()


@router.post("/archive-chat", response_model=ActionResponse)
async def archive_chat(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.archive_chat(request.chat_id)
    return ActionResponse()


@router.post("/mute-chat", response_model=ActionResponse)
async def mute_chat(
    request: MuteChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Mute a chat for ``duration`` seconds."""
    await service.mute_chat(request.chat_id, request.duration)
    return ActionResponse()


@router.post("/send-typing", response_model=ActionResponse)
async def send_typing(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.send_typing(request.chat_id)
    return ActionResponse()


@router.post("/send-recording", response_model=ActionResponse)
async def send_recording(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.send_recording(request.chat_id)
    return ActionResponse()


@router.post("/clear-state", response_model=ActionResponse)
async def clear_state(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Stop showing the typing or recording indicator."""
    await service.clear_state(request.chat_id)
    return ActionResponse()


@router.post("/update-labels", response_model=ActionResponse)
async def update_labels(
    request: UpdateLabelsRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Replace the chat's labels."""
    await service.update_labels(request.chat_id, request.label_ids)
    return ActionResponse()


@router.post("/add-labels", response_model=ActionResponse)
async def add_labels(
    request: AddLabelsRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Add labels to the chat, keeping the ones it already has."""
    await service.add_labels(request.chat_id, request.new_label_ids)
    return ActionResponse()


@router.post("/remove-labels", response_model=ActionResponse)
async def remove_labels(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Remove all labels from the chat."""
    await service.remove_labels(request.chat_id)
    return ActionResponse()


@router.post("/sync-history", response_model=SyncHistoryResponse)
async def sync_history(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    is_synced = await service.sync_history(request.chat_id)
    return SyncHistoryResponse(is_synced=is_synced)
