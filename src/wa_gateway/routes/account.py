"""Endpoints about the logged-in account and its contacts."""

from typing import Optional
from fastapi import APIRouter, Depends

from ..dependencies import get_whatsapp_service
from ..models.requests import ChangeSyncRequest, SetStatusRequest
from ..models.responses import (
    ActionResponse,
    ChangeSyncResponse,
    ClientInfoResponse,
    ContactInfo,
    ContactListResponse,
    DeviceCountResponse,
    StatusesResponse,
)
from ..services.whatsapp import WhatsAppService

router = APIRouter(tags=["account"])


@router.get("/info", response_model=ClientInfoResponse)
async def get_info(service: WhatsAppService = Depends(get_whatsapp_service)):
    """Name, number and platform of the connected account."""
    info = await service.get_info()
    return ClientInfoResponse(**info)


@router.post("/set-status", response_model=ActionResponse)
async def set_status(
    request: SetStatusRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Set the account's about text."""
    await service.set_status(request.status)
    return ActionResponse()


@router.get("/contacts", response_model=ContactListResponse)
async def list_contacts(service: WhatsAppService = Depends(get_whatsapp_service)):
    contacts = await service.list_contacts()
    return ContactListResponse(contacts=[ContactInfo(**c) for c in contacts])


@router.get("/device-count/{contact_id}", response_model=DeviceCountResponse)
async def get_device_count(
    contact_id: str,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    device_count = await service.get_device_count(contact_id)
    return DeviceCountResponse(device_count=device_count)


@router.get("/statuses", response_model=StatusesResponse)
async def get_statuses(service: WhatsAppService = Depends(get_whatsapp_service)):
    """Status updates (broadcasts) posted by contacts."""
    statuses = await service.get_statuses()
    return StatusesResponse(statuses=statuses)


@router.post("/change-sync", response_model=ChangeSyncResponse)
async def change_sync(
    request: Optional[ChangeSyncRequest] = None,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Enable or disable background sync; enables it when no body is sent."""
    enabled = request.enabled if request is not None else True
    background_sync = await service.set_background_sync(enabled)
    return ChangeSyncResponse(background_sync=background_sync)
