"""Group management endpoints."""

from fastapi import APIRouter, Depends

from ..dependencies import get_whatsapp_service
from ..models.requests import (
    AddMembersRequest,
    ChatRequest,
    CreateGroupRequest,
    JoinGroupRequest,
    MembershipRequestsRequest,
    SetDescriptionRequest,
    SetSubjectRequest,
)
from ..models.responses import ActionResponse, GroupInfoResponse, ResultResponse
from ..services.whatsapp import WhatsAppService

router = APIRouter(tags=["groups"])


@router.post("/set-subject", response_model=ActionResponse)
async def set_subject(
    request: SetSubjectRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Rename a group."""
    await service.set_subject(request.chat_id, request.subject)
    return ActionResponse()


@router.post("/set-description", response_model=ActionResponse)
async def set_description(
    request: SetDescriptionRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.set_description(request.chat_id, request.description)
    return ActionResponse()


@router.post("/leave-group", response_model=ActionResponse)
async def leave_group(
    request: ChatRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    await service.leave_group(request.chat_id)
    return ActionResponse()


@router.post("/join-group", response_model=ActionResponse)
async def join_group(
    request: JoinGroupRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Join a group using the code from its invite link."""
    await service.join_group(request.invite_code)
    return ActionResponse()


@router.post("/add-members", response_model=ResultResponse)
async def add_members(
    request: AddMembersRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    result = await service.add_members(request.chat_id, request.participants)
    return ResultResponse(result=result)


@router.post("/create-group", response_model=ResultResponse)
async def create_group(
    request: CreateGroupRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Create a group with the given participants."""
    result = await service.create_group(request.title, request.participants)
    return ResultResponse(result=result)


@router.get("/group-info/{chat_id}", response_model=GroupInfoResponse)
async def get_group_info(
    chat_id: str,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    info = await service.get_group_info(chat_id)
    return GroupInfoResponse(**info)


@router.post("/approve-request", response_model=ResultResponse)
async def approve_request(
    request: MembershipRequestsRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """
    Approve pending membership requests.

    Without ``requesterIds`` every pending request of the group is approved.
    """
    result = await service.approve_membership_requests(
        request.chat_id,
        requester_ids=request.requester_ids,
        sleep=request.sleep
    )
    return ResultResponse(result=result)


@router.post("/reject-request", response_model=ResultResponse)
async def reject_request(
    request: MembershipRequestsRequest,
    service: WhatsAppService = Depends(get_whatsapp_service)
):
    """Reject pending membership requests, all of them when no ids are given."""
    result = await service.reject_membership_requests(
        request.chat_id,
        requester_ids=request.requester_ids,
        sleep=request.sleep
    )
    return ResultResponse(result=result)
