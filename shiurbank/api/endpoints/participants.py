"""Participant management API: roster listing, removal, promotion to gabbai."""

from typing import Annotated

from fastapi import APIRouter, Depends

from shiurbank.api.dependencies import AuthContext, get_participant_management_service
from shiurbank.application.use_cases import ParticipantManagementService
from shiurbank.schemas.base import MessageResponse, UserIdRequest
from shiurbank.schemas.series import Participant, ParticipantsResponse

router = APIRouter()

ManagementService = Annotated[
    ParticipantManagementService, Depends(get_participant_management_service)
]


@router.get("/{series_id}/participants", response_model=ParticipantsResponse)
async def list_participants(
    series_id: int, ctx: AuthContext, management_svc: ManagementService
):
    participants = await management_svc.list_participants(ctx, series_id)
    return ParticipantsResponse(participants=[Participant.from_item(p) for p in participants])


@router.post("/{series_id}/remove-participant", response_model=MessageResponse)
async def remove_participant(
    series_id: int,
    ctx: AuthContext,
    management_svc: ManagementService,
    body: UserIdRequest | None = None,
):
    await management_svc.remove_participant(ctx, series_id, body.user_id if body else None)
    return MessageResponse(message="Participant removed successfully")


@router.post("/{series_id}/add-gabbai", response_model=MessageResponse)
async def add_gabbai(
    series_id: int,
    ctx: AuthContext,
    management_svc: ManagementService,
    body: UserIdRequest | None = None,
):
    await management_svc.add_gabbai(ctx, series_id, body.user_id if body else None)
    return MessageResponse(message="Gabbai added successfully")
