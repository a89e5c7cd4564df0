"""Participant approval API: application info, apply, and the gabbai's approve/reject queue."""

from typing import Annotated

from fastapi import APIRouter, Depends

from shiurbank.api.dependencies import AuthContext, get_participant_approval_service
from shiurbank.application.use_cases import ParticipantApprovalService
from shiurbank.schemas.base import MessageResponse, UserIdRequest
from shiurbank.schemas.series import (
    ApplicationInfoResponse,
    ApplyResponse,
    PendingParticipant,
    PendingParticipantsResponse,
    SeriesInfo,
    UserSummary,
)

router = APIRouter()

ApprovalService = Annotated[
    ParticipantApprovalService, Depends(get_participant_approval_service)
]


@router.get("/{series_id}/application-info", response_model=ApplicationInfoResponse)
async def application_info(series_id: int, ctx: AuthContext, approval_svc: ApprovalService):
    info = await approval_svc.application_info(ctx, series_id)
    return ApplicationInfoResponse(
        series_info=SeriesInfo.from_detail(info.series),
        gabbaim=[UserSummary.from_result(g) for g in info.gabbaim],
        is_participant=info.is_participant,
        has_pending_application=info.has_pending_application,
    )


@router.post("/{series_id}/apply", response_model=ApplyResponse)
async def apply(series_id: int, ctx: AuthContext, approval_svc: ApprovalService):
    """Open series: joined at once. Restricted series: pending until a gabbai approves."""
    result = await approval_svc.apply(ctx, series_id)
    return ApplyResponse(auto_approved=result.auto_approved, message=result.message)


@router.get("/{series_id}/pending-participants", response_model=PendingParticipantsResponse)
async def pending_participants(
    series_id: int, ctx: AuthContext, approval_svc: ApprovalService
):
    applicants = await approval_svc.list_pending(ctx, series_id)
    return PendingParticipantsResponse(
        pending_participants=[PendingParticipant.from_applicant(a) for a in applicants]
    )


@router.post("/{series_id}/approve-participant", response_model=MessageResponse)
async def approve_participant(
    series_id: int,
    ctx: AuthContext,
    approval_svc: ApprovalService,
    body: UserIdRequest | None = None,
):
    await approval_svc.approve(ctx, series_id, body.user_id if body else None)
    return MessageResponse(message="Participant approved successfully")


@router.post("/{series_id}/reject-participant", response_model=MessageResponse)
async def reject_participant(
    series_id: int,
    ctx: AuthContext,
    approval_svc: ApprovalService,
    body: UserIdRequest | None = None,
):
    await approval_svc.reject(ctx, series_id, body.user_id if body else None)
    return MessageResponse(message="Participant rejected successfully")
