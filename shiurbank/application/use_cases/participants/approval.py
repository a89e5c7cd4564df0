"""Participant approval workflow: apply, list pending, approve, reject.

States per (user, series): no-record -> pending -> participant, or
no-record -> participant directly when the series is open. Approve deletes
the pending row and inserts the roster row in the request transaction, so
either both happen or neither does.
"""

from __future__ import annotations

import logging

from shiurbank.application.dtos.series import (
    ApplicationInfo,
    ApplyResult,
    PendingApplicant,
)
from shiurbank.application.interfaces.repositories import (
    IApplicationRepository,
    IMembershipRepository,
    ISeriesRepository,
)
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.domain.enums import MembershipState
from shiurbank.domain.exceptions import (
    BusinessRuleException,
    DuplicateRecordException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

ALREADY_PARTICIPANT = "You are already a participant in this series"
ALREADY_PENDING = "You already have a pending application for this series"
NO_PENDING_APPLICATION = "No pending application found for this user"


class ParticipantApprovalService:
    def __init__(
        self,
        series_repo: ISeriesRepository,
        membership_repo: IMembershipRepository,
        application_repo: IApplicationRepository,
    ) -> None:
        self.series_repo = series_repo
        self.membership_repo = membership_repo
        self.application_repo = application_repo

    async def membership_state(self, user_id: int, series_id: int) -> MembershipState:
        if await self.membership_repo.is_participant(user_id, series_id):
            return MembershipState.PARTICIPANT
        if await self.application_repo.has_pending(user_id, series_id):
            return MembershipState.PENDING
        return MembershipState.NO_RECORD

    async def application_info(
        self, ctx: AuthorizationContext, series_id: int
    ) -> ApplicationInfo:
        series = await self.series_repo.get_detail(series_id)
        if series is None:
            raise ResourceNotFoundException("series", series_id, "Series not found")
        state = await self.membership_state(ctx.user_id, series_id)
        return ApplicationInfo(
            series=series,
            gabbaim=await self.membership_repo.list_gabbaim(series_id),
            is_participant=state is MembershipState.PARTICIPANT,
            has_pending_application=state is MembershipState.PENDING,
        )

    async def apply(self, ctx: AuthorizationContext, series_id: int) -> ApplyResult:
        """Join an open series at once, or file a pending application for a restricted one.

        Raises:
            ResourceNotFoundException: series does not exist.
            BusinessRuleException: already a participant, or already pending
                (including a concurrent duplicate caught by the unique constraint).
        """
        series = await self.series_repo.get_detail(series_id)
        if series is None:
            raise ResourceNotFoundException("series", series_id, "Series not found")

        state = await self.membership_state(ctx.user_id, series_id)
        if state is MembershipState.PARTICIPANT:
            raise BusinessRuleException(ALREADY_PARTICIPANT)
        if state is MembershipState.PENDING:
            raise BusinessRuleException(ALREADY_PENDING)

        if not series.requires_permission:
            try:
                await self.membership_repo.add_participant(ctx.user_id, series_id)
            except DuplicateRecordException as e:
                raise BusinessRuleException(ALREADY_PARTICIPANT) from e
            logger.info("User %s auto-approved into series %s", ctx.user_id, series_id)
            return ApplyResult(auto_approved=True, message="You have been added to the series")

        try:
            await self.application_repo.create_pending(ctx.user_id, series_id)
        except DuplicateRecordException as e:
            raise BusinessRuleException(ALREADY_PENDING) from e
        logger.info("User %s applied to series %s", ctx.user_id, series_id)
        return ApplyResult(
            auto_approved=False,
            message="Your application has been submitted and is pending approval",
        )

    async def list_pending(
        self, ctx: AuthorizationContext, series_id: int
    ) -> list[PendingApplicant]:
        ctx.require_gabbai(
            series_id, "You are not authorized to view pending participants for this series"
        )
        return await self.application_repo.list_for_series(series_id)

    async def approve(
        self, ctx: AuthorizationContext, series_id: int, user_id: int | None
    ) -> None:
        """Move the applicant from pending to the participant roster."""
        ctx.require_gabbai(
            series_id, "You are not authorized to approve participants for this series"
        )
        if user_id is None:
            raise ValidationException("User ID is required", field="userId")
        if not await self.application_repo.delete_pending(user_id, series_id):
            raise ResourceNotFoundException("application", user_id, NO_PENDING_APPLICATION)
        if not await self.membership_repo.is_participant(user_id, series_id):
            await self.membership_repo.add_participant(user_id, series_id)
        logger.info("Gabbai %s approved user %s into series %s", ctx.user_id, user_id, series_id)

    async def reject(
        self, ctx: AuthorizationContext, series_id: int, user_id: int | None
    ) -> None:
        ctx.require_gabbai(
            series_id, "You are not authorized to reject participants for this series"
        )
        if user_id is None:
            raise ValidationException("User ID is required", field="userId")
        if not await self.application_repo.delete_pending(user_id, series_id):
            raise ResourceNotFoundException("application", user_id, NO_PENDING_APPLICATION)
        logger.info("Gabbai %s rejected user %s for series %s", ctx.user_id, user_id, series_id)
