"""Participant management by a series' gabbaim: roster, removal, promotion to gabbai."""

from __future__ import annotations

import logging

from shiurbank.application.dtos.series import ParticipantItem
from shiurbank.application.interfaces.repositories import IMembershipRepository
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.domain.exceptions import (
    BusinessRuleException,
    DuplicateRecordException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class ParticipantManagementService:
    def __init__(self, membership_repo: IMembershipRepository) -> None:
        self.membership_repo = membership_repo

    async def list_participants(
        self, ctx: AuthorizationContext, series_id: int
    ) -> list[ParticipantItem]:
        ctx.require_gabbai(series_id, "You must be a gabbai to view participants")
        return await self.membership_repo.list_participants(series_id)

    async def remove_participant(
        self, ctx: AuthorizationContext, series_id: int, user_id: int | None
    ) -> None:
        """Remove the user's roster, gabbai, subscription and favorite rows for the series."""
        ctx.require_gabbai(series_id, "You must be a gabbai to remove participants")
        if user_id is None:
            raise ValidationException("User ID is required", field="userId")
        if user_id == ctx.user_id:
            raise BusinessRuleException("You cannot remove yourself from the series")
        if not await self.membership_repo.is_participant(user_id, series_id):
            raise ResourceNotFoundException(
                "participant", user_id, "User is not a participant in this series"
            )
        await self.membership_repo.remove_participant(user_id, series_id)
        logger.info("Gabbai %s removed user %s from series %s", ctx.user_id, user_id, series_id)

    async def add_gabbai(
        self, ctx: AuthorizationContext, series_id: int, user_id: int | None
    ) -> None:
        ctx.require_gabbai(series_id, "You must be a gabbai to add additional gabbaim")
        if user_id is None:
            raise ValidationException("User ID is required", field="userId")
        if not await self.membership_repo.is_participant(user_id, series_id):
            raise BusinessRuleException(
                "User must be a participant before being added as a gabbai"
            )
        if await self.membership_repo.is_gabbai(user_id, series_id):
            raise BusinessRuleException("User is already a gabbai for this series")
        try:
            await self.membership_repo.add_gabbai(user_id, series_id)
        except DuplicateRecordException as e:
            raise BusinessRuleException("User is already a gabbai for this series") from e
        logger.info("Gabbai %s promoted user %s in series %s", ctx.user_id, user_id, series_id)
