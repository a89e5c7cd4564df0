"""Participant application repository (users_pending_approval_to_series)."""

from __future__ import annotations

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.series import PendingApplicant
from shiurbank.domain.exceptions import DuplicateRecordException
from shiurbank.infrastructure.persistence.models.series import PendingParticipant
from shiurbank.infrastructure.persistence.models.user import User
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository
from shiurbank.infrastructure.persistence.repositories.user_repo import user_to_result


class ApplicationRepository(BaseRepository[PendingParticipant]):
    """Pending applications; rows are only ever inserted or deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PendingParticipant)

    async def has_pending(self, user_id: int, series_id: int) -> bool:
        result = await self.db.execute(
            select(
                exists().where(
                    PendingParticipant.user_id == user_id,
                    PendingParticipant.series_id == series_id,
                )
            )
        )
        return bool(result.scalar())

    async def create_pending(self, user_id: int, series_id: int) -> int:
        """Raises DuplicateRecordException if the user already has a pending row."""
        try:
            row = await self.create(
                PendingParticipant(user_id=user_id, series_id=series_id)
            )
        except IntegrityError as e:
            raise DuplicateRecordException("application") from e
        return row.pending_id

    async def delete_pending(self, user_id: int, series_id: int) -> bool:
        """Delete the user's pending row for the series. Returns False if there was none."""
        result = await self.db.execute(
            delete(PendingParticipant).where(
                PendingParticipant.user_id == user_id,
                PendingParticipant.series_id == series_id,
            )
        )
        return result.rowcount > 0

    async def list_for_series(self, series_id: int) -> list[PendingApplicant]:
        result = await self.db.execute(
            select(PendingParticipant, User)
            .join(User, User.user_id == PendingParticipant.user_id)
            .where(PendingParticipant.series_id == series_id)
            .order_by(PendingParticipant.created_at, PendingParticipant.pending_id)
        )
        return [
            PendingApplicant(
                pending_id=p.pending_id,
                user=user_to_result(u),
                applied_at=p.created_at,
            )
            for p, u in result.all()
        ]

    async def pending_series_ids(self, user_id: int) -> frozenset[int]:
        result = await self.db.execute(
            select(PendingParticipant.series_id).where(PendingParticipant.user_id == user_id)
        )
        return frozenset(result.scalars().all())
