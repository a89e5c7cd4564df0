"""Membership repository: gabbai and participant rosters of a series."""

from __future__ import annotations

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.series import ParticipantItem
from shiurbank.application.dtos.user import UserResult
from shiurbank.domain.exceptions import DuplicateRecordException
from shiurbank.infrastructure.persistence.models.recording import (
    FavoriteShiur,
    ShiurRecording,
)
from shiurbank.infrastructure.persistence.models.series import Gabbai, ShiurParticipant
from shiurbank.infrastructure.persistence.models.subscription import Subscriber
from shiurbank.infrastructure.persistence.models.user import User
from shiurbank.infrastructure.persistence.repositories.user_repo import user_to_result


class MembershipRepository:
    """Gabbaim (moderators) and participants per series."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def is_gabbai(self, user_id: int, series_id: int) -> bool:
        result = await self.db.execute(
            select(
                exists().where(Gabbai.user_id == user_id, Gabbai.series_id == series_id)
            )
        )
        return bool(result.scalar())

    async def is_participant(self, user_id: int, series_id: int) -> bool:
        result = await self.db.execute(
            select(
                exists().where(
                    ShiurParticipant.user_id == user_id,
                    ShiurParticipant.series_id == series_id,
                )
            )
        )
        return bool(result.scalar())

    async def gabbai_series_ids(self, user_id: int) -> frozenset[int]:
        result = await self.db.execute(
            select(Gabbai.series_id).where(Gabbai.user_id == user_id)
        )
        return frozenset(result.scalars().all())

    async def participant_series_ids(self, user_id: int) -> frozenset[int]:
        result = await self.db.execute(
            select(ShiurParticipant.series_id).where(ShiurParticipant.user_id == user_id)
        )
        return frozenset(result.scalars().all())

    async def add_gabbai(self, user_id: int, series_id: int) -> None:
        """Raises DuplicateRecordException if already a gabbai."""
        await self._insert(Gabbai(user_id=user_id, series_id=series_id), "gabbai")

    async def add_participant(self, user_id: int, series_id: int) -> None:
        """Raises DuplicateRecordException if already a participant."""
        await self._insert(
            ShiurParticipant(user_id=user_id, series_id=series_id), "participant"
        )

    async def _insert(self, row: Gabbai | ShiurParticipant, resource_type: str) -> None:
        self.db.add(row)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise DuplicateRecordException(resource_type) from e

    async def list_gabbaim(self, series_id: int) -> list[UserResult]:
        result = await self.db.execute(
            select(User)
            .join(Gabbai, Gabbai.user_id == User.user_id)
            .where(Gabbai.series_id == series_id)
            .order_by(User.lname, User.fname)
        )
        return [user_to_result(u) for u in result.scalars().all()]

    async def list_participants(self, series_id: int) -> list[ParticipantItem]:
        """Participants ordered by last name, first name, flagged when also a gabbai."""
        is_gabbai = (
            exists()
            .where(Gabbai.user_id == User.user_id, Gabbai.series_id == series_id)
            .label("is_gabbai")
        )
        result = await self.db.execute(
            select(User, is_gabbai)
            .join(ShiurParticipant, ShiurParticipant.user_id == User.user_id)
            .where(ShiurParticipant.series_id == series_id)
            .order_by(User.lname, User.fname)
        )
        return [
            ParticipantItem(user=user_to_result(row[0]), is_gabbai=bool(row.is_gabbai))
            for row in result.all()
        ]

    async def remove_participant(self, user_id: int, series_id: int) -> bool:
        """Remove the user from the series: gabbai role, subscriptions, favorites, roster row.

        Returns False if the user was not a participant.
        """
        await self.db.execute(
            delete(Gabbai).where(Gabbai.user_id == user_id, Gabbai.series_id == series_id)
        )
        await self.db.execute(
            delete(Subscriber).where(
                Subscriber.user_id == user_id, Subscriber.series_id == series_id
            )
        )
        recording_ids = select(ShiurRecording.recording_id).where(
            ShiurRecording.series_id == series_id
        )
        await self.db.execute(
            delete(FavoriteShiur).where(
                FavoriteShiur.user_id == user_id,
                FavoriteShiur.recording_id.in_(recording_ids),
            )
        )
        result = await self.db.execute(
            delete(ShiurParticipant).where(
                ShiurParticipant.user_id == user_id,
                ShiurParticipant.series_id == series_id,
            )
        )
        return result.rowcount > 0
