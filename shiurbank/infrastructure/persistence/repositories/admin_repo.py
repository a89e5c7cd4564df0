"""Admin repository: admin roster and the series verification queue."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.infrastructure.persistence.models.series import SeriesPendingApproval
from shiurbank.infrastructure.persistence.models.user import Admin
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository


class AdminRepository(BaseRepository[Admin]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Admin)

    async def is_admin(self, user_id: int) -> bool:
        result = await self.db.execute(select(exists().where(Admin.user_id == user_id)))
        return bool(result.scalar())

    async def add_admin(self, user_id: int) -> None:
        await self.create(Admin(user_id=user_id))

    async def admin_user_ids(self) -> frozenset[int]:
        result = await self.db.execute(select(Admin.user_id))
        return frozenset(result.scalars().all())

    async def add_series_pending(self, series_id: int) -> int:
        row = SeriesPendingApproval(series_id=series_id)
        self.db.add(row)
        await self.db.flush()
        return row.pending_id

    async def list_series_pending(self) -> list[tuple[int, int, datetime | None]]:
        """(pending_id, series_id, created_at), oldest first."""
        result = await self.db.execute(
            select(
                SeriesPendingApproval.pending_id,
                SeriesPendingApproval.series_id,
                SeriesPendingApproval.created_at,
            ).order_by(SeriesPendingApproval.created_at, SeriesPendingApproval.pending_id)
        )
        return [(r.pending_id, r.series_id, r.created_at) for r in result.all()]

    async def delete_series_pending(self, pending_id: int) -> bool:
        result = await self.db.execute(
            delete(SeriesPendingApproval).where(
                SeriesPendingApproval.pending_id == pending_id
            )
        )
        return result.rowcount > 0
