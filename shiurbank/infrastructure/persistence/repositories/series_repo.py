"""Series repository: creation, joined read-models, deletion with child rows."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.series import SeriesCreate, SeriesDetail
from shiurbank.infrastructure.persistence.models.catalog import Rebbi, Topic
from shiurbank.infrastructure.persistence.models.recording import (
    FavoriteShiur,
    ShiurRecording,
)
from shiurbank.infrastructure.persistence.models.series import (
    Gabbai,
    PendingParticipant,
    SeriesPendingApproval,
    ShiurParticipant,
    ShiurSeries,
)
from shiurbank.infrastructure.persistence.models.subscription import Subscriber
from shiurbank.infrastructure.persistence.models.user import Institution
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository
from shiurbank.infrastructure.persistence.repositories.catalog_repo import (
    rebbi_full_name,
)


def _detail_select() -> Any:
    return (
        select(
            ShiurSeries,
            rebbi_full_name().label("rebbi_name"),
            Topic.name.label("topic_name"),
            Institution.name.label("institution_name"),
        )
        .join(Rebbi, Rebbi.rebbi_id == ShiurSeries.rebbi_id)
        .join(Topic, Topic.topic_id == ShiurSeries.topic_id)
        .join(Institution, Institution.inst_id == ShiurSeries.inst_id)
    )


def _row_to_detail(row: Any) -> SeriesDetail:
    s: ShiurSeries = row[0]
    return SeriesDetail(
        series_id=s.series_id,
        rebbi_id=s.rebbi_id,
        topic_id=s.topic_id,
        inst_id=s.inst_id,
        description=s.description,
        requires_permission=bool(s.requires_permission),
        sns_topic_arn=s.sns_topic_arn,
        rebbi_name=row.rebbi_name,
        topic_name=row.topic_name,
        institution_name=row.institution_name,
    )


class SeriesRepository(BaseRepository[ShiurSeries]):
    """shiur_series plus joined rebbi/topic/institution names."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ShiurSeries)

    async def get_detail(self, series_id: int) -> SeriesDetail | None:
        result = await self.db.execute(
            _detail_select().where(ShiurSeries.series_id == series_id)
        )
        row = result.first()
        return _row_to_detail(row) if row else None

    async def get_details(self, series_ids: list[int]) -> list[SeriesDetail]:
        if not series_ids:
            return []
        result = await self.db.execute(
            _detail_select()
            .where(ShiurSeries.series_id.in_(series_ids))
            .order_by(Topic.name, ShiurSeries.series_id)
        )
        return [_row_to_detail(r) for r in result.all()]

    async def create_series(self, data: SeriesCreate) -> int:
        series = await self.create(
            ShiurSeries(
                rebbi_id=data.rebbi_id,
                topic_id=data.topic_id,
                inst_id=data.inst_id,
                description=data.description,
                requires_permission=data.requires_permission,
            )
        )
        return series.series_id

    async def set_topic_arn(self, series_id: int, topic_arn: str) -> None:
        await self.db.execute(
            update(ShiurSeries)
            .where(ShiurSeries.series_id == series_id)
            .values(sns_topic_arn=topic_arn)
        )

    async def get_topic_arn(self, series_id: int) -> str | None:
        result = await self.db.execute(
            select(ShiurSeries.sns_topic_arn).where(ShiurSeries.series_id == series_id)
        )
        return result.scalar_one_or_none()

    async def user_moderates_rebbi(
        self, user_id: int, rebbi_id: int, exclude_series_id: int | None = None
    ) -> bool:
        """True if user is a gabbai of some series (other than exclude_series_id) by this rebbi."""
        stmt = (
            select(Gabbai.gabbai_id)
            .join(ShiurSeries, ShiurSeries.series_id == Gabbai.series_id)
            .where(Gabbai.user_id == user_id, ShiurSeries.rebbi_id == rebbi_id)
        )
        if exclude_series_id is not None:
            stmt = stmt.where(ShiurSeries.series_id != exclude_series_id)
        result = await self.db.execute(select(exists(stmt)))
        return bool(result.scalar())

    async def delete_series(self, series_id: int) -> bool:
        """Delete the series and every row that hangs off it. Returns False if it did not exist."""
        recording_ids = select(ShiurRecording.recording_id).where(
            ShiurRecording.series_id == series_id
        )
        await self.db.execute(
            delete(FavoriteShiur).where(FavoriteShiur.recording_id.in_(recording_ids))
        )
        for model in (
            ShiurRecording,
            Subscriber,
            Gabbai,
            ShiurParticipant,
            PendingParticipant,
            SeriesPendingApproval,
        ):
            await self.db.execute(delete(model).where(model.series_id == series_id))
        result = await self.db.execute(
            delete(ShiurSeries).where(ShiurSeries.series_id == series_id)
        )
        return result.rowcount > 0
