"""Search repository: candidate series and recordings for a parsed query.

One query per result type. Each matched keyword/name contributes one
case-insensitive substring condition; conditions are OR'ed, and the access
guard (public series, or the user is on the roster) is always AND'ed.
has_access is computed in the same statement.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.domain.entities.search import ParsedQuery, RecordingHit, SeriesHit
from shiurbank.infrastructure.persistence.models.catalog import Rebbi, Topic
from shiurbank.infrastructure.persistence.models.recording import ShiurRecording
from shiurbank.infrastructure.persistence.models.series import (
    Gabbai,
    ShiurParticipant,
    ShiurSeries,
)
from shiurbank.infrastructure.persistence.models.user import Institution
from shiurbank.infrastructure.persistence.repositories.catalog_repo import (
    rebbi_full_name,
)


def _contains(column: Any, term: str) -> Any:
    """Case-insensitive substring match; LIKE wildcards in term are escaped."""
    return func.lower(column).contains(term, autoescape=True)


def _has_access(user_id: int) -> Any:
    return or_(
        exists().where(
            ShiurParticipant.series_id == ShiurSeries.series_id,
            ShiurParticipant.user_id == user_id,
        ),
        exists().where(
            Gabbai.series_id == ShiurSeries.series_id,
            Gabbai.user_id == user_id,
        ),
    )


def _name_conditions(parsed: ParsedQuery, rebbi: Any) -> list[Any]:
    conditions = [_contains(rebbi, name) for name in sorted(parsed.rebbi_names)]
    conditions += [_contains(Topic.name, name) for name in sorted(parsed.topic_names)]
    conditions += [
        _contains(Institution.name, name) for name in sorted(parsed.institution_names)
    ]
    return conditions


class SearchRepository:
    """Read-only search queries (no ORM entities returned, only search hits)."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_series(self, parsed: ParsedQuery, user_id: int) -> list[SeriesHit]:
        if parsed.is_empty:
            return []
        rebbi = rebbi_full_name()
        has_access = _has_access(user_id)
        conditions = [
            or_(
                _contains(ShiurSeries.description, kw),
                _contains(Topic.name, kw),
                _contains(Institution.name, kw),
                _contains(rebbi, kw),
            )
            for kw in sorted(parsed.keywords)
        ]
        conditions += _name_conditions(parsed, rebbi)
        stmt = (
            select(
                ShiurSeries.series_id,
                ShiurSeries.description,
                ShiurSeries.requires_permission,
                rebbi.label("rebbi_name"),
                Topic.name.label("topic_name"),
                Institution.name.label("institution_name"),
                has_access.label("has_access"),
            )
            .join(Rebbi, Rebbi.rebbi_id == ShiurSeries.rebbi_id)
            .join(Topic, Topic.topic_id == ShiurSeries.topic_id)
            .join(Institution, Institution.inst_id == ShiurSeries.inst_id)
            .where(or_(*conditions))
            .where(or_(ShiurSeries.requires_permission.is_(False), has_access))
            .order_by(ShiurSeries.series_id)
        )
        result = await self.db.execute(stmt)
        return [
            SeriesHit(
                id=r.series_id,
                description=r.description,
                rebbi_name=r.rebbi_name,
                topic_name=r.topic_name,
                institution_name=r.institution_name,
                has_access=bool(r.has_access),
                requires_permission=bool(r.requires_permission),
            )
            for r in result.all()
        ]

    async def find_recordings(
        self, parsed: ParsedQuery, user_id: int
    ) -> list[RecordingHit]:
        if parsed.is_empty:
            return []
        rebbi = rebbi_full_name()
        has_access = _has_access(user_id)
        text_columns = [
            ShiurRecording.title,
            ShiurRecording.description,
            ShiurRecording.keyword_1,
            ShiurRecording.keyword_2,
            ShiurRecording.keyword_3,
            ShiurRecording.keyword_4,
            ShiurRecording.keyword_5,
            ShiurRecording.keyword_6,
            Topic.name,
            Institution.name,
            rebbi,
        ]
        conditions = [
            or_(*(_contains(col, kw) for col in text_columns))
            for kw in sorted(parsed.keywords)
        ]
        conditions += _name_conditions(parsed, rebbi)
        stmt = (
            select(
                ShiurRecording.recording_id,
                ShiurRecording.series_id,
                ShiurRecording.title,
                ShiurRecording.description,
                ShiurRecording.recorded_at,
                rebbi.label("rebbi_name"),
                Topic.name.label("topic_name"),
                Institution.name.label("institution_name"),
                has_access.label("has_access"),
            )
            .join(ShiurSeries, ShiurSeries.series_id == ShiurRecording.series_id)
            .join(Rebbi, Rebbi.rebbi_id == ShiurSeries.rebbi_id)
            .join(Topic, Topic.topic_id == ShiurSeries.topic_id)
            .join(Institution, Institution.inst_id == ShiurSeries.inst_id)
            .where(or_(*conditions))
            .where(or_(ShiurSeries.requires_permission.is_(False), has_access))
            .order_by(ShiurRecording.recorded_at.desc(), ShiurRecording.recording_id)
        )
        result = await self.db.execute(stmt)
        return [
            RecordingHit(
                id=r.recording_id,
                series_id=r.series_id,
                title=r.title,
                description=r.description,
                recorded_at=r.recorded_at,
                rebbi_name=r.rebbi_name,
                topic_name=r.topic_name,
                institution_name=r.institution_name,
                has_access=bool(r.has_access),
            )
            for r in result.all()
        ]
