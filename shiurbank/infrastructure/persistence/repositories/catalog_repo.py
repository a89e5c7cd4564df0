"""Catalog repositories: institutions, topics and rebbeim (reference data)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.series import RebbiResult, TopicResult
from shiurbank.application.dtos.user import InstitutionResult
from shiurbank.infrastructure.persistence.models.catalog import Rebbi, Topic
from shiurbank.infrastructure.persistence.models.user import Institution
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository


def rebbi_full_name() -> Any:
    """SQL expression "title fname lname" (title optional), the name users search for."""
    return func.trim(
        func.coalesce(Rebbi.title, "") + " " + Rebbi.fname + " " + Rebbi.lname
    )


class InstitutionRepository(BaseRepository[Institution]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Institution)

    async def list_all(self) -> list[InstitutionResult]:
        result = await self.db.execute(select(Institution).order_by(Institution.name))
        return [
            InstitutionResult(inst_id=i.inst_id, name=i.name)
            for i in result.scalars().all()
        ]

    async def list_names(self) -> list[str]:
        """Lower-cased institution names (search vocabulary)."""
        result = await self.db.execute(select(func.lower(Institution.name)).distinct())
        return [n for n in result.scalars().all() if n]


class TopicRepository(BaseRepository[Topic]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Topic)

    async def list_all(self) -> list[TopicResult]:
        result = await self.db.execute(select(Topic).order_by(Topic.name))
        return [TopicResult(topic_id=t.topic_id, name=t.name) for t in result.scalars().all()]

    async def list_names(self) -> list[str]:
        """Lower-cased topic names (search vocabulary)."""
        result = await self.db.execute(select(func.lower(Topic.name)).distinct())
        return [n for n in result.scalars().all() if n]


class RebbiRepository(BaseRepository[Rebbi]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Rebbi)

    async def list_all(self) -> list[RebbiResult]:
        result = await self.db.execute(select(Rebbi).order_by(Rebbi.lname, Rebbi.fname))
        return [
            RebbiResult(
                rebbi_id=r.rebbi_id,
                title=r.title,
                first_name=r.fname,
                last_name=r.lname,
            )
            for r in result.scalars().all()
        ]

    async def list_names(self) -> list[str]:
        """Lower-cased full names (search vocabulary)."""
        result = await self.db.execute(select(func.lower(rebbi_full_name())).distinct())
        return [n for n in result.scalars().all() if n]
