"""Catalog lookups for forms: institutions, topics, rebbeim."""

from __future__ import annotations

from shiurbank.application.dtos.series import RebbiResult, TopicResult
from shiurbank.application.dtos.user import InstitutionResult
from shiurbank.application.interfaces.repositories import (
    IInstitutionRepository,
    IRebbiRepository,
    ITopicRepository,
)


class CatalogService:
    def __init__(
        self,
        institution_repo: IInstitutionRepository,
        topic_repo: ITopicRepository,
        rebbi_repo: IRebbiRepository,
    ) -> None:
        self.institution_repo = institution_repo
        self.topic_repo = topic_repo
        self.rebbi_repo = rebbi_repo

    async def list_institutions(self) -> list[InstitutionResult]:
        return await self.institution_repo.list_all()

    async def list_topics(self) -> list[TopicResult]:
        return await self.topic_repo.list_all()

    async def list_rebbeim(self) -> list[RebbiResult]:
        return await self.rebbi_repo.list_all()
