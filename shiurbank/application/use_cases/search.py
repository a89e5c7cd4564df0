"""Search use case: parse, fetch, score, rank and page series and recording hits."""

from __future__ import annotations

import logging
from dataclasses import replace

from shiurbank.application.dtos.search import SearchPage, SearchVocabulary
from shiurbank.application.interfaces.repositories import (
    IApplicationRepository,
    IInstitutionRepository,
    IRebbiRepository,
    ISearchRepository,
    ITopicRepository,
)
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.application.services.query_parser import parse_query
from shiurbank.application.services.relevance import (
    paginate,
    rank_hits,
    score_hits,
    total_pages,
)
from shiurbank.domain.entities.search import SearchHit
from shiurbank.domain.exceptions import ValidationException
from shiurbank.shared.telemetry import add_span_attributes, traced

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


class SearchService:
    """Keyword search across series and recordings the user may see."""

    def __init__(
        self,
        search_repo: ISearchRepository,
        rebbi_repo: IRebbiRepository,
        topic_repo: ITopicRepository,
        institution_repo: IInstitutionRepository,
        application_repo: IApplicationRepository,
    ) -> None:
        self.search_repo = search_repo
        self.rebbi_repo = rebbi_repo
        self.topic_repo = topic_repo
        self.institution_repo = institution_repo
        self.application_repo = application_repo

    async def load_vocabulary(self) -> SearchVocabulary:
        return SearchVocabulary(
            rebbi_names=await self.rebbi_repo.list_names(),
            topic_names=await self.topic_repo.list_names(),
            institution_names=await self.institution_repo.list_names(),
        )

    @traced("search.execute")
    async def search(
        self,
        ctx: AuthorizationContext,
        q: str | None,
        page: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> SearchPage:
        """Run a search and return one page of ranked hits.

        Accessible hits come first, then higher relevance; series precede
        recordings among equal keys.

        Raises:
            ValidationException: blank query or invalid paging values.
        """
        query = (q or "").strip()
        if not query:
            raise ValidationException("Search query is required", field="q")
        if page < 0:
            raise ValidationException("Page must be 0 or greater", field="page")
        if page_size < 1:
            raise ValidationException("Page size must be at least 1", field="pageSize")

        vocabulary = await self.load_vocabulary()
        parsed = parse_query(
            query,
            vocabulary.rebbi_names,
            vocabulary.topic_names,
            vocabulary.institution_names,
        )
        hits: list[SearchHit] = [
            *await self.search_repo.find_series(parsed, ctx.user_id),
            *await self.search_repo.find_recordings(parsed, ctx.user_id),
        ]
        pending = await self.application_repo.pending_series_ids(ctx.user_id)
        hits = [
            replace(h, has_pending_application=True) if h.access_series_id in pending else h
            for h in hits
        ]
        ranked = rank_hits(score_hits(hits, query, parsed))
        add_span_attributes(search_results=len(ranked))
        logger.debug("Search %r by user %s: %d hits", query, ctx.user_id, len(ranked))
        return SearchPage(
            query=query,
            results=paginate(ranked, page, page_size),
            page=page,
            page_size=page_size,
            total_results=len(ranked),
            total_pages=total_pages(len(ranked), page_size),
        )
