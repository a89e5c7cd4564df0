"""Search API schemas. Each result is tagged with its type."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field

from shiurbank.application.dtos.search import SearchPage
from shiurbank.domain.entities.search import RecordingHit, SearchHit, SeriesHit
from shiurbank.schemas.base import CamelModel, SuccessResponse


class _HitBase(CamelModel):
    id: int
    description: str | None = None
    rebbi_name: str | None = None
    topic_name: str | None = None
    institution_name: str | None = None
    has_access: bool
    has_pending_application: bool
    relevance_score: int


class SeriesResultItem(_HitBase):
    type: Literal["SERIES"] = "SERIES"
    requires_permission: bool
    display_name: str


class RecordingResultItem(_HitBase):
    type: Literal["RECORDING"] = "RECORDING"
    series_id: int
    title: str
    recorded_at: datetime | None = None


SearchResultItem = Annotated[
    SeriesResultItem | RecordingResultItem, Field(discriminator="type")
]


def to_result_item(hit: SearchHit) -> SeriesResultItem | RecordingResultItem:
    common = dict(
        id=hit.id,
        description=hit.description,
        rebbi_name=hit.rebbi_name,
        topic_name=hit.topic_name,
        institution_name=hit.institution_name,
        has_access=hit.has_access,
        has_pending_application=hit.has_pending_application,
        relevance_score=hit.relevance_score,
    )
    if isinstance(hit, RecordingHit):
        return RecordingResultItem(
            **common, series_id=hit.series_id, title=hit.title, recorded_at=hit.recorded_at
        )
    if isinstance(hit, SeriesHit):
        return SeriesResultItem(
            **common,
            requires_permission=hit.requires_permission,
            display_name=hit.display_name,
        )
    raise TypeError(f"Unknown search hit: {type(hit).__name__}")


class SearchResponse(SuccessResponse):
    query: str
    results: list[SearchResultItem]
    page: int
    page_size: int
    total_results: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_page(cls, page: SearchPage) -> "SearchResponse":
        return cls(
            query=page.query,
            results=[to_result_item(h) for h in page.results],
            page=page.page,
            page_size=page.page_size,
            total_results=page.total_results,
            total_pages=page.total_pages,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
        )
