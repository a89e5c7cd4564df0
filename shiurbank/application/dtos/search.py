"""DTOs for search results (no dependency on ORM)."""

from dataclasses import dataclass

from shiurbank.domain.entities.search import SearchHit


@dataclass(frozen=True)
class SearchVocabulary:
    """Lower-cased names the query parser matches against."""

    rebbi_names: list[str]
    topic_names: list[str]
    institution_names: list[str]


@dataclass(frozen=True)
class SearchPage:
    """One page of ranked hits plus paging metadata."""

    query: str
    results: list[SearchHit]
    page: int
    page_size: int
    total_results: int
    total_pages: int

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages - 1

    @property
    def has_previous_page(self) -> bool:
        return self.page > 0
