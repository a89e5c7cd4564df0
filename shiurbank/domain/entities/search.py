"""Search entities: parsed query and the two kinds of search hit.

All request-scoped and immutable; scoring and pending flags are applied
with dataclasses.replace.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from shiurbank.domain.enums import SearchResultType


@dataclass(frozen=True)
class ParsedQuery:
    """A search string split into free keywords and matched vocabulary names.

    All values are lower-case. Sets, so duplicates collapse.
    """

    keywords: frozenset[str] = field(default_factory=frozenset)
    rebbi_names: frozenset[str] = field(default_factory=frozenset)
    topic_names: frozenset[str] = field(default_factory=frozenset)
    institution_names: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        """True when nothing in the query can match a row."""
        return not (
            self.keywords or self.rebbi_names or self.topic_names or self.institution_names
        )

    @property
    def matched_names(self) -> frozenset[str]:
        """Every vocabulary name that matched, regardless of category."""
        return self.rebbi_names | self.topic_names | self.institution_names


@dataclass(frozen=True, kw_only=True)
class SearchHit:
    """Fields shared by series and recording hits."""

    result_type: ClassVar[SearchResultType]

    id: int
    description: str | None
    rebbi_name: str | None
    topic_name: str | None
    institution_name: str | None
    has_access: bool
    has_pending_application: bool = False
    relevance_score: int = 0

    @property
    def title_text(self) -> str | None:
        """Title used by the title scoring rules; None when the hit has no title."""
        return None

    @property
    def access_series_id(self) -> int:
        """Series whose membership governs access to this hit."""
        return self.id


@dataclass(frozen=True, kw_only=True)
class SeriesHit(SearchHit):
    """A matching series. Series have no title of their own."""

    result_type: ClassVar[SearchResultType] = SearchResultType.SERIES

    requires_permission: bool = False

    @property
    def display_name(self) -> str:
        """Human label, "topic — rebbi"."""
        return f"{self.topic_name or ''} — {self.rebbi_name or ''}"


@dataclass(frozen=True, kw_only=True)
class RecordingHit(SearchHit):
    """A matching recording inside a series."""

    result_type: ClassVar[SearchResultType] = SearchResultType.RECORDING

    series_id: int
    title: str
    recorded_at: datetime | None = None

    @property
    def title_text(self) -> str | None:
        return self.title

    @property
    def access_series_id(self) -> int:
        return self.series_id
