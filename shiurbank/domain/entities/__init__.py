"""Domain entities (request-scoped, immutable)."""

from shiurbank.domain.entities.search import ParsedQuery, RecordingHit, SearchHit, SeriesHit

__all__ = ["ParsedQuery", "RecordingHit", "SearchHit", "SeriesHit"]
