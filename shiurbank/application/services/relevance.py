"""Relevance scoring, access-aware ordering and pagination for search hits."""

from collections.abc import Sequence
from dataclasses import replace
from typing import TypeVar

from shiurbank.domain.entities.search import ParsedQuery, SearchHit

EXACT_TITLE_POINTS = 100
TITLE_CONTAINS_QUERY_POINTS = 50
REBBI_MATCH_POINTS = 30
TOPIC_MATCH_POINTS = 30
INSTITUTION_MATCH_POINTS = 20
KEYWORD_IN_TITLE_POINTS = 15
KEYWORD_IN_DESCRIPTION_POINTS = 10
KEYWORD_HIT_BONUS = 5


def score_hit(hit: SearchHit, query: str, parsed: ParsedQuery) -> int:
    """Additive relevance score of one hit; rules are independent and uncapped."""
    q = query.strip().lower()
    title = (hit.title_text or "").lower()
    description = (hit.description or "").lower()
    rebbi = (hit.rebbi_name or "").lower()
    topic = (hit.topic_name or "").lower()
    institution = (hit.institution_name or "").lower()

    score = 0
    if title and q:
        if title == q:
            score += EXACT_TITLE_POINTS
        if q in title:
            score += TITLE_CONTAINS_QUERY_POINTS

    score += REBBI_MATCH_POINTS * sum(1 for name in parsed.rebbi_names if name in rebbi)
    score += TOPIC_MATCH_POINTS * sum(1 for name in parsed.topic_names if name == topic)
    score += INSTITUTION_MATCH_POINTS * sum(
        1 for name in parsed.institution_names if name == institution
    )

    hits = 0
    for keyword in parsed.keywords:
        if title and keyword in title:
            score += KEYWORD_IN_TITLE_POINTS
            hits += 1
        if description and keyword in description:
            score += KEYWORD_IN_DESCRIPTION_POINTS
            hits += 1
    score += KEYWORD_HIT_BONUS * hits
    return score


def score_hits(
    hits: Sequence[SearchHit], query: str, parsed: ParsedQuery
) -> list[SearchHit]:
    """Return copies of hits with relevance_score filled in."""
    return [replace(h, relevance_score=score_hit(h, query, parsed)) for h in hits]


def rank_hits(hits: Sequence[SearchHit]) -> list[SearchHit]:
    """Accessible hits first, then by score descending; ties keep input order."""
    return sorted(hits, key=lambda h: (not h.has_access, -h.relevance_score))


T = TypeVar("T")


def paginate(items: Sequence[T], page: int, page_size: int) -> list[T]:
    """Slice one page; a page past the end is empty."""
    if page < 0 or page_size < 1:
        raise ValueError("page must be >= 0 and page_size >= 1")
    start = page * page_size
    if start >= len(items):
        return []
    return list(items[start : start + page_size])


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed for total items (ceil division)."""
    return -(-total // page_size) if total else 0
