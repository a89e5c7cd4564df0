"""Relevance scoring, ordering and pagination of search hits."""

from datetime import datetime

import pytest

from shiurbank.application.services.relevance import (
    paginate,
    rank_hits,
    score_hit,
    score_hits,
    total_pages,
)
from shiurbank.domain.entities.search import ParsedQuery, RecordingHit, SeriesHit


def _recording(
    id: int,
    title: str,
    *,
    description: str | None = None,
    has_access: bool = True,
    relevance_score: int = 0,
) -> RecordingHit:
    return RecordingHit(
        id=id,
        series_id=1,
        title=title,
        description=description,
        rebbi_name="Rabbi Moshe Cohen",
        topic_name="Halacha",
        institution_name="Yeshiva University",
        has_access=has_access,
        relevance_score=relevance_score,
        recorded_at=datetime(2024, 3, 1, 19, 30),
    )


def _series(id: int, *, has_access: bool = True, relevance_score: int = 0) -> SeriesHit:
    return SeriesHit(
        id=id,
        description="Weekly shiur",
        rebbi_name="Rabbi Moshe Cohen",
        topic_name="Halacha",
        institution_name="Yeshiva University",
        has_access=has_access,
        relevance_score=relevance_score,
    )


def test_exact_title_scores_at_least_100() -> None:
    parsed = ParsedQuery(keywords=frozenset({"hilchos", "shabbos"}))
    score = score_hit(_recording(1, "Hilchos Shabbos"), "hilchos shabbos", parsed)
    # 100 exact + 50 contains + 2 x (15 title + 5 bonus)
    assert score == 190


def test_keyword_in_title_and_description_counts_twice_for_bonus() -> None:
    parsed = ParsedQuery(keywords=frozenset({"kiddush"}))
    hit = _recording(1, "Kiddush levana", description="All about kiddush")
    assert score_hit(hit, "something else", parsed) == 15 + 10 + 5 * 2


def test_name_matches() -> None:
    parsed = ParsedQuery(
        rebbi_names=frozenset({"moshe cohen"}),
        topic_names=frozenset({"halacha"}),
        institution_names=frozenset({"yeshiva university"}),
    )
    assert score_hit(_series(1), "moshe cohen halacha", parsed) == 30 + 30 + 20


def test_series_have_no_title_points() -> None:
    parsed = ParsedQuery(keywords=frozenset({"weekly"}))
    assert score_hit(_series(1), "weekly shiur", parsed) == 10 + 5


def test_score_hits_returns_copies() -> None:
    hit = _recording(1, "Kiddush")
    [scored] = score_hits([hit], "kiddush", ParsedQuery(keywords=frozenset({"kiddush"})))
    assert hit.relevance_score == 0
    assert scored.relevance_score > 0


def test_accessible_hits_precede_inaccessible() -> None:
    hits = [
        _series(1, has_access=False, relevance_score=500),
        _recording(2, "B", relevance_score=10),
        _recording(3, "C", has_access=False, relevance_score=90),
        _recording(4, "D", relevance_score=40),
    ]
    ranked = rank_hits(hits)
    assert [h.id for h in ranked] == [4, 2, 1, 3]


def test_ties_keep_fetch_order() -> None:
    hits = [_series(1, relevance_score=30), _recording(2, "A", relevance_score=30)]
    assert [h.id for h in rank_hits(hits)] == [1, 2]


def test_pages_reconstruct_the_full_list() -> None:
    items = list(range(23))
    pages = [paginate(items, p, 5) for p in range(total_pages(len(items), 5))]
    assert [i for page in pages for i in page] == items
    assert total_pages(len(items), 5) == 5
    assert len(pages[-1]) == 3


def test_page_past_end_is_empty() -> None:
    assert paginate([1, 2, 3], 4, 2) == []
    assert total_pages(0, 20) == 0


def test_paginate_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        paginate([1], -1, 10)
    with pytest.raises(ValueError):
        paginate([1], 0, 0)
