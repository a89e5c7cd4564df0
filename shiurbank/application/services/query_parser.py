"""Search query parser: free text -> ParsedQuery.

Pure functions; vocabulary lists are passed in by the caller.
"""

import re
from collections.abc import Iterable

from shiurbank.domain.entities.search import ParsedQuery

STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "will", "with", "this", "but", "they", "have", "had",
        "what", "when", "where", "who", "which", "why", "how",
    }
)

MIN_KEYWORD_LENGTH = 3

_NON_KEYWORD_CHARS = re.compile(r"[^a-z0-9']")


def _matches(query: str, vocabulary: Iterable[str]) -> frozenset[str]:
    """Vocabulary entries (lower-cased) that appear in query as substrings."""
    found = set()
    for entry in vocabulary:
        name = (entry or "").strip().lower()
        if name and name in query:
            found.add(name)
    return frozenset(found)


def extract_keywords(query: str, claimed_names: Iterable[str] = ()) -> frozenset[str]:
    """Split a lower-cased query into keywords.

    Tokens are stripped of everything but letters, digits and apostrophes;
    stop words, tokens shorter than MIN_KEYWORD_LENGTH and tokens already
    contained in a claimed vocabulary name are dropped.
    """
    claimed = list(claimed_names)
    keywords = set()
    for token in query.lower().split():
        word = _NON_KEYWORD_CHARS.sub("", token)
        if len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS:
            continue
        if any(word in name for name in claimed):
            continue
        keywords.add(word)
    return frozenset(keywords)


def parse_query(
    query: str | None,
    rebbi_names: Iterable[str],
    topic_names: Iterable[str],
    institution_names: Iterable[str],
) -> ParsedQuery:
    """Parse a raw search string against the rebbi/topic/institution vocabularies.

    Args:
        query: Raw user input; blank or None yields an empty ParsedQuery.
        rebbi_names: Full rebbi names ("title fname lname").
        topic_names: Topic names.
        institution_names: Institution names.

    Returns:
        ParsedQuery with lower-cased keywords and matched names.
    """
    lowered = (query or "").strip().lower()
    if not lowered:
        return ParsedQuery()
    rebbeim = _matches(lowered, rebbi_names)
    topics = _matches(lowered, topic_names)
    institutions = _matches(lowered, institution_names)
    keywords = extract_keywords(lowered, [*rebbeim, *topics, *institutions])
    return ParsedQuery(
        keywords=keywords,
        rebbi_names=rebbeim,
        topic_names=topics,
        institution_names=institutions,
    )
