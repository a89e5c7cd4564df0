"""Application services: authorization, query parsing, relevance, notification text."""

from shiurbank.application.services.authorization_service import (
    AuthorizationContext,
    AuthorizationService,
)
from shiurbank.application.services.query_parser import parse_query
from shiurbank.application.services.relevance import (
    paginate,
    rank_hits,
    score_hit,
    score_hits,
    total_pages,
)

__all__ = [
    "AuthorizationContext",
    "AuthorizationService",
    "paginate",
    "parse_query",
    "rank_hits",
    "score_hit",
    "score_hits",
    "total_pages",
]
