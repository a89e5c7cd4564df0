"""Search API: ranked, paged search over series and recordings."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from shiurbank.api.dependencies import AuthContext, get_search_service
from shiurbank.application.use_cases import SearchService
from shiurbank.application.use_cases.search import DEFAULT_PAGE_SIZE
from shiurbank.schemas.search import SearchResponse

router = APIRouter()


@router.get("", response_model=SearchResponse)
async def search(
    ctx: AuthContext,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str | None = None,
    page: int = 0,
    page_size: Annotated[int, Query(alias="pageSize")] = DEFAULT_PAGE_SIZE,
):
    """Accessible results first, then by relevance."""
    result = await search_svc.search(ctx, q, page=page, page_size=page_size)
    return SearchResponse.from_page(result)
