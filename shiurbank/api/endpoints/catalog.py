"""Catalog API: topics and rebbeim for the series form."""

from typing import Annotated

from fastapi import APIRouter, Depends

from shiurbank.api.dependencies import CurrentUser, get_catalog_service
from shiurbank.application.use_cases import CatalogService
from shiurbank.schemas.catalog import (
    RebbiItem,
    RebbiListResponse,
    TopicItem,
    TopicListResponse,
)

router = APIRouter()


@router.get("/topics", response_model=TopicListResponse)
async def list_topics(
    _: CurrentUser,
    catalog_svc: Annotated[CatalogService, Depends(get_catalog_service)],
):
    topics = await catalog_svc.list_topics()
    return TopicListResponse(topics=[TopicItem.from_result(t) for t in topics])


@router.get("/rebbeim", response_model=RebbiListResponse)
async def list_rebbeim(
    _: CurrentUser,
    catalog_svc: Annotated[CatalogService, Depends(get_catalog_service)],
):
    rebbeim = await catalog_svc.list_rebbeim()
    return RebbiListResponse(rebbeim=[RebbiItem.from_result(r) for r in rebbeim])
