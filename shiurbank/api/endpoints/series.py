"""Series API: dashboard listing, creation, details, gabbai check, deletion."""

from typing import Annotated

from fastapi import APIRouter, Depends

from shiurbank.api.dependencies import AuthContext, get_series_service
from shiurbank.application.dtos.series import GabbaiCredentials
from shiurbank.application.use_cases import SeriesService
from shiurbank.schemas.base import MessageResponse
from shiurbank.schemas.series import (
    IsGabbaiResponse,
    MySeriesEntry,
    MySeriesResponse,
    SeriesCreateRequest,
    SeriesCreateResponse,
    SeriesDetailResponse,
)

router = APIRouter()


@router.get("/my-series", response_model=MySeriesResponse)
async def my_series(
    ctx: AuthContext,
    series_svc: Annotated[SeriesService, Depends(get_series_service)],
):
    items = await series_svc.my_series(ctx)
    return MySeriesResponse(series=[MySeriesEntry.from_item(i) for i in items])


@router.post("/series", response_model=SeriesCreateResponse)
async def create_series(
    ctx: AuthContext,
    body: SeriesCreateRequest,
    series_svc: Annotated[SeriesService, Depends(get_series_service)],
):
    """Create a series with its bucket and notification topic; the creator becomes gabbai."""
    created = await series_svc.create_series(
        ctx,
        rebbi_id=body.rebbi_id,
        topic_id=body.topic_id,
        inst_id=body.inst_id,
        description=body.description,
        requires_permission=body.requires_permission,
        extra_gabbaim=[
            GabbaiCredentials(username=g.username, password=g.password)
            for g in body.extra_gabbaim
        ],
    )
    message = (
        "Series created and sent to an admin for verification."
        if created.needs_verification
        else "Series created successfully."
    )
    return SeriesCreateResponse(
        series_id=created.series_id,
        needs_verification=created.needs_verification,
        message=message,
    )


@router.get("/series/{series_id}", response_model=SeriesDetailResponse)
async def get_series(
    series_id: int,
    ctx: AuthContext,
    series_svc: Annotated[SeriesService, Depends(get_series_service)],
):
    return SeriesDetailResponse.from_detail(await series_svc.get_details(series_id))


@router.get("/series/{series_id}/is-gabbai", response_model=IsGabbaiResponse)
async def is_gabbai(series_id: int, ctx: AuthContext):
    return IsGabbaiResponse(is_gabbai=ctx.is_gabbai(series_id))


@router.delete("/series/{series_id}", response_model=MessageResponse)
async def delete_series(
    series_id: int,
    ctx: AuthContext,
    series_svc: Annotated[SeriesService, Depends(get_series_service)],
):
    """Gabbai only. Cloud clean-up (topic, bucket) is best effort."""
    await series_svc.delete_series(ctx, series_id)
    return MessageResponse(message="Series deleted successfully")
