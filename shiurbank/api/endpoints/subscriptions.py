"""Subscription API: e-mail notification subscriptions to a series topic."""

from typing import Annotated

from fastapi import APIRouter, Depends

from shiurbank.api.dependencies import AuthContext, CurrentUser, get_subscription_service
from shiurbank.application.use_cases import SubscriptionService
from shiurbank.application.use_cases.subscriptions import SUBSCRIBE_PENDING, UNSUBSCRIBED
from shiurbank.schemas.base import MessageResponse
from shiurbank.schemas.subscription import (
    SubscribeRequest,
    SubscribeResponse,
    SubscriberTypeItem,
    SubscriberTypesResponse,
    SubscriptionStatusResponse,
)

router = APIRouter()

Subscriptions = Annotated[SubscriptionService, Depends(get_subscription_service)]


@router.get("/types", response_model=SubscriberTypesResponse)
async def list_types(_: CurrentUser, subscription_svc: Subscriptions):
    types = await subscription_svc.list_types()
    return SubscriberTypesResponse(types=[SubscriberTypeItem.from_result(t) for t in types])


@router.get("/series/{series_id}/status", response_model=SubscriptionStatusResponse)
async def subscription_status(
    series_id: int, ctx: AuthContext, subscription_svc: Subscriptions
):
    return SubscriptionStatusResponse.from_status(
        await subscription_svc.get_status(ctx, series_id)
    )


@router.post("/series/{series_id}/subscribe", response_model=SubscribeResponse)
async def subscribe(
    series_id: int,
    ctx: AuthContext,
    subscription_svc: Subscriptions,
    body: SubscribeRequest | None = None,
):
    """Subscribe the user's e-mail; it stays pending until the user confirms it."""
    subscriber_id = await subscription_svc.subscribe(
        ctx, series_id, body.subscription_type_id if body else None
    )
    return SubscribeResponse(subscriber_id=subscriber_id, message=SUBSCRIBE_PENDING)


@router.post("/series/{series_id}/unsubscribe", response_model=MessageResponse)
async def unsubscribe(series_id: int, ctx: AuthContext, subscription_svc: Subscriptions):
    await subscription_svc.unsubscribe(ctx, series_id)
    return MessageResponse(message=UNSUBSCRIBED)


@router.post("/series/{series_id}/sync-status", response_model=SubscriptionStatusResponse)
async def sync_status(series_id: int, ctx: AuthContext, subscription_svc: Subscriptions):
    """Pick up a confirmation the user made by e-mail."""
    return SubscriptionStatusResponse.from_status(
        await subscription_svc.sync_status(ctx, series_id)
    )
