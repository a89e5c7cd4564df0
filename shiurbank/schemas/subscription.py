"""Subscription API schemas."""

from shiurbank.application.dtos.subscription import (
    SubscriberTypeResult,
    SubscriptionResult,
    SubscriptionStatus,
)
from shiurbank.schemas.base import CamelModel, SuccessResponse


class SubscribeRequest(CamelModel):
    subscription_type_id: int | None = None


class SubscriberTypeItem(CamelModel):
    type_id: int
    name: str

    @classmethod
    def from_result(cls, t: SubscriberTypeResult) -> "SubscriberTypeItem":
        return cls(type_id=t.type_id, name=t.name)


class SubscriberTypesResponse(SuccessResponse):
    types: list[SubscriberTypeItem]


class SubscriptionInfo(CamelModel):
    subscriber_id: int
    series_id: int
    subscription_type_id: int
    type_name: str | None = None
    sns_subscription_arn: str | None = None

    @classmethod
    def from_result(cls, s: SubscriptionResult) -> "SubscriptionInfo":
        return cls(
            subscriber_id=s.subscriber_id,
            series_id=s.series_id,
            subscription_type_id=s.subscription_type_id,
            type_name=s.type_name,
            sns_subscription_arn=s.sns_subscription_arn,
        )


class SubscriptionStatusResponse(SuccessResponse):
    is_subscribed: bool
    is_pending: bool
    subscription: SubscriptionInfo | None = None
    message: str | None = None

    @classmethod
    def from_status(cls, status: SubscriptionStatus) -> "SubscriptionStatusResponse":
        return cls(
            is_subscribed=status.is_subscribed,
            is_pending=status.is_pending,
            subscription=(
                SubscriptionInfo.from_result(status.subscription)
                if status.subscription
                else None
            ),
            message=status.message,
        )


class SubscribeResponse(SuccessResponse):
    subscriber_id: int
    is_pending: bool = True
    message: str
