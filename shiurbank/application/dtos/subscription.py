"""DTOs for notification subscriptions (no dependency on ORM)."""

from dataclasses import dataclass

from shiurbank.domain.enums import SubscriptionState

PENDING_CONFIRMATION_ARN = "pending confirmation"


@dataclass(frozen=True)
class SubscriberTypeResult:
    type_id: int
    name: str


@dataclass(frozen=True)
class SubscriptionResult:
    subscriber_id: int
    user_id: int
    series_id: int
    subscription_type_id: int
    type_name: str | None
    sns_subscription_arn: str | None

    @property
    def state(self) -> SubscriptionState:
        """Confirmed once SNS has replaced the placeholder with a real ARN."""
        arn = self.sns_subscription_arn
        if arn and arn.lower() != PENDING_CONFIRMATION_ARN:
            return SubscriptionState.CONFIRMED
        return SubscriptionState.PENDING


@dataclass(frozen=True)
class SubscriptionStatus:
    is_subscribed: bool
    is_pending: bool
    subscription: SubscriptionResult | None = None
    message: str | None = None
