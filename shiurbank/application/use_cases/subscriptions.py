"""Subscription use cases: e-mail notifications for a series through its topic.

A new subscription is stored with the placeholder ARN "pending confirmation"
until the user confirms the e-mail; sync_status then records the real ARN.
"""

from __future__ import annotations

import logging

from shiurbank.application.dtos.subscription import (
    SubscriberTypeResult,
    SubscriptionStatus,
)
from shiurbank.application.interfaces.repositories import (
    ISeriesRepository,
    ISubscriberRepository,
    IUserRepository,
)
from shiurbank.application.interfaces.services import INotificationService
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.domain.enums import SubscriptionState
from shiurbank.domain.exceptions import ShiurBankException, ValidationException

logger = logging.getLogger(__name__)

TYPE_REQUIRED = "Subscription type is required."
INVALID_TYPE = "Unknown subscription type."
ALREADY_SUBSCRIBED = "You are already subscribed to this series."
NOTIFICATIONS_DISABLED = "This series does not have notifications enabled."
NO_EMAIL = "Your account does not have an email address."
NOT_SUBSCRIBED = "You are not subscribed to this series."
TOPIC_NOT_FOUND = "Series topic not found."
SUBSCRIBE_PENDING = (
    "Subscription pending! Please check your email to confirm the subscription."
)
UNSUBSCRIBED = "Successfully unsubscribed from this series."
CONFIRMED = "Subscription confirmed!"


class SubscriptionService:
    def __init__(
        self,
        subscriber_repo: ISubscriberRepository,
        series_repo: ISeriesRepository,
        user_repo: IUserRepository,
        notifier: INotificationService,
    ) -> None:
        self.subscriber_repo = subscriber_repo
        self.series_repo = series_repo
        self.user_repo = user_repo
        self.notifier = notifier

    async def list_types(self) -> list[SubscriberTypeResult]:
        return await self.subscriber_repo.list_types()

    async def get_status(self, ctx: AuthorizationContext, series_id: int) -> SubscriptionStatus:
        subscription = await self.subscriber_repo.get_user_subscription(ctx.user_id, series_id)
        if subscription is None:
            return SubscriptionStatus(is_subscribed=False, is_pending=False)
        confirmed = subscription.state is SubscriptionState.CONFIRMED
        return SubscriptionStatus(
            is_subscribed=confirmed, is_pending=not confirmed, subscription=subscription
        )

    async def subscribe(
        self, ctx: AuthorizationContext, series_id: int, type_id: int | None
    ) -> int:
        """Subscribe the user's e-mail to the series topic; returns the subscriber ID.

        Raises:
            ValidationException: missing/unknown type, already subscribed, series
                without a topic, or a user without an e-mail address.
            NotificationError: the topic subscription failed.
        """
        if type_id is None:
            raise ValidationException(TYPE_REQUIRED, field="subscriptionTypeId")
        if not await self.subscriber_repo.type_exists(type_id):
            raise ValidationException(INVALID_TYPE, field="subscriptionTypeId")
        if await self.subscriber_repo.is_subscribed(ctx.user_id, series_id, type_id):
            raise ValidationException(ALREADY_SUBSCRIBED)

        topic_arn = await self.series_repo.get_topic_arn(series_id)
        if not topic_arn:
            raise ValidationException(NOTIFICATIONS_DISABLED)
        user = await self.user_repo.get_result(ctx.user_id)
        if user is None or not (user.email or "").strip():
            raise ValidationException(NO_EMAIL)

        subscription_arn = await self.notifier.subscribe_email(topic_arn, user.email)
        subscriber_id = await self.subscriber_repo.add_subscription(
            ctx.user_id, series_id, type_id, subscription_arn
        )
        logger.info(
            "User %s subscribed to series %s with type %s", ctx.user_id, series_id, type_id
        )
        return subscriber_id

    async def unsubscribe(self, ctx: AuthorizationContext, series_id: int) -> None:
        """Delete the subscription row; the topic unsubscribe is best effort."""
        subscription = await self.subscriber_repo.get_user_subscription(ctx.user_id, series_id)
        if subscription is None:
            raise ValidationException(NOT_SUBSCRIBED)
        if subscription.state is SubscriptionState.CONFIRMED:
            try:
                await self.notifier.unsubscribe(subscription.sns_subscription_arn or "")
            except ShiurBankException as e:
                logger.error(
                    "Topic unsubscribe for user %s on series %s failed: %s",
                    ctx.user_id,
                    series_id,
                    e,
                )
        await self.subscriber_repo.remove_subscription(ctx.user_id, series_id)
        logger.info("User %s unsubscribed from series %s", ctx.user_id, series_id)

    async def sync_status(self, ctx: AuthorizationContext, series_id: int) -> SubscriptionStatus:
        """Record the confirmed subscription ARN once the user has confirmed the e-mail."""
        current = await self.get_status(ctx, series_id)
        if current.subscription is None or current.is_subscribed:
            return current

        topic_arn = await self.series_repo.get_topic_arn(series_id)
        if not topic_arn:
            raise ValidationException(TOPIC_NOT_FOUND)
        user = await self.user_repo.get_result(ctx.user_id)
        email = user.email if user else None
        confirmed_arn = (
            await self.notifier.find_subscription_arn_by_email(topic_arn, email)
            if email
            else None
        )
        if confirmed_arn is None:
            return SubscriptionStatus(is_subscribed=False, is_pending=True)

        await self.subscriber_repo.update_arn(ctx.user_id, series_id, confirmed_arn)
        logger.info("Subscription of user %s to series %s confirmed", ctx.user_id, series_id)
        return SubscriptionStatus(is_subscribed=True, is_pending=False, message=CONFIRMED)
