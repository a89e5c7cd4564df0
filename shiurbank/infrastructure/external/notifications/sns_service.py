"""AWS SNS notifications: admin topic, subscriber topic and per-series topics."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from botocore.exceptions import ClientError

from shiurbank.application.dtos.subscription import PENDING_CONFIRMATION_ARN
from shiurbank.infrastructure.exceptions import NotificationError

logger = logging.getLogger(__name__)

# SNS subject lines are limited to 100 characters
MAX_SUBJECT_LENGTH = 100


class SnsNotificationService:
    """SNS topics and e-mail subscriptions.

    Uses boto3 (sync) via asyncio.to_thread. Shared topic ARNs are resolved
    once by initialize() (called from the lifespan).
    """

    def __init__(
        self,
        client: Any,
        admin_topic_name: str,
        subscriber_topic_name: str,
        admin_topic_arn: str | None = None,
        admin_emails: list[str] | None = None,
    ) -> None:
        """Initialize with a boto3 SNS client and topic configuration.

        Args:
            client: boto3 SNS client.
            admin_topic_name: Name of the admin topic (ignored when admin_topic_arn is set).
            subscriber_topic_name: Name of the shared subscriber topic.
            admin_topic_arn: Pre-provisioned admin topic ARN.
            admin_emails: Addresses subscribed to the admin topic at startup.
        """
        self._client = client
        self.admin_topic_name = admin_topic_name
        self.subscriber_topic_name = subscriber_topic_name
        self.admin_topic_arn = admin_topic_arn or None
        self.subscriber_topic_arn: str | None = None
        self.admin_emails = list(admin_emails or [])

    async def initialize(self) -> None:
        if self.admin_topic_arn:
            logger.info("Using configured admin topic ARN: %s", self.admin_topic_arn)
        else:
            self.admin_topic_arn = await self.create_topic(self.admin_topic_name)
        self.subscriber_topic_arn = await self.create_topic(self.subscriber_topic_name)

        for email in self.admin_emails:
            try:
                await self.subscribe_email(self.admin_topic_arn, email)
                logger.info("Admin subscription request sent for %s", email)
            except NotificationError as e:
                logger.debug("Admin e-mail %s may already be subscribed: %s", email, e.details)

    async def notify_admins(self, subject: str, message: str) -> None:
        if not self.admin_topic_arn:
            logger.warning("Admin topic ARN not resolved, skipping publish: %s", subject)
            return
        await self.publish(self.admin_topic_arn, subject, message)

    async def publish(self, topic_arn: str, subject: str, message: str) -> None:
        def _publish() -> str:
            response = self._client.publish(
                TopicArn=topic_arn,
                Subject=subject[:MAX_SUBJECT_LENGTH],
                Message=message,
            )
            return response["MessageId"]

        try:
            message_id = await asyncio.to_thread(_publish)
        except Exception as e:
            raise NotificationError("publish", topic_arn, str(e)) from e
        logger.info("SNS message published: %s", message_id)

    async def create_topic(self, name: str) -> str:
        """CreateTopic is idempotent: an existing topic's ARN is returned."""
        try:
            response = await asyncio.to_thread(self._client.create_topic, Name=name)
        except Exception as e:
            raise NotificationError("create_topic", name, str(e)) from e
        arn = response["TopicArn"]
        logger.info("SNS topic ready: %s (%s)", name, arn)
        return arn

    async def delete_topic(self, topic_arn: str) -> None:
        try:
            await asyncio.to_thread(self._client.delete_topic, TopicArn=topic_arn)
        except Exception as e:
            raise NotificationError("delete_topic", topic_arn, str(e)) from e
        logger.info("SNS topic deleted: %s", topic_arn)

    async def subscribe_email(self, topic_arn: str, email: str) -> str:
        try:
            response = await asyncio.to_thread(
                self._client.subscribe,
                TopicArn=topic_arn,
                Protocol="email",
                Endpoint=email,
            )
        except Exception as e:
            raise NotificationError("subscribe", topic_arn, str(e)) from e
        return response.get("SubscriptionArn") or PENDING_CONFIRMATION_ARN

    async def unsubscribe(self, subscription_arn: str) -> None:
        try:
            await asyncio.to_thread(
                self._client.unsubscribe, SubscriptionArn=subscription_arn
            )
        except Exception as e:
            raise NotificationError("unsubscribe", subscription_arn, str(e)) from e

    async def find_subscription_arn_by_email(self, topic_arn: str, email: str) -> str | None:
        """Walk every page of ListSubscriptionsByTopic; skips unconfirmed entries."""
        def _find() -> str | None:
            paginator = self._client.get_paginator("list_subscriptions_by_topic")
            for page in paginator.paginate(TopicArn=topic_arn):
                for sub in page.get("Subscriptions", []):
                    arn = sub.get("SubscriptionArn", "")
                    if (
                        sub.get("Protocol") == "email"
                        and (sub.get("Endpoint") or "").lower() == email.lower()
                        and arn.startswith("arn:")
                    ):
                        return arn
            return None

        try:
            return await asyncio.to_thread(_find)
        except ClientError as e:
            raise NotificationError("list_subscriptions", topic_arn, str(e)) from e
