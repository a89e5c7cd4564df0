"""Logging notification backend for development and tests (no AWS calls).

Topics and subscriptions live in memory. Subscriptions start as
"pending confirmation" and are reported confirmed on the next lookup, so the
sync-status flow can be exercised locally.
"""

from __future__ import annotations

import logging
import uuid

from shiurbank.application.dtos.subscription import PENDING_CONFIRMATION_ARN

logger = logging.getLogger(__name__)

LOCAL_ARN_PREFIX = "arn:local:sns"


class LogNotificationService:
    """In-memory NotificationProtocol implementation that logs every message."""

    def __init__(self, admin_topic_name: str = "shiurbank-admin-notifications") -> None:
        self.admin_topic_arn = f"{LOCAL_ARN_PREFIX}:{admin_topic_name}"
        self.published: list[tuple[str, str, str]] = []
        self._topics: set[str] = {self.admin_topic_arn}
        # topic ARN -> {email -> subscription ARN}
        self._subscriptions: dict[str, dict[str, str]] = {}

    async def initialize(self) -> None:
        logger.info("Log notifier active; admin topic %s", self.admin_topic_arn)

    async def notify_admins(self, subject: str, message: str) -> None:
        await self.publish(self.admin_topic_arn, subject, message)

    async def publish(self, topic_arn: str, subject: str, message: str) -> None:
        self.published.append((topic_arn, subject, message))
        logger.info("Notification to %s: %s\n%s", topic_arn, subject, message)

    async def create_topic(self, name: str) -> str:
        arn = f"{LOCAL_ARN_PREFIX}:{name}"
        self._topics.add(arn)
        return arn

    async def delete_topic(self, topic_arn: str) -> None:
        self._topics.discard(topic_arn)
        self._subscriptions.pop(topic_arn, None)

    async def subscribe_email(self, topic_arn: str, email: str) -> str:
        self._subscriptions.setdefault(topic_arn, {})[email.lower()] = (
            f"{topic_arn}:{uuid.uuid4()}"
        )
        return PENDING_CONFIRMATION_ARN

    async def unsubscribe(self, subscription_arn: str) -> None:
        for subs in self._subscriptions.values():
            for email, arn in list(subs.items()):
                if arn == subscription_arn:
                    del subs[email]

    async def find_subscription_arn_by_email(self, topic_arn: str, email: str) -> str | None:
        return self._subscriptions.get(topic_arn, {}).get(email.lower())
