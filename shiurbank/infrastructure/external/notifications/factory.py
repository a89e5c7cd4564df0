"""Notification service factory: creates SNS or logging backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shiurbank.application.interfaces.services import INotificationService

if TYPE_CHECKING:
    from shiurbank.core.config import Settings


class NotificationFactory:
    """Factory for notification service instances based on configuration."""

    @staticmethod
    def create_notification_service(
        settings: "Settings | None" = None,
    ) -> INotificationService:
        """Create notification service from settings.

        Raises:
            ValueError: Unknown backend.
        """
        from shiurbank.core.config import get_settings

        s = settings or get_settings()
        backend = s.notifications_backend.lower()

        if backend == "log":
            from shiurbank.infrastructure.external.notifications.log_notifier import (
                LogNotificationService,
            )

            return LogNotificationService(admin_topic_name=s.sns_admin_topic_name)
        if backend == "sns":
            from shiurbank.infrastructure.external.aws import create_client
            from shiurbank.infrastructure.external.notifications.sns_service import (
                SnsNotificationService,
            )

            return SnsNotificationService(
                create_client("sns", s),
                admin_topic_name=s.sns_admin_topic_name,
                subscriber_topic_name=s.sns_subscriber_topic_name,
                admin_topic_arn=s.sns_admin_topic_arn,
                admin_emails=s.admin_emails,
            )
        raise ValueError(
            f"Unknown notifications backend: {backend}. Supported: 'sns', 'log'"
        )
