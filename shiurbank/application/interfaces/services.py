"""Service interfaces (ports) for the application layer.

Protocols for the notification topic service and managed database control
(DIP). Implementations live in shiurbank.infrastructure.external.
"""

from __future__ import annotations

from typing import Protocol


# Notification service interface
class INotificationService(Protocol):
    """Topic-based e-mail notifications: one shared admin topic, one topic per series."""

    async def initialize(self) -> None:
        """Create or look up the shared admin and subscriber topics, subscribe admin e-mails."""

    async def notify_admins(self, subject: str, message: str) -> None:
        """Publish to the admin topic. Raises NotificationError."""

    async def publish(self, topic_arn: str, subject: str, message: str) -> None:
        """Publish to topic_arn. Raises NotificationError."""

    async def create_topic(self, name: str) -> str:
        """Create (or look up) topic by name; returns its ARN. Raises NotificationError."""

    async def delete_topic(self, topic_arn: str) -> None:
        """Delete topic. Raises NotificationError."""

    async def subscribe_email(self, topic_arn: str, email: str) -> str:
        """Subscribe email; returns the subscription ARN or "pending confirmation"."""

    async def unsubscribe(self, subscription_arn: str) -> None:
        """Remove a confirmed subscription. Raises NotificationError."""

    async def find_subscription_arn_by_email(self, topic_arn: str, email: str) -> str | None:
        """Confirmed subscription ARN for email on topic_arn, or None."""


# Managed database control interface
class IDatabaseControl(Protocol):
    """Start/stop/status of the managed database instance."""

    async def get_status(self) -> str:
        """Instance status (e.g. "available", "stopped"), "not-found" or "error". Never raises."""

    async def start(self) -> None:
        """Request instance start. Raises DatabaseControlError."""

    async def stop(self) -> None:
        """Request instance stop. Raises DatabaseControlError."""
