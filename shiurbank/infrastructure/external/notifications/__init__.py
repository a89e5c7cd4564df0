"""Notifications: SNS topics (admin, subscriber, per-series) and a logging backend.

Implementations satisfy shiurbank.application.interfaces.services.INotificationService.
"""

from shiurbank.infrastructure.external.notifications.factory import NotificationFactory

__all__ = ["NotificationFactory"]
