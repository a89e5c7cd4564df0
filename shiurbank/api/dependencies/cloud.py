"""Cloud adapter dependencies: storage, notifications, database control.

The lifespan builds one long-lived adapter of each kind on app.state; when it
has not run (scripts, bare ASGI transports) the factories build one from
settings. Tests replace these with fakes via app.dependency_overrides.
"""

from __future__ import annotations

from fastapi import Request

from shiurbank.application.interfaces.services import (
    IDatabaseControl,
    INotificationService,
)
from shiurbank.application.interfaces.storage import IStorageService
from shiurbank.core.config import get_settings


def get_storage_service(request: Request) -> IStorageService:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        from shiurbank.infrastructure.external.storage import StorageFactory

        storage = StorageFactory.create_storage_service(get_settings())
        request.app.state.storage = storage
    return storage


def get_notification_service(request: Request) -> INotificationService:
    notifier = getattr(request.app.state, "notifier", None)
    if notifier is None:
        from shiurbank.infrastructure.external.notifications import NotificationFactory

        notifier = NotificationFactory.create_notification_service(get_settings())
        request.app.state.notifier = notifier
    return notifier


def get_database_control(request: Request) -> IDatabaseControl:
    control = getattr(request.app.state, "database_control", None)
    if control is None:
        from shiurbank.infrastructure.external.database_control import (
            DatabaseControlFactory,
        )

        control = DatabaseControlFactory.create_database_control(get_settings())
        request.app.state.database_control = control
    return control
