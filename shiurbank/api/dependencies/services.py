"""Use case dependencies (composition root).

Every provider shares the request's transactional session, so all writes in
one request commit or roll back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.interfaces.services import (
    IDatabaseControl,
    INotificationService,
)
from shiurbank.application.interfaces.storage import IStorageService
from shiurbank.application.use_cases import (
    AccountService,
    AdminService,
    AudioService,
    CatalogService,
    DatabaseControlService,
    ParticipantApprovalService,
    ParticipantManagementService,
    RecordingQueryService,
    RecordingUploadService,
    SearchService,
    SeriesService,
    SubscriptionService,
)
from shiurbank.core.config import get_settings
from shiurbank.infrastructure.persistence.database import get_db_transactional
from shiurbank.infrastructure.persistence.repositories import (
    AdminRepository,
    ApplicationRepository,
    InstitutionRepository,
    MembershipRepository,
    RebbiRepository,
    RecordingRepository,
    SearchRepository,
    SeriesRepository,
    SubscriberRepository,
    TopicRepository,
    UserRepository,
)

from .cloud import get_database_control, get_notification_service, get_storage_service

Db = Annotated[AsyncSession, Depends(get_db_transactional)]
Storage = Annotated[IStorageService, Depends(get_storage_service)]
Notifier = Annotated[INotificationService, Depends(get_notification_service)]
DatabaseControl = Annotated[IDatabaseControl, Depends(get_database_control)]


async def get_account_service(db: Db) -> AccountService:
    return AccountService(UserRepository(db))


async def get_catalog_service(db: Db) -> CatalogService:
    return CatalogService(InstitutionRepository(db), TopicRepository(db), RebbiRepository(db))


async def get_series_service(db: Db, storage: Storage, notifier: Notifier) -> SeriesService:
    settings = get_settings()
    return SeriesService(
        series_repo=SeriesRepository(db),
        membership_repo=MembershipRepository(db),
        application_repo=ApplicationRepository(db),
        admin_repo=AdminRepository(db),
        user_repo=UserRepository(db),
        rebbi_repo=RebbiRepository(db),
        topic_repo=TopicRepository(db),
        institution_repo=InstitutionRepository(db),
        storage=storage,
        notifier=notifier,
        bucket_prefix=settings.s3_bucket_prefix,
        topic_prefix=settings.sns_series_topic_prefix,
    )


async def get_participant_approval_service(db: Db) -> ParticipantApprovalService:
    return ParticipantApprovalService(
        SeriesRepository(db), MembershipRepository(db), ApplicationRepository(db)
    )


async def get_participant_management_service(db: Db) -> ParticipantManagementService:
    return ParticipantManagementService(MembershipRepository(db))


async def get_recording_upload_service(
    db: Db, storage: Storage, notifier: Notifier
) -> RecordingUploadService:
    settings = get_settings()
    return RecordingUploadService(
        recording_repo=RecordingRepository(db),
        series_repo=SeriesRepository(db),
        storage=storage,
        notifier=notifier,
        bucket_prefix=settings.s3_bucket_prefix,
        max_upload_size=settings.max_upload_size,
    )


async def get_recording_query_service(db: Db) -> RecordingQueryService:
    return RecordingQueryService(RecordingRepository(db))


def get_audio_service(storage: Storage) -> AudioService:
    """Audio streaming needs storage only, no database session."""
    settings = get_settings()
    return AudioService(storage, settings.s3_default_bucket, settings.s3_bucket_prefix)


async def get_subscription_service(db: Db, notifier: Notifier) -> SubscriptionService:
    return SubscriptionService(
        SubscriberRepository(db), SeriesRepository(db), UserRepository(db), notifier
    )


async def get_search_service(db: Db) -> SearchService:
    return SearchService(
        search_repo=SearchRepository(db),
        rebbi_repo=RebbiRepository(db),
        topic_repo=TopicRepository(db),
        institution_repo=InstitutionRepository(db),
        application_repo=ApplicationRepository(db),
    )


async def get_admin_service(db: Db) -> AdminService:
    return AdminService(
        AdminRepository(db), UserRepository(db), SeriesRepository(db), MembershipRepository(db)
    )


def get_database_control_service(control: DatabaseControl) -> DatabaseControlService:
    """Database control needs no database session (it must work while the database is down)."""
    return DatabaseControlService(control, get_settings().shiurbank_admin_password)
