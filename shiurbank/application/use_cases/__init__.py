"""Application use cases: one entry point per workflow."""

from shiurbank.application.use_cases.accounts import AccountService
from shiurbank.application.use_cases.admin import AdminService, DatabaseControlService
from shiurbank.application.use_cases.audio import AudioService
from shiurbank.application.use_cases.catalog import CatalogService
from shiurbank.application.use_cases.participants import (
    ParticipantApprovalService,
    ParticipantManagementService,
)
from shiurbank.application.use_cases.recordings import (
    RecordingQueryService,
    RecordingUploadService,
)
from shiurbank.application.use_cases.search import SearchService
from shiurbank.application.use_cases.series import SeriesService
from shiurbank.application.use_cases.subscriptions import SubscriptionService

__all__ = [
    "AccountService",
    "AdminService",
    "AudioService",
    "CatalogService",
    "DatabaseControlService",
    "ParticipantApprovalService",
    "ParticipantManagementService",
    "RecordingQueryService",
    "RecordingUploadService",
    "SearchService",
    "SeriesService",
    "SubscriptionService",
]
