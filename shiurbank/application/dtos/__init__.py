"""Application DTOs (no ORM dependency)."""

from shiurbank.application.dtos.recording import (
    AudioObject,
    RecordingCreate,
    RecordingResult,
    RecordingUpload,
    UploadedRecording,
)
from shiurbank.application.dtos.search import SearchPage, SearchVocabulary
from shiurbank.application.dtos.series import (
    ApplicationInfo,
    ApplyResult,
    GabbaiCredentials,
    MySeriesItem,
    ParticipantItem,
    PendingApplicant,
    PendingSeriesVerification,
    RebbiResult,
    SeriesCreate,
    SeriesCreated,
    SeriesDetail,
    TopicResult,
)
from shiurbank.application.dtos.subscription import (
    SubscriberTypeResult,
    SubscriptionResult,
    SubscriptionStatus,
)
from shiurbank.application.dtos.user import (
    AccountCreate,
    AdminUserItem,
    InstitutionResult,
    SessionUser,
    UserResult,
)

__all__ = [
    "AccountCreate",
    "AdminUserItem",
    "ApplicationInfo",
    "ApplyResult",
    "AudioObject",
    "GabbaiCredentials",
    "InstitutionResult",
    "MySeriesItem",
    "ParticipantItem",
    "PendingApplicant",
    "PendingSeriesVerification",
    "RebbiResult",
    "RecordingCreate",
    "RecordingResult",
    "RecordingUpload",
    "SearchPage",
    "SearchVocabulary",
    "SeriesCreate",
    "SeriesCreated",
    "SeriesDetail",
    "SessionUser",
    "SubscriberTypeResult",
    "SubscriptionResult",
    "SubscriptionStatus",
    "TopicResult",
    "UploadedRecording",
]
