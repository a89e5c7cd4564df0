"""Persistence repositories. Re-exports for dependency injection."""

from shiurbank.infrastructure.persistence.repositories.admin_repo import AdminRepository
from shiurbank.infrastructure.persistence.repositories.application_repo import (
    ApplicationRepository,
)
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository
from shiurbank.infrastructure.persistence.repositories.catalog_repo import (
    InstitutionRepository,
    RebbiRepository,
    TopicRepository,
)
from shiurbank.infrastructure.persistence.repositories.membership_repo import (
    MembershipRepository,
)
from shiurbank.infrastructure.persistence.repositories.recording_repo import (
    RecordingRepository,
)
from shiurbank.infrastructure.persistence.repositories.search_repo import SearchRepository
from shiurbank.infrastructure.persistence.repositories.series_repo import SeriesRepository
from shiurbank.infrastructure.persistence.repositories.subscriber_repo import (
    SubscriberRepository,
)
from shiurbank.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AdminRepository",
    "ApplicationRepository",
    "BaseRepository",
    "InstitutionRepository",
    "MembershipRepository",
    "RebbiRepository",
    "RecordingRepository",
    "SearchRepository",
    "SeriesRepository",
    "SubscriberRepository",
    "TopicRepository",
    "UserRepository",
]
