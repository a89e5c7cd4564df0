"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from shiurbank.domain.enums import RecordingSort

if TYPE_CHECKING:
    from shiurbank.application.dtos.recording import RecordingCreate, RecordingResult
    from shiurbank.application.dtos.series import (
        ParticipantItem,
        PendingApplicant,
        RebbiResult,
        SeriesCreate,
        SeriesDetail,
        TopicResult,
    )
    from shiurbank.application.dtos.subscription import (
        SubscriberTypeResult,
        SubscriptionResult,
    )
    from shiurbank.application.dtos.user import (
        AccountCreate,
        InstitutionResult,
        UserResult,
    )
    from shiurbank.domain.entities.search import ParsedQuery, RecordingHit, SeriesHit


# User repository interface
class IUserRepository(Protocol):
    async def exists(self, entity_id: int) -> bool: ...

    async def get_result(self, user_id: int) -> UserResult | None:
        """Return user by ID (no password)."""

    async def username_exists(self, username: str) -> bool: ...

    async def email_exists(self, email: str) -> bool:
        """Case-insensitive e-mail lookup."""

    async def authenticate(self, username: str, password: str) -> UserResult | None:
        """Return user when credentials match, else None."""

    async def create_user(self, data: AccountCreate) -> UserResult:
        """Insert user and link institutions. Raises FieldValidationException."""

    async def list_users(self) -> list[UserResult]: ...

    async def get_many(self, user_ids: list[int]) -> list[UserResult]: ...


# Catalog repository interfaces
class IInstitutionRepository(Protocol):
    async def exists(self, entity_id: int) -> bool: ...

    async def list_all(self) -> list[InstitutionResult]: ...

    async def list_names(self) -> list[str]:
        """Distinct lower-cased institution names."""


class ITopicRepository(Protocol):
    async def exists(self, entity_id: int) -> bool: ...

    async def list_all(self) -> list[TopicResult]: ...

    async def list_names(self) -> list[str]:
        """Distinct lower-cased topic names."""


class IRebbiRepository(Protocol):
    async def exists(self, entity_id: int) -> bool: ...

    async def list_all(self) -> list[RebbiResult]: ...

    async def list_names(self) -> list[str]:
        """Distinct lower-cased "title fname lname" names."""


# Series repository interface
class ISeriesRepository(Protocol):
    async def get_detail(self, series_id: int) -> SeriesDetail | None: ...

    async def get_details(self, series_ids: list[int]) -> list[SeriesDetail]: ...

    async def create_series(self, data: SeriesCreate) -> int:
        """Insert series; return its ID."""

    async def set_topic_arn(self, series_id: int, topic_arn: str) -> None: ...

    async def get_topic_arn(self, series_id: int) -> str | None: ...

    async def user_moderates_rebbi(
        self, user_id: int, rebbi_id: int, exclude_series_id: int | None = None
    ) -> bool:
        """True if user is gabbai of another series by this rebbi."""

    async def delete_series(self, series_id: int) -> bool:
        """Delete series and its child rows. False if it did not exist."""


# Membership repository interface
class IMembershipRepository(Protocol):
    async def is_gabbai(self, user_id: int, series_id: int) -> bool: ...

    async def is_participant(self, user_id: int, series_id: int) -> bool: ...

    async def gabbai_series_ids(self, user_id: int) -> frozenset[int]: ...

    async def participant_series_ids(self, user_id: int) -> frozenset[int]: ...

    async def add_gabbai(self, user_id: int, series_id: int) -> None: ...

    async def add_participant(self, user_id: int, series_id: int) -> None: ...

    async def list_gabbaim(self, series_id: int) -> list[UserResult]: ...

    async def list_participants(self, series_id: int) -> list[ParticipantItem]:
        """Ordered by last name, first name."""

    async def remove_participant(self, user_id: int, series_id: int) -> bool:
        """Remove roster, gabbai, subscription and favorite rows. False if not a participant."""


# Participant application repository interface
class IApplicationRepository(Protocol):
    async def has_pending(self, user_id: int, series_id: int) -> bool: ...

    async def create_pending(self, user_id: int, series_id: int) -> int: ...

    async def delete_pending(self, user_id: int, series_id: int) -> bool:
        """False if there was no pending row."""

    async def list_for_series(self, series_id: int) -> list[PendingApplicant]: ...

    async def pending_series_ids(self, user_id: int) -> frozenset[int]: ...


# Admin repository interface
class IAdminRepository(Protocol):
    async def is_admin(self, user_id: int) -> bool: ...

    async def add_admin(self, user_id: int) -> None: ...

    async def admin_user_ids(self) -> frozenset[int]: ...

    async def add_series_pending(self, series_id: int) -> int: ...

    async def list_series_pending(self) -> list[tuple[int, int, datetime | None]]:
        """(pending_id, series_id, created_at), oldest first."""

    async def delete_series_pending(self, pending_id: int) -> bool: ...


# Recording repository interface
class IRecordingRepository(Protocol):
    async def create_recording(self, data: RecordingCreate) -> int:
        """Insert with a placeholder file path; return recording ID."""

    async def update_file_path(self, recording_id: int, s3_file_path: str) -> None: ...

    async def list_for_series(
        self, series_id: int, sort: RecordingSort = RecordingSort.NEWEST
    ) -> list[RecordingResult]: ...


# Subscriber repository interface
class ISubscriberRepository(Protocol):
    async def list_types(self) -> list[SubscriberTypeResult]: ...

    async def type_exists(self, type_id: int) -> bool: ...

    async def get_user_subscription(
        self, user_id: int, series_id: int
    ) -> SubscriptionResult | None: ...

    async def is_subscribed(self, user_id: int, series_id: int, type_id: int) -> bool: ...

    async def add_subscription(
        self, user_id: int, series_id: int, type_id: int, subscription_arn: str
    ) -> int: ...

    async def remove_subscription(self, user_id: int, series_id: int) -> int: ...

    async def update_arn(self, user_id: int, series_id: int, subscription_arn: str) -> None: ...


# Search repository interface
class ISearchRepository(Protocol):
    async def find_series(self, parsed: ParsedQuery, user_id: int) -> list[SeriesHit]:
        """Series matching any parsed term that the user may see."""

    async def find_recordings(self, parsed: ParsedQuery, user_id: int) -> list[RecordingHit]:
        """Recordings matching any parsed term that the user may see, newest first."""
