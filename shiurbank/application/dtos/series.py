"""DTOs for series, membership and approval use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from shiurbank.application.dtos.user import UserResult


@dataclass(frozen=True)
class TopicResult:
    topic_id: int
    name: str


@dataclass(frozen=True)
class RebbiResult:
    rebbi_id: int
    title: str | None
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.title, self.first_name, self.last_name) if p)


@dataclass(frozen=True)
class SeriesDetail:
    """Series read-model joined with rebbi, topic and institution names."""

    series_id: int
    rebbi_id: int
    topic_id: int
    inst_id: int
    description: str | None
    requires_permission: bool
    sns_topic_arn: str | None
    rebbi_name: str
    topic_name: str
    institution_name: str

    @property
    def display_name(self) -> str:
        """Human label, "topic — rebbi"."""
        return f"{self.topic_name} — {self.rebbi_name}"


@dataclass(frozen=True)
class MySeriesItem:
    """A series on the user's dashboard."""

    series: SeriesDetail
    is_gabbai: bool
    is_pending: bool


@dataclass(frozen=True)
class GabbaiCredentials:
    """Username/password pair proving a co-gabbai consents to moderate the series."""

    username: str | None
    password: str | None


@dataclass(frozen=True)
class SeriesCreate:
    """Series creation command."""

    rebbi_id: int
    topic_id: int
    inst_id: int
    description: str | None
    requires_permission: bool
    extra_gabbaim: list[GabbaiCredentials] = field(default_factory=list)


@dataclass(frozen=True)
class SeriesCreated:
    series_id: int
    needs_verification: bool
    bucket_name: str
    topic_arn: str


@dataclass(frozen=True)
class ParticipantItem:
    """A participant as listed to the series' gabbaim."""

    user: UserResult
    is_gabbai: bool


@dataclass(frozen=True)
class PendingApplicant:
    """A user waiting for approval into a series."""

    pending_id: int
    user: UserResult
    applied_at: datetime | None


@dataclass(frozen=True)
class ApplicationInfo:
    """What a user sees before applying to a series."""

    series: SeriesDetail
    gabbaim: list[UserResult]
    is_participant: bool
    has_pending_application: bool


@dataclass(frozen=True)
class ApplyResult:
    auto_approved: bool
    message: str


@dataclass(frozen=True)
class PendingSeriesVerification:
    """A newly created series waiting for admin verification."""

    pending_id: int
    series: SeriesDetail
    created_at: datetime | None
    gabbaim: list[UserResult] = field(default_factory=list)
