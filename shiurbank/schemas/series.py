"""Series API schemas: creation, details, dashboard, participants and approval."""

from datetime import datetime

from pydantic import Field

from shiurbank.application.dtos.series import (
    MySeriesItem,
    ParticipantItem,
    PendingApplicant,
    SeriesDetail,
)
from shiurbank.application.dtos.user import UserResult
from shiurbank.schemas.base import CamelModel, SuccessResponse


class GabbaiCredentialsIn(CamelModel):
    username: str | None = None
    password: str | None = None


class SeriesCreateRequest(CamelModel):
    rebbi_id: int | None = None
    topic_id: int | None = None
    inst_id: int | None = None
    description: str | None = None
    requires_permission: bool = False
    extra_gabbaim: list[GabbaiCredentialsIn] = Field(default_factory=list)


class SeriesCreateResponse(SuccessResponse):
    series_id: int
    needs_verification: bool
    message: str


class SeriesInfo(CamelModel):
    """Series fields shown to clients."""

    series_id: int
    description: str | None = None
    requires_permission: bool
    topic_name: str
    rebbi_name: str
    institution_name: str
    display_name: str

    @classmethod
    def from_detail(cls, s: SeriesDetail) -> "SeriesInfo":
        return cls(
            series_id=s.series_id,
            description=s.description,
            requires_permission=s.requires_permission,
            topic_name=s.topic_name,
            rebbi_name=s.rebbi_name,
            institution_name=s.institution_name,
            display_name=s.display_name,
        )


class SeriesDetailResponse(SuccessResponse, SeriesInfo):
    @classmethod
    def from_detail(cls, s: SeriesDetail) -> "SeriesDetailResponse":
        return cls(**SeriesInfo.from_detail(s).model_dump())


class MySeriesEntry(SeriesInfo):
    is_gabbai: bool
    is_pending: bool

    @classmethod
    def from_item(cls, item: MySeriesItem) -> "MySeriesEntry":
        return cls(
            **SeriesInfo.from_detail(item.series).model_dump(),
            is_gabbai=item.is_gabbai,
            is_pending=item.is_pending,
        )


class MySeriesResponse(SuccessResponse):
    series: list[MySeriesEntry]


class IsGabbaiResponse(SuccessResponse):
    is_gabbai: bool


class UserSummary(CamelModel):
    user_id: int
    username: str
    display_name: str
    email: str | None = None

    @classmethod
    def from_result(cls, u: UserResult) -> "UserSummary":
        return cls(
            user_id=u.user_id,
            username=u.username,
            display_name=u.display_name,
            email=u.email,
        )


class ApplicationInfoResponse(SuccessResponse):
    series_info: SeriesInfo
    gabbaim: list[UserSummary]
    is_participant: bool
    has_pending_application: bool


class ApplyResponse(SuccessResponse):
    auto_approved: bool
    message: str


class PendingParticipant(UserSummary):
    pending_id: int
    applied_at: datetime | None = None

    @classmethod
    def from_applicant(cls, a: PendingApplicant) -> "PendingParticipant":
        return cls(
            **UserSummary.from_result(a.user).model_dump(),
            pending_id=a.pending_id,
            applied_at=a.applied_at,
        )


class PendingParticipantsResponse(SuccessResponse):
    pending_participants: list[PendingParticipant]


class Participant(UserSummary):
    is_gabbai: bool

    @classmethod
    def from_item(cls, p: ParticipantItem) -> "Participant":
        return cls(**UserSummary.from_result(p.user).model_dump(), is_gabbai=p.is_gabbai)


class ParticipantsResponse(SuccessResponse):
    participants: list[Participant]
