"""Admin API schemas."""

from datetime import datetime

from shiurbank.application.dtos.series import PendingSeriesVerification
from shiurbank.application.dtos.user import AdminUserItem
from shiurbank.schemas.base import CamelModel, SuccessResponse
from shiurbank.schemas.series import SeriesInfo, UserSummary


class AdminPasswordRequest(CamelModel):
    admin_password: str | None = None


class IsAdminResponse(SuccessResponse):
    is_admin: bool


class DatabaseStatusResponse(SuccessResponse):
    status: str


class PendingPermission(SeriesInfo):
    pending_id: int
    created_at: datetime | None = None
    gabbaim: list[UserSummary]

    @classmethod
    def from_pending(cls, p: PendingSeriesVerification) -> "PendingPermission":
        return cls(
            **SeriesInfo.from_detail(p.series).model_dump(),
            pending_id=p.pending_id,
            created_at=p.created_at,
            gabbaim=[UserSummary.from_result(u) for u in p.gabbaim],
        )


class PendingPermissionsResponse(SuccessResponse):
    pending_permissions: list[PendingPermission]


class AdminUser(UserSummary):
    is_admin: bool

    @classmethod
    def from_item(cls, item: AdminUserItem) -> "AdminUser":
        return cls(**UserSummary.from_result(item.user).model_dump(), is_admin=item.is_admin)


class AdminUsersResponse(SuccessResponse):
    users: list[AdminUser]
