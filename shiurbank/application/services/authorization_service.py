"""Authorization: the per-request context of who the user is and which series they hold roles in."""

from __future__ import annotations

from dataclasses import dataclass, field

from shiurbank.application.dtos.user import SessionUser
from shiurbank.application.interfaces.repositories import (
    IAdminRepository,
    IMembershipRepository,
)
from shiurbank.domain.exceptions import AuthorizationException


@dataclass(frozen=True)
class AuthorizationContext:
    """Roles of the logged-in user, loaded once per request.

    Handlers and use cases ask capability questions here instead of
    re-querying the rosters.
    """

    user_id: int
    username: str
    is_admin: bool = False
    gabbai_series_ids: frozenset[int] = field(default_factory=frozenset)
    participant_series_ids: frozenset[int] = field(default_factory=frozenset)

    def is_gabbai(self, series_id: int) -> bool:
        return series_id in self.gabbai_series_ids

    def is_participant(self, series_id: int) -> bool:
        return series_id in self.participant_series_ids

    def has_access(self, series_id: int) -> bool:
        """Roster membership in either role grants access to restricted content."""
        return self.is_participant(series_id) or self.is_gabbai(series_id)

    def require_admin(self, message: str = "Admin access required") -> None:
        if not self.is_admin:
            raise AuthorizationException(message, role="admin")

    def require_gabbai(
        self,
        series_id: int,
        message: str = "You must be a gabbai of this series.",
    ) -> None:
        if not self.is_gabbai(series_id):
            raise AuthorizationException(message, role="gabbai", series_id=series_id)


class AuthorizationService:
    """Builds AuthorizationContext from the session identity."""

    def __init__(
        self,
        membership_repo: IMembershipRepository,
        admin_repo: IAdminRepository,
    ) -> None:
        self.membership_repo = membership_repo
        self.admin_repo = admin_repo

    async def build_context(self, user: SessionUser) -> AuthorizationContext:
        return AuthorizationContext(
            user_id=user.user_id,
            username=user.username,
            is_admin=await self.admin_repo.is_admin(user.user_id),
            gabbai_series_ids=await self.membership_repo.gabbai_series_ids(user.user_id),
            participant_series_ids=await self.membership_repo.participant_series_ids(
                user.user_id
            ),
        )
