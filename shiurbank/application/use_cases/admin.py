"""Admin use cases: user and series-verification management, database instance control."""

from __future__ import annotations

import logging
import secrets

from pydantic import SecretStr

from shiurbank.application.dtos.series import PendingSeriesVerification
from shiurbank.application.dtos.user import AdminUserItem
from shiurbank.application.interfaces.repositories import (
    IAdminRepository,
    IMembershipRepository,
    ISeriesRepository,
    IUserRepository,
)
from shiurbank.application.interfaces.services import IDatabaseControl
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

INVALID_ADMIN_PASSWORD = "Invalid admin password"


class DatabaseControlService:
    """Start, stop and report the managed database instance.

    Needs no database session. Session-based calls require an admin
    AuthorizationContext; the *_public calls take the emergency admin password
    instead, so they work while the database (and so the admin table) is down.
    """

    def __init__(self, db_control: IDatabaseControl, admin_password: SecretStr) -> None:
        self.db_control = db_control
        self.admin_password = admin_password

    def verify_password(self, provided: str | None) -> None:
        """Raise AuthenticationException unless provided matches the emergency password."""
        expected = self.admin_password.get_secret_value().encode()
        if not provided or not secrets.compare_digest(provided.encode(), expected):
            logger.warning("Rejected emergency admin password")
            raise AuthenticationException(INVALID_ADMIN_PASSWORD)

    async def status(self) -> str:
        return await self.db_control.get_status()

    async def start(self, ctx: AuthorizationContext) -> None:
        ctx.require_admin()
        await self.db_control.start()
        logger.info("Database start requested by %s", ctx.username)

    async def stop(self, ctx: AuthorizationContext) -> None:
        ctx.require_admin()
        await self.db_control.stop()
        logger.info("Database stop requested by %s", ctx.username)

    async def start_public(self, password: str | None) -> None:
        self.verify_password(password)
        await self.db_control.start()
        logger.info("Database start requested with the emergency password")

    async def stop_public(self, password: str | None) -> None:
        self.verify_password(password)
        await self.db_control.stop()
        logger.info("Database stop requested with the emergency password")


class AdminService:
    """Site-admin management of users and newly created series awaiting verification."""

    def __init__(
        self,
        admin_repo: IAdminRepository,
        user_repo: IUserRepository,
        series_repo: ISeriesRepository,
        membership_repo: IMembershipRepository,
    ) -> None:
        self.admin_repo = admin_repo
        self.user_repo = user_repo
        self.series_repo = series_repo
        self.membership_repo = membership_repo

    async def list_pending_series(
        self, ctx: AuthorizationContext
    ) -> list[PendingSeriesVerification]:
        ctx.require_admin()
        pending = await self.admin_repo.list_series_pending()
        details = {
            d.series_id: d
            for d in await self.series_repo.get_details([series_id for _, series_id, _ in pending])
        }
        items = []
        for pending_id, series_id, created_at in pending:
            series = details.get(series_id)
            if series is None:
                continue
            items.append(
                PendingSeriesVerification(
                    pending_id=pending_id,
                    series=series,
                    created_at=created_at,
                    gabbaim=await self.membership_repo.list_gabbaim(series_id),
                )
            )
        return items

    async def verify_series(self, ctx: AuthorizationContext, pending_id: int) -> None:
        ctx.require_admin()
        if not await self.admin_repo.delete_series_pending(pending_id):
            raise ResourceNotFoundException("Pending permission", pending_id)
        logger.info("Pending series %s verified by %s", pending_id, ctx.username)

    async def list_users(self, ctx: AuthorizationContext) -> list[AdminUserItem]:
        ctx.require_admin()
        admin_ids = await self.admin_repo.admin_user_ids()
        return [
            AdminUserItem(user=u, is_admin=u.user_id in admin_ids)
            for u in await self.user_repo.list_users()
        ]

    async def add_admin(self, ctx: AuthorizationContext, user_id: int | None) -> None:
        ctx.require_admin()
        if user_id is None:
            raise ValidationException("User ID is required", field="userId")
        if not await self.user_repo.exists(user_id):
            raise ResourceNotFoundException("User", user_id)
        if await self.admin_repo.is_admin(user_id):
            raise ValidationException("User is already an admin")
        await self.admin_repo.add_admin(user_id)
        logger.info("User %s made admin by %s", user_id, ctx.username)
