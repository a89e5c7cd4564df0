"""Admin API: database instance control, series verification queue, user admin rights.

rds/status and the *-public routes need no session (they are used while the
database is down); everything else requires an admin session.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from shiurbank.api.dependencies import (
    AuthContext,
    get_admin_service,
    get_database_control_service,
)
from shiurbank.application.use_cases import AdminService, DatabaseControlService
from shiurbank.schemas.admin import (
    AdminPasswordRequest,
    AdminUser,
    AdminUsersResponse,
    DatabaseStatusResponse,
    IsAdminResponse,
    PendingPermission,
    PendingPermissionsResponse,
)
from shiurbank.schemas.base import MessageResponse, UserIdRequest

router = APIRouter()

Admin = Annotated[AdminService, Depends(get_admin_service)]
DbControl = Annotated[DatabaseControlService, Depends(get_database_control_service)]


def _password(body: AdminPasswordRequest | None) -> str | None:
    return body.admin_password if body else None


@router.get("/check", response_model=IsAdminResponse)
async def check_admin(ctx: AuthContext):
    return IsAdminResponse(is_admin=ctx.is_admin)


@router.get("/rds/status", response_model=DatabaseStatusResponse)
async def database_status(control_svc: DbControl):
    """Instance status, "not-found" or "error". No login."""
    return DatabaseStatusResponse(status=await control_svc.status())


@router.post("/rds/start", response_model=MessageResponse)
async def start_database(ctx: AuthContext, control_svc: DbControl):
    await control_svc.start(ctx)
    return MessageResponse(message="Database start initiated")


@router.post("/rds/stop", response_model=MessageResponse)
async def stop_database(ctx: AuthContext, control_svc: DbControl):
    await control_svc.stop(ctx)
    return MessageResponse(message="Database stop initiated")


@router.post("/rds/verify-password", response_model=MessageResponse)
async def verify_password(control_svc: DbControl, body: AdminPasswordRequest | None = None):
    control_svc.verify_password(_password(body))
    return MessageResponse(message="Password verified")


@router.post("/rds/start-public", response_model=MessageResponse)
async def start_database_public(
    control_svc: DbControl, body: AdminPasswordRequest | None = None
):
    await control_svc.start_public(_password(body))
    return MessageResponse(message="Database start initiated")


@router.post("/rds/stop-public", response_model=MessageResponse)
async def stop_database_public(
    control_svc: DbControl, body: AdminPasswordRequest | None = None
):
    await control_svc.stop_public(_password(body))
    return MessageResponse(message="Database stop initiated")


@router.get("/pending-permissions", response_model=PendingPermissionsResponse)
async def pending_permissions(ctx: AuthContext, admin_svc: Admin):
    pending = await admin_svc.list_pending_series(ctx)
    return PendingPermissionsResponse(
        pending_permissions=[PendingPermission.from_pending(p) for p in pending]
    )


@router.post("/pending-permissions/{pending_id}/verify", response_model=MessageResponse)
async def verify_pending_permission(pending_id: int, ctx: AuthContext, admin_svc: Admin):
    await admin_svc.verify_series(ctx, pending_id)
    return MessageResponse(message="Pending permission verified and removed")


@router.get("/users", response_model=AdminUsersResponse)
async def list_users(ctx: AuthContext, admin_svc: Admin):
    users = await admin_svc.list_users(ctx)
    return AdminUsersResponse(users=[AdminUser.from_item(u) for u in users])


@router.post("/add-admin", response_model=MessageResponse)
async def add_admin(ctx: AuthContext, admin_svc: Admin, body: UserIdRequest | None = None):
    await admin_svc.add_admin(ctx, body.user_id if body else None)
    return MessageResponse(message="User successfully added as admin")
