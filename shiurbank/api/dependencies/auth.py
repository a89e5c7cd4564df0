"""Session identity and per-request authorization context."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.user import SessionUser, UserResult
from shiurbank.application.services.authorization_service import (
    AuthorizationContext,
    AuthorizationService,
)
from shiurbank.domain.exceptions import AuthenticationException, ServiceUnavailableException
from shiurbank.infrastructure.persistence.database import get_db_transactional
from shiurbank.infrastructure.persistence.repositories import (
    AdminRepository,
    MembershipRepository,
)

logger = logging.getLogger(__name__)

SESSION_USER_ID = "user_id"
SESSION_USERNAME = "username"


def login_session(request: Request, user: UserResult) -> None:
    """Store the logged-in identity in the signed session cookie."""
    request.session.clear()
    request.session[SESSION_USER_ID] = user.user_id
    request.session[SESSION_USERNAME] = user.username


def logout_session(request: Request) -> None:
    request.session.clear()


def get_optional_session_user(request: Request) -> SessionUser | None:
    """Identity from the session cookie, or None when not logged in."""
    user_id = request.session.get(SESSION_USER_ID)
    username = request.session.get(SESSION_USERNAME)
    if not isinstance(user_id, int) or not username:
        return None
    return SessionUser(user_id=user_id, username=username)


def get_session_user(
    user: Annotated[SessionUser | None, Depends(get_optional_session_user)],
) -> SessionUser:
    """Require a logged-in user (401 "Not logged in." otherwise)."""
    if user is None:
        raise AuthenticationException()
    return user


async def get_authorization_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AuthorizationService:
    return AuthorizationService(MembershipRepository(db), AdminRepository(db))


async def get_auth_context(
    user: Annotated[SessionUser, Depends(get_session_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> AuthorizationContext:
    """Roles of the logged-in user, loaded once per request."""
    try:
        return await auth_svc.build_context(user)
    except (DBAPIError, OSError) as e:
        logger.error("Could not load roles for user %s: %s", user.user_id, e)
        raise ServiceUnavailableException() from e


CurrentUser = Annotated[SessionUser, Depends(get_session_user)]
AuthContext = Annotated[AuthorizationContext, Depends(get_auth_context)]
