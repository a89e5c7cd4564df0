"""AuthorizationContext capability checks and AuthorizationService.build_context."""

from unittest.mock import AsyncMock

import pytest

from shiurbank.application.dtos.user import SessionUser
from shiurbank.application.services.authorization_service import (
    AuthorizationContext,
    AuthorizationService,
)
from shiurbank.domain.exceptions import AuthorizationException


def test_gabbai_has_access_without_participant_row() -> None:
    ctx = AuthorizationContext(
        user_id=1, username="gabbai", gabbai_series_ids=frozenset({7})
    )
    assert ctx.is_gabbai(7)
    assert ctx.has_access(7)
    assert not ctx.is_participant(7)
    assert not ctx.has_access(8)


def test_require_admin_raises_for_non_admin() -> None:
    ctx = AuthorizationContext(user_id=1, username="user")
    with pytest.raises(AuthorizationException) as exc_info:
        ctx.require_admin()
    assert exc_info.value.error_code == "AUTHORIZATION_ERROR"
    assert exc_info.value.details == {"role": "admin"}


def test_require_gabbai_uses_given_message() -> None:
    ctx = AuthorizationContext(user_id=1, username="user", participant_series_ids=frozenset({3}))
    with pytest.raises(AuthorizationException) as exc_info:
        ctx.require_gabbai(3, "Not yours")
    assert exc_info.value.message == "Not yours"
    assert exc_info.value.details["series_id"] == 3


async def test_build_context_loads_roles_once() -> None:
    membership_repo = AsyncMock()
    membership_repo.gabbai_series_ids = AsyncMock(return_value=frozenset({1}))
    membership_repo.participant_series_ids = AsyncMock(return_value=frozenset({1, 2}))
    admin_repo = AsyncMock()
    admin_repo.is_admin = AsyncMock(return_value=True)

    ctx = await AuthorizationService(membership_repo, admin_repo).build_context(
        SessionUser(user_id=5, username="moshe")
    )

    assert ctx == AuthorizationContext(
        user_id=5,
        username="moshe",
        is_admin=True,
        gabbai_series_ids=frozenset({1}),
        participant_series_ids=frozenset({1, 2}),
    )
    admin_repo.is_admin.assert_awaited_once_with(5)
