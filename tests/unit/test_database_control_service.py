"""DatabaseControlService: emergency password and admin-only start/stop."""

from unittest.mock import AsyncMock

import pytest
from pydantic import SecretStr

from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.application.use_cases.admin import (
    INVALID_ADMIN_PASSWORD,
    DatabaseControlService,
)
from shiurbank.domain.exceptions import AuthenticationException, AuthorizationException


@pytest.fixture
def control_mocks():
    db_control = AsyncMock()
    db_control.get_status = AsyncMock(return_value="stopped")
    return DatabaseControlService(db_control, SecretStr("s3cret!")), db_control


@pytest.mark.parametrize("password", [None, "", "wrong", "s3cret"])
def test_verify_password_rejects(control_mocks, password) -> None:
    svc, _ = control_mocks
    with pytest.raises(AuthenticationException) as exc_info:
        svc.verify_password(password)
    assert exc_info.value.message == INVALID_ADMIN_PASSWORD


async def test_start_public_with_password(control_mocks) -> None:
    svc, db_control = control_mocks
    await svc.start_public("s3cret!")
    db_control.start.assert_awaited_once()


async def test_stop_public_wrong_password_does_not_stop(control_mocks) -> None:
    svc, db_control = control_mocks
    with pytest.raises(AuthenticationException):
        await svc.stop_public("nope")
    db_control.stop.assert_not_awaited()


async def test_session_start_requires_admin(control_mocks) -> None:
    svc, db_control = control_mocks
    with pytest.raises(AuthorizationException):
        await svc.start(AuthorizationContext(user_id=1, username="user"))
    db_control.start.assert_not_awaited()

    await svc.stop(AuthorizationContext(user_id=2, username="admin", is_admin=True))
    db_control.stop.assert_awaited_once()


async def test_status(control_mocks) -> None:
    svc, _ = control_mocks
    assert await svc.status() == "stopped"
