"""ParticipantApprovalService unit tests with mocked repositories."""

from unittest.mock import AsyncMock

import pytest

from shiurbank.application.dtos.series import SeriesDetail
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.application.use_cases.participants.approval import (
    ALREADY_PARTICIPANT,
    ALREADY_PENDING,
    ParticipantApprovalService,
)
from shiurbank.domain.exceptions import (
    AuthorizationException,
    BusinessRuleException,
    DuplicateRecordException,
    ResourceNotFoundException,
    ValidationException,
)

SERIES_ID = 10


def _series(requires_permission: bool) -> SeriesDetail:
    return SeriesDetail(
        series_id=SERIES_ID,
        rebbi_id=1,
        topic_id=1,
        inst_id=1,
        description="Weekly shiur",
        requires_permission=requires_permission,
        sns_topic_arn=None,
        rebbi_name="Rabbi Moshe Cohen",
        topic_name="Halacha",
        institution_name="Yeshiva University",
    )


@pytest.fixture
def approval_mocks():
    """Service with a restricted series and a user who has no record yet."""
    series_repo = AsyncMock()
    series_repo.get_detail = AsyncMock(return_value=_series(requires_permission=True))
    membership_repo = AsyncMock()
    membership_repo.is_participant = AsyncMock(return_value=False)
    application_repo = AsyncMock()
    application_repo.has_pending = AsyncMock(return_value=False)
    application_repo.delete_pending = AsyncMock(return_value=True)
    svc = ParticipantApprovalService(series_repo, membership_repo, application_repo)
    return svc, series_repo, membership_repo, application_repo


@pytest.fixture
def user_ctx() -> AuthorizationContext:
    return AuthorizationContext(user_id=2, username="talmid")


@pytest.fixture
def gabbai_ctx() -> AuthorizationContext:
    return AuthorizationContext(
        user_id=1, username="gabbai", gabbai_series_ids=frozenset({SERIES_ID})
    )


async def test_apply_to_open_series_auto_approves(approval_mocks, user_ctx) -> None:
    svc, series_repo, membership_repo, application_repo = approval_mocks
    series_repo.get_detail.return_value = _series(requires_permission=False)

    result = await svc.apply(user_ctx, SERIES_ID)

    assert result.auto_approved is True
    membership_repo.add_participant.assert_awaited_once_with(2, SERIES_ID)
    application_repo.create_pending.assert_not_awaited()


async def test_apply_to_restricted_series_creates_one_pending_row(
    approval_mocks, user_ctx
) -> None:
    svc, _, membership_repo, application_repo = approval_mocks

    result = await svc.apply(user_ctx, SERIES_ID)

    assert result.auto_approved is False
    application_repo.create_pending.assert_awaited_once_with(2, SERIES_ID)
    membership_repo.add_participant.assert_not_awaited()


async def test_apply_while_pending_rejected(approval_mocks, user_ctx) -> None:
    svc, _, _, application_repo = approval_mocks
    application_repo.has_pending.return_value = True

    with pytest.raises(BusinessRuleException) as exc_info:
        await svc.apply(user_ctx, SERIES_ID)
    assert exc_info.value.message == ALREADY_PENDING
    application_repo.create_pending.assert_not_awaited()


async def test_apply_as_participant_rejected(approval_mocks, user_ctx) -> None:
    svc, _, membership_repo, _ = approval_mocks
    membership_repo.is_participant.return_value = True

    with pytest.raises(BusinessRuleException) as exc_info:
        await svc.apply(user_ctx, SERIES_ID)
    assert exc_info.value.message == ALREADY_PARTICIPANT


async def test_apply_race_on_unique_constraint_reported_as_pending(
    approval_mocks, user_ctx
) -> None:
    svc, _, _, application_repo = approval_mocks
    application_repo.create_pending.side_effect = DuplicateRecordException("application")

    with pytest.raises(BusinessRuleException) as exc_info:
        await svc.apply(user_ctx, SERIES_ID)
    assert exc_info.value.message == ALREADY_PENDING


async def test_apply_unknown_series_not_found(approval_mocks, user_ctx) -> None:
    svc, series_repo, _, _ = approval_mocks
    series_repo.get_detail.return_value = None

    with pytest.raises(ResourceNotFoundException):
        await svc.apply(user_ctx, 999)


async def test_approve_moves_pending_to_roster(approval_mocks, gabbai_ctx) -> None:
    svc, _, membership_repo, application_repo = approval_mocks

    await svc.approve(gabbai_ctx, SERIES_ID, 2)

    application_repo.delete_pending.assert_awaited_once_with(2, SERIES_ID)
    membership_repo.add_participant.assert_awaited_once_with(2, SERIES_ID)


async def test_approve_failure_after_delete_propagates(approval_mocks, gabbai_ctx) -> None:
    """The roster insert failing raises, so the request transaction rolls back the delete."""
    svc, _, membership_repo, _ = approval_mocks
    membership_repo.add_participant.side_effect = RuntimeError("insert failed")

    with pytest.raises(RuntimeError):
        await svc.approve(gabbai_ctx, SERIES_ID, 2)


async def test_approve_requires_gabbai(approval_mocks, user_ctx) -> None:
    svc, _, _, application_repo = approval_mocks

    with pytest.raises(AuthorizationException):
        await svc.approve(user_ctx, SERIES_ID, 3)
    application_repo.delete_pending.assert_not_awaited()


async def test_approve_without_user_id(approval_mocks, gabbai_ctx) -> None:
    svc, _, _, _ = approval_mocks

    with pytest.raises(ValidationException) as exc_info:
        await svc.approve(gabbai_ctx, SERIES_ID, None)
    assert exc_info.value.message == "User ID is required"


async def test_reject_without_pending_row(approval_mocks, gabbai_ctx) -> None:
    svc, _, membership_repo, application_repo = approval_mocks
    application_repo.delete_pending.return_value = False

    with pytest.raises(ResourceNotFoundException):
        await svc.reject(gabbai_ctx, SERIES_ID, 2)
    membership_repo.add_participant.assert_not_awaited()
