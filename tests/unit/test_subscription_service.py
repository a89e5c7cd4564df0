"""SubscriptionService unit tests with mocked repositories and notifier."""

from unittest.mock import AsyncMock

import pytest

from shiurbank.application.dtos.subscription import (
    PENDING_CONFIRMATION_ARN,
    SubscriptionResult,
)
from shiurbank.application.dtos.user import UserResult
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.application.use_cases.subscriptions import (
    INVALID_TYPE,
    NOTIFICATIONS_DISABLED,
    NO_EMAIL,
    NOT_SUBSCRIBED,
    SubscriptionService,
)
from shiurbank.domain.exceptions import ValidationException
from shiurbank.infrastructure.exceptions import NotificationError

TOPIC_ARN = "arn:aws:sns:us-east-1:000000000000:shiurbank-series-4"
CTX = AuthorizationContext(user_id=7, username="talmid")


def _subscription(arn: str | None) -> SubscriptionResult:
    return SubscriptionResult(
        subscriber_id=1,
        user_id=7,
        series_id=4,
        subscription_type_id=1,
        type_name="Email",
        sns_subscription_arn=arn,
    )


@pytest.fixture
def subscription_mocks():
    subscriber_repo = AsyncMock()
    subscriber_repo.type_exists = AsyncMock(return_value=True)
    subscriber_repo.is_subscribed = AsyncMock(return_value=False)
    subscriber_repo.add_subscription = AsyncMock(return_value=11)
    subscriber_repo.get_user_subscription = AsyncMock(return_value=None)
    series_repo = AsyncMock()
    series_repo.get_topic_arn = AsyncMock(return_value=TOPIC_ARN)
    user_repo = AsyncMock()
    user_repo.get_result = AsyncMock(
        return_value=UserResult(
            user_id=7,
            username="talmid",
            title=None,
            first_name="Dovid",
            last_name="Katz",
            email="dovid@example.com",
        )
    )
    notifier = AsyncMock()
    notifier.subscribe_email = AsyncMock(return_value=PENDING_CONFIRMATION_ARN)
    svc = SubscriptionService(subscriber_repo, series_repo, user_repo, notifier)
    return svc, subscriber_repo, series_repo, user_repo, notifier


async def test_subscribe_stores_pending_arn(subscription_mocks) -> None:
    svc, subscriber_repo, _, _, notifier = subscription_mocks

    assert await svc.subscribe(CTX, 4, 1) == 11

    notifier.subscribe_email.assert_awaited_once_with(TOPIC_ARN, "dovid@example.com")
    subscriber_repo.add_subscription.assert_awaited_once_with(
        7, 4, 1, PENDING_CONFIRMATION_ARN
    )


async def test_subscribe_unknown_type(subscription_mocks) -> None:
    svc, subscriber_repo, _, _, notifier = subscription_mocks
    subscriber_repo.type_exists.return_value = False

    with pytest.raises(ValidationException) as exc_info:
        await svc.subscribe(CTX, 4, 99)
    assert exc_info.value.message == INVALID_TYPE
    notifier.subscribe_email.assert_not_awaited()


async def test_subscribe_series_without_topic(subscription_mocks) -> None:
    svc, _, series_repo, _, _ = subscription_mocks
    series_repo.get_topic_arn.return_value = None

    with pytest.raises(ValidationException) as exc_info:
        await svc.subscribe(CTX, 4, 1)
    assert exc_info.value.message == NOTIFICATIONS_DISABLED


async def test_subscribe_user_without_email(subscription_mocks) -> None:
    svc, _, _, user_repo, _ = subscription_mocks
    user_repo.get_result.return_value = None

    with pytest.raises(ValidationException) as exc_info:
        await svc.subscribe(CTX, 4, 1)
    assert exc_info.value.message == NO_EMAIL


async def test_unsubscribe_pending_skips_topic(subscription_mocks) -> None:
    svc, subscriber_repo, _, _, notifier = subscription_mocks
    subscriber_repo.get_user_subscription.return_value = _subscription(PENDING_CONFIRMATION_ARN)

    await svc.unsubscribe(CTX, 4)

    notifier.unsubscribe.assert_not_awaited()
    subscriber_repo.remove_subscription.assert_awaited_once_with(7, 4)


async def test_unsubscribe_topic_failure_still_removes_row(subscription_mocks) -> None:
    svc, subscriber_repo, _, _, notifier = subscription_mocks
    subscriber_repo.get_user_subscription.return_value = _subscription("arn:aws:sns:sub/1")
    notifier.unsubscribe.side_effect = NotificationError("unsubscribe", "arn:aws:sns:sub/1", "boom")

    await svc.unsubscribe(CTX, 4)

    subscriber_repo.remove_subscription.assert_awaited_once_with(7, 4)


async def test_unsubscribe_without_subscription(subscription_mocks) -> None:
    svc, _, _, _, _ = subscription_mocks

    with pytest.raises(ValidationException) as exc_info:
        await svc.unsubscribe(CTX, 4)
    assert exc_info.value.message == NOT_SUBSCRIBED


async def test_sync_status_records_confirmed_arn(subscription_mocks) -> None:
    svc, subscriber_repo, _, _, notifier = subscription_mocks
    subscriber_repo.get_user_subscription.return_value = _subscription(PENDING_CONFIRMATION_ARN)
    notifier.find_subscription_arn_by_email = AsyncMock(return_value="arn:aws:sns:sub/2")

    status = await svc.sync_status(CTX, 4)

    assert status.is_subscribed is True
    assert status.is_pending is False
    subscriber_repo.update_arn.assert_awaited_once_with(7, 4, "arn:aws:sns:sub/2")


async def test_sync_status_still_pending(subscription_mocks) -> None:
    svc, subscriber_repo, _, _, notifier = subscription_mocks
    subscriber_repo.get_user_subscription.return_value = _subscription(PENDING_CONFIRMATION_ARN)
    notifier.find_subscription_arn_by_email = AsyncMock(return_value=None)

    status = await svc.sync_status(CTX, 4)

    assert status.is_pending is True
    subscriber_repo.update_arn.assert_not_awaited()
