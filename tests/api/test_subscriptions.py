"""Subscription endpoints: subscribe, status, sync and unsubscribe."""

import pytest

from tests.conftest import FakeNotifier, create_series, create_user, login

TOPIC_ARN = "arn:aws:sns:us-east-1:000000000000:shiurbank-series-1"


@pytest.fixture
async def series_id(session_factory, catalog) -> int:
    gabbai_id = await create_user(session_factory, "gabbai")
    await create_user(session_factory, "talmid", email="talmid@example.com")
    return await create_series(
        session_factory, catalog, gabbai_id=gabbai_id, topic_arn=TOPIC_ARN
    )


async def test_types(client, session_factory, series_id) -> None:
    await login(client, "talmid")
    response = await client.get("/api/subscription/types")
    assert [t["name"] for t in response.json()["types"]] == ["Email", "SMS"]


async def test_subscribe_sync_unsubscribe(
    client, session_factory, series_id, notifier: FakeNotifier
) -> None:
    await login(client, "talmid")
    email_type = (await client.get("/api/subscription/types")).json()["types"][0]["typeId"]

    subscribed = await client.post(
        f"/api/subscription/series/{series_id}/subscribe",
        json={"subscriptionTypeId": email_type},
    )
    assert subscribed.status_code == 200, subscribed.text
    assert subscribed.json()["isPending"] is True
    assert notifier.subscriptions == [(TOPIC_ARN, "talmid@example.com")]

    status = (await client.get(f"/api/subscription/series/{series_id}/status")).json()
    assert status["isSubscribed"] is False
    assert status["isPending"] is True

    twice = await client.post(
        f"/api/subscription/series/{series_id}/subscribe",
        json={"subscriptionTypeId": email_type},
    )
    assert twice.status_code == 400

    notifier.confirmed_arn = f"{TOPIC_ARN}:abcd"
    synced = (await client.post(f"/api/subscription/series/{series_id}/sync-status")).json()
    assert synced["isSubscribed"] is True

    unsubscribed = await client.post(f"/api/subscription/series/{series_id}/unsubscribe")
    assert unsubscribed.status_code == 200
    assert notifier.unsubscribed == [f"{TOPIC_ARN}:abcd"]

    after = (await client.get(f"/api/subscription/series/{series_id}/status")).json()
    assert after["isSubscribed"] is False
    assert after["isPending"] is False


async def test_subscribe_requires_type(client, session_factory, series_id) -> None:
    await login(client, "talmid")
    response = await client.post(f"/api/subscription/series/{series_id}/subscribe", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Subscription type is required."


async def test_series_without_topic(client, session_factory, catalog, series_id) -> None:
    gabbai_id = await create_user(session_factory, "other")
    quiet_id = await create_series(session_factory, catalog, gabbai_id=gabbai_id)
    await login(client, "talmid")
    email_type = (await client.get("/api/subscription/types")).json()["types"][0]["typeId"]

    response = await client.post(
        f"/api/subscription/series/{quiet_id}/subscribe",
        json={"subscriptionTypeId": email_type},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "This series does not have notifications enabled."
