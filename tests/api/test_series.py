"""Series creation, details, dashboard and deletion over HTTP."""

from shiurbank.infrastructure.exceptions import BucketCreationError
from tests.conftest import FakeNotifier, FakeStorage, create_series, create_user, login


def _create_body(catalog: dict[str, int], **overrides) -> dict:
    body = {
        "rebbiId": catalog["rebbi_id"],
        "topicId": catalog["topic_id"],
        "instId": catalog["inst_id"],
        "description": "Night seder halacha",
        "requiresPermission": False,
    }
    body.update(overrides)
    return body


async def test_create_series_makes_bucket_and_topic(
    client, session_factory, catalog, storage: FakeStorage, notifier: FakeNotifier
) -> None:
    await create_user(session_factory, "gabbai")
    await login(client, "gabbai")

    response = await client.post("/api/series", json=_create_body(catalog))
    assert response.status_code == 200, response.text
    series_id = response.json()["seriesId"]
    assert f"shiurbank-series-{series_id}" in storage.buckets
    assert notifier.topics == [f"shiurbank-series-{series_id}"]

    is_gabbai = await client.get(f"/api/series/{series_id}/is-gabbai")
    assert is_gabbai.json()["isGabbai"] is True

    detail = (await client.get(f"/api/series/{series_id}")).json()
    assert detail["displayName"] == "Halacha — Rabbi Moshe Cohen"


async def test_second_series_by_same_rebbi_skips_verification(
    client, session_factory, catalog
) -> None:
    await create_user(session_factory, "gabbai")
    await login(client, "gabbai")
    first = await client.post("/api/series", json=_create_body(catalog))
    second = await client.post("/api/series", json=_create_body(catalog))
    assert first.json()["needsVerification"] is True
    assert second.json()["needsVerification"] is False
    assert second.json()["message"] == "Series created successfully."


async def test_create_series_missing_fields(client, session_factory, catalog) -> None:
    await create_user(session_factory, "gabbai")
    await login(client, "gabbai")
    response = await client.post("/api/series", json=_create_body(catalog, description=" "))
    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields."


async def test_extra_gabbai_credentials_checked(client, session_factory, catalog) -> None:
    await create_user(session_factory, "gabbai")
    await create_user(session_factory, "cogabbai")
    await login(client, "gabbai")

    half = await client.post(
        "/api/series",
        json=_create_body(catalog, extraGabbaim=[{"username": "cogabbai"}]),
    )
    assert half.status_code == 400
    assert half.json()["message"] == (
        "Each additional gabbai must have both a username and a password."
    )

    wrong = await client.post(
        "/api/series",
        json=_create_body(
            catalog, extraGabbaim=[{"username": "cogabbai", "password": "wrong-pass"}]
        ),
    )
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Additional gabbai credentials are invalid."


async def test_bucket_failure_rolls_back_series(
    client, session_factory, catalog, storage: FakeStorage
) -> None:
    await create_user(session_factory, "gabbai")
    await login(client, "gabbai")

    async def failing_create_bucket(bucket: str) -> None:
        raise BucketCreationError(bucket, "bucket quota reached")

    storage.create_bucket = failing_create_bucket
    response = await client.post("/api/series", json=_create_body(catalog))
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "An unexpected error occurred. Please try again.",
    }

    dashboard = await client.get("/api/my-series")
    assert dashboard.json()["series"] == []


async def test_my_series_lists_roles(client, session_factory, catalog) -> None:
    gabbai_id = await create_user(session_factory, "gabbai")
    await create_user(session_factory, "talmid")
    open_id = await create_series(session_factory, catalog, gabbai_id=gabbai_id)
    restricted_id = await create_series(
        session_factory, catalog, gabbai_id=gabbai_id, requires_permission=True
    )

    await login(client, "talmid")
    await client.post(f"/api/series/{open_id}/apply")
    await client.post(f"/api/series/{restricted_id}/apply")

    entries = (await client.get("/api/my-series")).json()["series"]
    by_id = {e["seriesId"]: e for e in entries}
    assert by_id[open_id]["isGabbai"] is False
    assert by_id[open_id]["isPending"] is False
    assert by_id[restricted_id]["isPending"] is True


async def test_delete_series_gabbai_only(
    client, session_factory, catalog, storage: FakeStorage
) -> None:
    gabbai_id = await create_user(session_factory, "gabbai")
    await create_user(session_factory, "talmid")
    series_id = await create_series(session_factory, catalog, gabbai_id=gabbai_id)
    storage.buckets[f"shiurbank-series-{series_id}"] = {}

    await login(client, "talmid")
    assert (await client.delete(f"/api/series/{series_id}")).status_code == 403

    await login(client, "gabbai")
    deleted = await client.delete(f"/api/series/{series_id}")
    assert deleted.json()["message"] == "Series deleted successfully"
    assert f"shiurbank-series-{series_id}" not in storage.buckets
    assert (await client.get(f"/api/series/{series_id}")).status_code == 404
