"""Search endpoint: access guard, ordering, paging and validation."""

import pytest
from httpx import AsyncClient

from tests.conftest import create_recording, create_series, create_user, login


@pytest.fixture
async def search_data(session_factory, catalog) -> dict[str, int]:
    """A public and a restricted series by one gabbai, one recording, and an outsider."""
    gabbai_id = await create_user(session_factory, "gabbai")
    await create_user(session_factory, "talmid")
    public_id = await create_series(
        session_factory, catalog, gabbai_id=gabbai_id, description="Weekly halacha shiur"
    )
    restricted_id = await create_series(
        session_factory,
        catalog,
        gabbai_id=gabbai_id,
        description="Private halacha chabura",
        requires_permission=True,
    )
    recording_id = await create_recording(
        session_factory, public_id, "Hilchos Shabbos", description="Melachos of shabbos"
    )
    return {"public": public_id, "restricted": restricted_id, "recording": recording_id}


async def test_search_requires_login(client: AsyncClient) -> None:
    response = await client.get("/api/search", params={"q": "halacha"})
    assert response.status_code == 401


async def test_blank_query_rejected(client, session_factory, search_data) -> None:
    await login(client, "talmid")
    response = await client.get("/api/search", params={"q": "  "})
    assert response.status_code == 400
    assert response.json()["message"] == "Search query is required"


async def test_restricted_series_hidden_from_outsiders(
    client, session_factory, search_data
) -> None:
    await login(client, "talmid")
    response = await client.get("/api/search", params={"q": "halacha"})
    assert response.status_code == 200
    data = response.json()
    ids = {(r["type"], r["id"]) for r in data["results"]}
    assert ids == {("SERIES", search_data["public"]), ("RECORDING", search_data["recording"])}
    assert all(r["hasAccess"] is False for r in data["results"])


async def test_gabbai_sees_restricted_series(client, session_factory, search_data) -> None:
    await login(client, "gabbai")
    response = await client.get("/api/search", params={"q": "halacha"})
    data = response.json()
    assert data["totalResults"] == 3
    assert all(r["hasAccess"] for r in data["results"])
    series = [r for r in data["results"] if r["type"] == "SERIES"]
    assert {s["displayName"] for s in series} == {"Halacha — Rabbi Moshe Cohen"}


async def test_exact_title_ranks_first(client, session_factory, search_data) -> None:
    await login(client, "talmid")
    response = await client.get("/api/search", params={"q": "Hilchos Shabbos"})
    [top, *_] = response.json()["results"]
    assert top["type"] == "RECORDING"
    assert top["title"] == "Hilchos Shabbos"
    assert top["relevanceScore"] >= 100
    assert top["seriesId"] == search_data["public"]


async def test_paging(client, session_factory, search_data) -> None:
    await login(client, "gabbai")
    first = (
        await client.get("/api/search", params={"q": "halacha", "page": 0, "pageSize": 2})
    ).json()
    second = (
        await client.get("/api/search", params={"q": "halacha", "page": 1, "pageSize": 2})
    ).json()
    assert first["totalPages"] == 2
    assert first["hasNextPage"] is True
    assert first["hasPreviousPage"] is False
    assert len(first["results"]) == 2
    assert len(second["results"]) == 1
    assert second["hasNextPage"] is False
    seen = [(r["type"], r["id"]) for r in first["results"] + second["results"]]
    assert len(set(seen)) == 3


async def test_negative_page_rejected(client, session_factory, search_data) -> None:
    await login(client, "talmid")
    response = await client.get("/api/search", params={"q": "halacha", "page": -1})
    assert response.status_code == 400
    assert response.json()["message"] == "Page must be 0 or greater"
