"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /health returns 200 and status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"success": True, "status": "ok"}


async def test_readiness_checks_database(client: AsyncClient) -> None:
    """GET /health/ready runs a query against the (test) database."""
    response = await client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["database"] == "ok"


async def test_request_id_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unsafe_request_id_replaced(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "bad id;drop"})
    assert response.headers["X-Request-ID"] != "bad id;drop"
    assert len(response.headers["X-Request-ID"]) == 36


async def test_long_request_id_truncated(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "a" * 100})
    assert response.headers["X-Request-ID"] == "a" * 64
