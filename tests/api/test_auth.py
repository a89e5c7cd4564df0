"""Auth endpoints: login, account creation, session cookie, logout."""

import pytest
from httpx import AsyncClient

from tests.conftest import TEST_PASSWORD, create_user, login


async def test_login_blank_fields_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/login", json={"username": " ", "password": ""})
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Username and password are required.",
    }


async def test_login_wrong_password_returns_401(client, session_factory) -> None:
    await create_user(session_factory, "moshe")
    response = await client.post(
        "/api/login", json={"username": "moshe", "password": "not-the-password"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid username or password"


async def test_unknown_user_gets_same_message(client: AsyncClient) -> None:
    response = await client.post(
        "/api/login", json={"username": "nobody", "password": TEST_PASSWORD}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid username or password"


async def test_login_sets_session(client, session_factory) -> None:
    await create_user(session_factory, "moshe")

    before = await client.get("/api/current-user")
    assert before.json()["loggedIn"] is False

    response = await client.post(
        "/api/login", json={"username": "moshe", "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "username": "moshe"}

    after = await client.get("/api/current-user")
    assert after.json() == {"success": True, "loggedIn": True, "username": "moshe"}


async def test_logout_clears_session(client, session_factory) -> None:
    await create_user(session_factory, "moshe")
    await login(client, "moshe")

    response = await client.post("/api/logout")
    assert response.json()["message"] == "Logged out successfully"

    protected = await client.get("/api/topics")
    assert protected.status_code == 401
    assert protected.json() == {"success": False, "message": "Not logged in."}


async def test_create_account_reports_every_blank_field(client: AsyncClient) -> None:
    response = await client.post("/api/create-account", json={"username": "new"})
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert set(errors) == {"password", "title", "firstName", "lastName", "email"}


async def test_create_account_rejects_taken_username(client, session_factory) -> None:
    await create_user(session_factory, "moshe")
    response = await client.post(
        "/api/create-account",
        json={
            "username": "moshe",
            "password": "pw123456",
            "title": "Mr",
            "firstName": "Moshe",
            "lastName": "Levi",
            "email": "moshe.levi@example.com",
        },
    )
    assert response.status_code == 400
    assert response.json()["errors"] == {"username": "Username already taken"}


async def test_create_account_logs_in(client, catalog) -> None:
    response = await client.post(
        "/api/create-account",
        json={
            "username": "dovid",
            "password": "pw123456",
            "title": "Mr",
            "firstName": "Dovid",
            "lastName": "Katz",
            "email": "dovid@example.com",
            "institutions": [catalog["inst_id"]],
        },
    )
    assert response.status_code == 200
    assert response.json()["username"] == "dovid"

    current = await client.get("/api/current-user")
    assert current.json()["loggedIn"] is True


async def test_institutions_are_public(client, catalog) -> None:
    response = await client.get("/api/institutions")
    assert response.status_code == 200
    assert response.json()["institutions"] == [
        {"instId": catalog["inst_id"], "name": "Yeshiva University"}
    ]


@pytest.mark.parametrize("email", ["john doe@example.com", "a@@b.com", "x@.com."])
async def test_create_account_rejects_malformed_email(client, email) -> None:
    response = await client.post(
        "/api/create-account",
        json={
            "username": "dovid",
            "password": "pw123456",
            "title": "Mr",
            "firstName": "Dovid",
            "lastName": "Katz",
            "email": email,
        },
    )
    assert response.status_code == 400
    assert response.json()["errors"] == {"email": "Please enter a valid email address"}
