"""
Integration tests for registration, login, logout and the session gate
"""
import pytest

from config import ApplicationConfig
from tests.integration.helpers import API, fetch_sessions, fetch_user, register_user

COOKIE = ApplicationConfig.SESSION_COOKIE_NAME


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_register_signs_user_in(client, session_factory):
    # Act
    response = await register_user(client, email="Alice@Example.com")

    # Assert
    body = response.json()
    assert body["user"]["email"] == "alice@example.com"
    assert body["message"] == "User registered successfully"
    assert "session_id" not in body
    assert client.cookies.get(COOKIE)

    user = await fetch_user(session_factory, "alice@example.com")
    assert user is not None
    assert user.password_hash.startswith("$2")

    me = await client.get(f"{API}/users/me")
    assert me.status_code == 200
    assert me.json()["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_session_cookie_flags(client):
    response = await register_user(client)

    set_cookie = response.headers["set-cookie"].lower()
    assert f"{COOKIE}=" in set_cookie
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie
    assert "max-age=" in set_cookie


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    await register_user(client)

    response = await client.post(
        f"{API}/auth/register",
        json={"email": "ALICE@example.com", "password": "Password123"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_EMAIL"


@pytest.mark.asyncio
async def test_register_weak_password(client, session_factory):
    response = await client.post(
        f"{API}/auth/register", json={"email": "bob@example.com", "password": "password"}
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert await fetch_user(session_factory, "bob@example.com") is None


@pytest.mark.asyncio
async def test_register_malformed_email(client):
    response = await client.post(
        f"{API}/auth/register", json={"email": "not-an-email", "password": "Password123"}
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "email"


@pytest.mark.asyncio
async def test_login_success(client, session_factory):
    # Arrange
    await register_user(client)
    client.cookies.clear()

    # Act
    response = await client.post(
        f"{API}/auth/login", json={"email": "alice@example.com", "password": "Password123"}
    )

    # Assert
    assert response.status_code == 200
    body = response.json()
    user = await fetch_user(session_factory, "alice@example.com")
    assert body == {
        "user": {"id": str(user.id), "email": "alice@example.com"},
        "message": "Login successful",
    }
    assert "password" not in response.text
    assert client.cookies.get(COOKIE)
    assert user.last_login_at is not None

    me = await client.get(f"{API}/users/me")
    assert me.status_code == 200


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client):
    await register_user(client)
    client.cookies.clear()

    wrong_password = await client.post(
        f"{API}/auth/login", json={"email": "alice@example.com", "password": "WrongPass123"}
    )
    unknown_email = await client.post(
        f"{API}/auth/login", json={"email": "nobody@example.com", "password": "Password123"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert client.cookies.get(COOKIE) is None


@pytest.mark.asyncio
async def test_me_requires_session(client):
    response = await client.get(f"{API}/users/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_me_rejects_tampered_cookie(client):
    client.cookies.set(COOKIE, "not-a-signed-session")

    response = await client.get(f"{API}/users/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_revokes_session(client, session_factory):
    # Arrange
    await register_user(client)
    old_cookie = client.cookies.get(COOKIE)

    # Act
    response = await client.post(f"{API}/auth/logout")

    # Assert
    assert response.status_code == 200
    assert response.json()["message"] == "Logout successful"
    assert client.cookies.get(COOKIE) is None

    user = await fetch_user(session_factory, "alice@example.com")
    sessions = await fetch_sessions(session_factory, user.id)
    assert all(s.revoked for s in sessions)

    # A correctly signed cookie for a revoked session is still rejected
    client.cookies.set(COOKIE, old_cookie)
    me = await client.get(f"{API}/users/me")
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_logout_without_session_is_ok(client):
    first = await client.post(f"{API}/auth/logout")
    second = await client.post(f"{API}/auth/logout")

    assert first.status_code == 200
    assert second.status_code == 200
