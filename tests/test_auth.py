import pytest

from app.core.config import settings


@pytest.mark.asyncio
async def test_register_login_me(api_client):
    response = await api_client.post(
        "/api/auth/register",
        json={"email": "Maker@Example.com", "password": "secret123", "role": "CREATOR"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "maker@example.com"
    assert body["user"]["role"] == "CREATOR"
    assert body["token_type"] == "bearer"
    api_client.cookies.clear()

    login = await api_client.post(
        "/api/auth/login", json={"email": "maker@example.com", "password": "secret123"}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]
    api_client.cookies.clear()

    me = await api_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["id"] == body["user"]["id"]

    # ?token= is accepted too
    assert (await api_client.get("/api/auth/me", params={"token": token})).status_code == 200


@pytest.mark.asyncio
async def test_register_defaults_to_consumer(api_client):
    response = await api_client.post(
        "/api/auth/register", json={"email": "viewer@example.com", "password": "secret123"}
    )
    assert response.json()["user"]["role"] == "CONSUMER"


@pytest.mark.asyncio
async def test_duplicate_email(api_client):
    payload = {"email": "dup@example.com", "password": "secret123"}
    assert (await api_client.post("/api/auth/register", json=payload)).status_code == 201
    again = await api_client.post("/api/auth/register", json=payload)
    assert again.status_code == 400
    assert again.json() == {"error": "email already exists"}


@pytest.mark.asyncio
async def test_invalid_register_payload(api_client):
    response = await api_client.post(
        "/api/auth/register", json={"email": "x@example.com", "password": "123", "role": "ADMIN"}
    )
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_bad_credentials(api_client):
    await api_client.post("/api/auth/register", json={"email": "u@example.com", "password": "secret123"})
    api_client.cookies.clear()
    response = await api_client.post("/api/auth/login", json={"email": "u@example.com", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"error": "invalid credentials"}


@pytest.mark.asyncio
async def test_cookie_session_and_logout(api_client):
    await api_client.post("/api/auth/register", json={"email": "c@example.com", "password": "secret123"})
    assert settings.AUTH_COOKIE_NAME in api_client.cookies

    assert (await api_client.get("/api/auth/me")).status_code == 200

    logout = await api_client.post("/api/auth/logout")
    assert logout.status_code == 200
    api_client.cookies.clear()
    assert (await api_client.get("/api/auth/me")).status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_is_unauthorized(api_client):
    response = await api_client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
