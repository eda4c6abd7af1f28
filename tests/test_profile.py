import pytest
from sqlalchemy import select

from app.users.models import User
from conftest import create_photo, register


@pytest.mark.asyncio
async def test_get_profile_with_post_count(api_client, creator):
    creator_id, headers = creator
    await create_photo(api_client, headers)
    await create_photo(api_client, headers)

    response = await api_client.get("/api/profile", headers=headers)
    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["id"] == creator_id
    assert profile["email"] == "creator@example.com"
    assert profile["role"] == "CREATOR"
    assert profile["username"] == ""
    assert profile["displayName"] == ""
    assert profile["bio"] == ""
    assert profile["postCount"] == 2
    assert "hashedPassword" not in profile


@pytest.mark.asyncio
async def test_profile_requires_identity(api_client):
    assert (await api_client.get("/api/profile")).status_code == 401
    assert (await api_client.put("/api/profile", json={"bio": "x"})).status_code == 401


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(api_client, consumer):
    _, headers = consumer
    first = await api_client.put(
        "/api/profile",
        json={"username": "Night_Owl", "displayName": "Owl", "website": "https://owl.example.com"},
        headers=headers,
    )
    assert first.status_code == 200
    assert first.json()["message"] == "Profile updated"
    assert first.json()["profile"]["username"] == "night_owl"

    response = await api_client.put("/api/profile", json={"bio": "hi"}, headers=headers)
    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["bio"] == "hi"
    assert profile["username"] == "night_owl"
    assert profile["displayName"] == "Owl"
    assert profile["website"] == "https://owl.example.com"

    stored = (await api_client.get("/api/profile", headers=headers)).json()["profile"]
    assert stored["bio"] == "hi"
    assert stored["displayName"] == "Owl"


@pytest.mark.asyncio
async def test_username_unique_case_insensitive(api_client, consumer):
    _, headers = consumer
    _, other_headers = await register(api_client, "other@example.com")

    ok = await api_client.put("/api/profile", json={"username": "Shutter"}, headers=headers)
    assert ok.status_code == 200

    taken = await api_client.put("/api/profile", json={"username": "SHUTTER"}, headers=other_headers)
    assert taken.status_code == 400
    assert taken.json() == {"error": "Username is already taken"}

    # re-saving your own username is fine
    same = await api_client.put("/api/profile", json={"username": "shutter"}, headers=headers)
    assert same.status_code == 200


@pytest.mark.asyncio
async def test_unset_usernames_never_conflict(api_client, consumer, session_factory):
    _, headers = consumer
    _, other_headers = await register(api_client, "other@example.com")

    await api_client.put("/api/profile", json={"username": "temp_name"}, headers=headers)
    cleared = await api_client.put("/api/profile", json={"username": "   "}, headers=headers)
    assert cleared.status_code == 200
    assert cleared.json()["profile"]["username"] == ""

    also_cleared = await api_client.put("/api/profile", json={"username": ""}, headers=other_headers)
    assert also_cleared.status_code == 200

    async with session_factory() as session:
        usernames = (await session.execute(select(User.username))).scalars().all()
    assert usernames == [None, None]


@pytest.mark.asyncio
@pytest.mark.parametrize("username", ["ab", "a" * 31, "has space", "dash-name", "emoji😀"])
async def test_username_pattern(api_client, consumer, username):
    _, headers = consumer
    response = await api_client.put("/api/profile", json={"username": username}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_bio_length_limit(api_client, consumer):
    _, headers = consumer
    assert (await api_client.put("/api/profile", json={"bio": "x" * 150}, headers=headers)).status_code == 200
    too_long = await api_client.put("/api/profile", json={"bio": "x" * 151}, headers=headers)
    assert too_long.status_code == 400
    assert too_long.json() == {"error": "Bio must be 150 characters or less"}


@pytest.mark.asyncio
async def test_empty_update_is_rejected(api_client, consumer):
    _, headers = consumer
    response = await api_client.put("/api/profile", json={}, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "No fields to update"}


@pytest.mark.asyncio
async def test_update_for_vanished_user(api_client, consumer, session_factory):
    user_id, headers = consumer
    async with session_factory() as session:
        await session.delete(await session.get(User, int(user_id)))
        await session.commit()

    response = await api_client.put("/api/profile", json={"bio": "ghost"}, headers=headers)
    assert response.status_code == 404
    assert (await api_client.get("/api/profile", headers=headers)).status_code == 404
