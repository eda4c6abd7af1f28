import pytest

from conftest import create_photo, insert_photo, register


@pytest.mark.asyncio
async def test_detail_shape(api_client, creator):
    creator_id, headers = creator
    photo_id = await create_photo(
        api_client,
        headers,
        title="Harbour",
        caption="at dawn",
        location="Lisbon",
        people=["ana", "joão"],
        thumbnailUrl="https://cdn.example.com/thumb.jpg",
    )

    response = await api_client.get(f"/api/photos/{photo_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == photo_id
    assert body["title"] == "Harbour"
    assert body["caption"] == "at dawn"
    assert body["location"] == "Lisbon"
    assert body["people"] == ["ana", "joão"]
    assert body["imageUrl"] == "https://cdn.example.com/image/upload/a.jpg"
    assert body["videoUrl"] == ""
    assert body["mediaType"] == "image"
    # image posts carry no thumbnail
    assert body["thumbnailUrl"] == ""
    assert body["creator"] == {"id": creator_id, "email": "creator@example.com"}
    assert body["comments"] == []
    assert body["avgRating"] is None
    assert body["ratingsCount"] == 0


@pytest.mark.asyncio
async def test_detail_not_found(api_client):
    response = await api_client.get("/api/photos/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["abc", "12abc", "0", "99999999999999999999", str(2**31)])
async def test_detail_unresolvable_id_is_not_found(api_client, bad_id):
    response = await api_client.get(f"/api/photos/{bad_id}")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_video_keeps_thumbnail(api_client, creator):
    _, headers = creator
    photo_id = await create_photo(
        api_client,
        headers,
        imageUrl="https://cdn.example.com/video/upload/v1/clip.mp4",
        thumbnailUrl="https://cdn.example.com/thumb.jpg",
    )
    body = (await api_client.get(f"/api/photos/{photo_id}")).json()
    assert body["mediaType"] == "video"
    assert body["thumbnailUrl"] == "https://cdn.example.com/thumb.jpg"


@pytest.mark.asyncio
async def test_detail_overrides_stored_media_type(api_client, session_factory):
    url = "https://cdn.example.com/uploads/clip.mp4"
    photo_id = await insert_photo(session_factory, media_url=url, media_type="image")

    body = (await api_client.get(f"/api/photos/{photo_id}")).json()
    assert body["mediaType"] == "video"
    assert body["videoUrl"] == url
    assert body["imageUrl"] == ""


@pytest.mark.asyncio
async def test_detail_missing_creator_uses_sentinel(api_client, session_factory):
    photo_id = await insert_photo(session_factory, creator_id=4242)

    response = await api_client.get(f"/api/photos/{photo_id}")
    assert response.status_code == 200
    assert response.json()["creator"] == {"id": "", "email": "Unknown Creator"}


@pytest.mark.asyncio
async def test_average_rating_is_raw_mean(api_client, creator, consumer):
    _, creator_headers = creator
    _, consumer_headers = consumer
    photo_id = await create_photo(api_client, creator_headers)

    await api_client.post(f"/api/photos/{photo_id}/ratings", json={"value": 3}, headers=creator_headers)
    await api_client.post(f"/api/photos/{photo_id}/ratings", json={"value": 5}, headers=consumer_headers)

    body = (await api_client.get(f"/api/photos/{photo_id}")).json()
    assert body["avgRating"] == 4.0
    assert body["ratingsCount"] == 2


@pytest.mark.asyncio
async def test_comment_rating_joined_by_author(api_client, creator):
    _, creator_headers = creator
    user_a, a_headers = await register(api_client, "a@example.com")
    user_b, b_headers = await register(api_client, "b@example.com")
    photo_id = await create_photo(api_client, creator_headers)

    await api_client.post(f"/api/photos/{photo_id}/ratings", json={"value": 5}, headers=a_headers)
    await api_client.post(f"/api/photos/{photo_id}/comments", json={"text": "first"}, headers=a_headers)
    await api_client.post(f"/api/photos/{photo_id}/comments", json={"text": "second"}, headers=a_headers)
    await api_client.post(f"/api/photos/{photo_id}/comments", json={"text": "no stars"}, headers=b_headers)

    comments = (await api_client.get(f"/api/photos/{photo_id}")).json()["comments"]
    # newest first
    assert [c["text"] for c in comments] == ["no stars", "second", "first"]

    by_text = {c["text"]: c for c in comments}
    assert by_text["first"]["rating"] == 5
    assert by_text["second"]["rating"] == 5
    assert by_text["first"]["user"] == {"id": user_a, "email": "a@example.com"}
    assert by_text["no stars"]["rating"] is None
    assert by_text["no stars"]["user"]["id"] == user_b


@pytest.mark.asyncio
async def test_rating_on_other_photo_is_not_joined(api_client, creator, consumer):
    _, creator_headers = creator
    _, consumer_headers = consumer
    first = await create_photo(api_client, creator_headers, title="first")
    second = await create_photo(api_client, creator_headers, title="second")

    await api_client.post(f"/api/photos/{first}/ratings", json={"value": 2}, headers=consumer_headers)
    await api_client.post(f"/api/photos/{second}/comments", json={"text": "hi"}, headers=consumer_headers)

    comments = (await api_client.get(f"/api/photos/{second}")).json()["comments"]
    assert comments[0]["rating"] is None
