import pytest
from httpx import ASGITransport, AsyncClient

from app.db.session import get_session
from app.main import app
from app.media.storage import MediaStore, get_media_store

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


class BrokenStore(MediaStore):
    def upload(self, upload, media_type):
        raise OSError("disk full at /srv/media")

    def delete(self, url):
        return False


@pytest.mark.asyncio
async def test_store_failure_is_reported_as_upload_error(api_client, creator):
    _, headers = creator
    app.dependency_overrides[get_media_store] = lambda: BrokenStore()

    response = await api_client.post(
        "/api/upload", files={"file": ("cat.png", PNG, "image/png")}, headers=headers
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to upload media"}

    avatar = await api_client.post(
        "/api/upload/avatar", files={"file": ("me.png", PNG, "image/png")}, headers=headers
    )
    assert avatar.json() == {"error": "Failed to upload media"}


@pytest.mark.asyncio
async def test_unexpected_error_hides_details():
    async def _broken_session():
        raise RuntimeError("connection refused: postgres://admin:hunter2@db")
        yield  # pragma: no cover

    app.dependency_overrides[get_session] = _broken_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/api/photos")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "hunter2" not in response.text
