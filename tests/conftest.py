import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.base import Base
from app.db.session import get_session
from app.main import app
from app.media.storage import LocalMediaStore, get_media_store
from app.photos.models import Photo


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def media_store(tmp_path):
    return LocalMediaStore(str(tmp_path / "media"), "/media")


@pytest_asyncio.fixture
async def api_client(session_factory, media_store):
    async def _session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_media_store] = lambda: media_store
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


async def register(client, email, role="CONSUMER", password="secret123"):
    """Registers a user and returns (user_id, auth headers)."""
    response = await client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "role": role},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    # every test request authenticates explicitly via headers
    client.cookies.clear()
    return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}


async def create_photo(client, headers, **fields):
    payload = {"title": "Sunset", "imageUrl": "https://cdn.example.com/image/upload/a.jpg"}
    payload.update(fields)
    response = await client.post("/api/photos", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


async def insert_photo(session_factory, **fields):
    """Writes a Photo row directly, bypassing the create path."""
    values = {
        "creator_id": 1,
        "title": "Raw",
        "media_url": "https://cdn.example.com/image/upload/raw.jpg",
        "media_type": "image",
    }
    values.update(fields)
    async with session_factory() as session:
        photo = Photo(**values)
        session.add(photo)
        await session.commit()
        return photo.id


@pytest_asyncio.fixture
async def creator(api_client):
    return await register(api_client, "creator@example.com", role="CREATOR")


@pytest_asyncio.fixture
async def consumer(api_client):
    return await register(api_client, "consumer@example.com")
