# app/db/session.py
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from app.core.config import settings

# Un solo engine por proceso: se crea en el primer uso y se reutiliza
# en todas las requests (el pool maneja las conexiones).
_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def _engine_kwargs(db_url: str) -> dict:
    # Timeouts cortos: si la DB no responde → falla rápido (5s)
    if db_url.startswith("postgresql+psycopg"):
        return {
            "pool_size": 5,
            "max_overflow": 10,
            "connect_args": {"connect_timeout": 5},
        }
    if db_url.startswith("postgresql+asyncpg"):
        return {
            "pool_size": 5,
            "max_overflow": 10,
            "connect_args": {
                "timeout": 5,
                "server_settings": {"client_encoding": "UTF8"},
            },
        }
    # sqlite+aiosqlite (tests / dev): sin pool_size
    return {}


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        db_url = settings.DATABASE_URL
        _engine = create_async_engine(
            db_url,
            pool_pre_ping=True,
            pool_recycle=300,
            **_engine_kwargs(db_url),
        )
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    global _sessionmaker
    if _sessionmaker is None:
        _sessionmaker = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _sessionmaker


async def get_session() -> AsyncSession:
    async with get_sessionmaker()() as session:
        try:
            yield session
        finally:
            await session.close()
