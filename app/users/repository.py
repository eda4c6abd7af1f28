# app/users/repository.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.users.models import User

async def get_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()

async def get_by_id(db: AsyncSession, user_id: int) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()

async def get_by_username(
    db: AsyncSession, username: str, *, exclude_id: int | None = None
) -> User | None:
    q = select(User).where(User.username == username)
    if exclude_id is not None:
        q = q.where(User.id != exclude_id)
    res = await db.execute(q)
    return res.scalar_one_or_none()

async def create_user(db: AsyncSession, email: str, hashed_password: str, role: str) -> User:
    user = User(email=email, hashed_password=hashed_password, role=role)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user
