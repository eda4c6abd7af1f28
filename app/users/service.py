# app/users/service.py
from __future__ import annotations
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.errors import NotFound, Unauthorized, ValidationFailed
from app.core.security import hash_password, create_access_token, verify_password
from app.users.models import User
from app.users.repository import get_by_email, get_by_id, create_user
from app.users.schemas import UserCreate

log = logging.getLogger("uvicorn")


def issue_token(user: User) -> str:
    return create_access_token(sub=str(user.id), role=user.role)


async def register_user(db: AsyncSession, data: UserCreate) -> tuple[User, str]:
    email = data.email.lower()
    if await get_by_email(db, email):
        raise ValidationFailed("email already exists")

    user = await create_user(db, email, hash_password(data.password), data.role)
    log.info("user registered id=%s role=%s", user.id, user.role)

    # El commit lo hace el router
    return user, issue_token(user)


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    user = await get_by_email(db, email.lower())
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def login_user(db: AsyncSession, email: str, password: str) -> tuple[User, str]:
    user = await authenticate_user(db, email, password)
    if not user:
        raise Unauthorized("invalid credentials")
    return user, issue_token(user)


async def current_user(db: AsyncSession, user_id: int) -> User:
    user = await get_by_id(db, user_id)
    if not user:
        raise NotFound("user not found")
    return user
