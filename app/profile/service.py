# app/profile/service.py
from __future__ import annotations
import logging
import re
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFound, ValidationFailed
from app.photos.repository import count_photos
from app.users.models import User
from app.users.repository import get_by_id, get_by_username

log = logging.getLogger("uvicorn")

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]{3,30}$")
BIO_MAX = 150


async def get_profile(db: AsyncSession, user_id: int) -> dict:
    user = await get_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")
    data = _profile_dict(user)
    data["post_count"] = await count_photos(db, creator_id=user_id)
    return data


def _profile_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "username": user.username,
        "display_name": user.display_name or "",
        "bio": user.bio or "",
        "avatar_url": user.avatar_url or "",
        "website": user.website or "",
        "created_at": user.created_at,
    }


async def _normalize_username(db: AsyncSession, user_id: int, raw: str) -> str | None:
    """
    "" o solo espacios → None (sin username, nunca "").
    Si no, valida patrón, pasa a minúsculas y verifica que nadie más lo tenga.
    """
    name = raw.strip()
    if not name:
        return None
    if not USERNAME_RE.match(name):
        raise ValidationFailed(
            "Username must be 3-30 characters, alphanumeric and underscores only"
        )
    name = name.lower()
    if await get_by_username(db, name, exclude_id=user_id):
        raise ValidationFailed("Username is already taken")
    return name


async def update_profile(db: AsyncSession, user_id: int, changes: dict[str, Any]) -> dict:
    """
    Update parcial del perfil propio. Todas las validaciones van antes
    de escribir. No hace commit (lo hace el caller).
    """
    if not changes:
        raise ValidationFailed("No fields to update")

    values: dict[str, Any] = {}
    if "username" in changes:
        values["username"] = await _normalize_username(db, user_id, changes["username"])
    if "bio" in changes:
        if len(changes["bio"]) > BIO_MAX:
            raise ValidationFailed(f"Bio must be {BIO_MAX} characters or less")
        values["bio"] = changes["bio"]
    for key in ("display_name", "avatar_url", "website"):
        if key in changes:
            values[key] = changes[key]

    try:
        res = await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
    except IntegrityError:
        # dos requests con el mismo username a la vez: gana el índice UNIQUE
        await db.rollback()
        raise ValidationFailed("Username is already taken")

    if (res.rowcount or 0) == 0:
        raise NotFound("User not found")

    res = await db.execute(
        select(User).where(User.id == user_id).execution_options(populate_existing=True)
    )
    user = res.scalar_one_or_none()
    if not user:
        raise NotFound("User not found after update")

    log.info("profile updated user=%s fields=%s", user_id, sorted(values))
    return _profile_dict(user)
