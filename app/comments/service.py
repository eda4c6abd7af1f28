# app/comments/service.py
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.comments import repository as repo
from app.comments.models import Comment
from app.core.deps import Identity
from app.core.errors import Forbidden, NotFound, ValidationFailed
from app.photos.repository import get_photo, get_user_rating
from app.users.repository import get_by_id

log = logging.getLogger("uvicorn")


def clean_text(text: str | None) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationFailed("Comment text is required")
    return text.strip()


async def _owned_comment(db: AsyncSession, comment_id: int, identity: Identity, action: str) -> Comment:
    # dueño del comentario, no de la publicación
    c = await repo.get_comment(db, comment_id)
    if not c:
        raise NotFound("Comment not found")
    if c.user_id != identity.user_id:
        raise Forbidden(f"You can only {action} your own comments")
    return c


async def add_comment(db: AsyncSession, identity: Identity, photo_id: int, text: str | None) -> dict:
    photo = await get_photo(db, photo_id)
    if not photo:
        raise NotFound("Not found")
    txt = clean_text(text)

    c = await repo.create_comment(db, user_id=identity.user_id, photo_id=photo_id, text=txt)
    author = await get_by_id(db, identity.user_id)
    rating = await get_user_rating(db, photo_id, identity.user_id)

    return {
        "id": str(c.id),
        "text": c.text,
        "created_at": c.created_at,
        "updated_at": c.updated_at,
        "user": {
            "id": str(identity.user_id),
            "email": author.email if author else "",
        },
        "rating": rating.value if rating else None,
    }


async def edit_comment(db: AsyncSession, identity: Identity, comment_id: int, text: str | None) -> Comment:
    c = await _owned_comment(db, comment_id, identity, "edit")
    c.text = clean_text(text)
    await db.flush()
    await db.refresh(c)
    return c


async def delete_comment(db: AsyncSession, identity: Identity, comment_id: int) -> None:
    c = await _owned_comment(db, comment_id, identity, "delete")
    await repo.delete_comment(db, c)
    log.info("comment deleted id=%s by user=%s", comment_id, identity.user_id)
