# app/comments/repository.py
from __future__ import annotations

from typing import List
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment
from app.users.models import User


async def create_comment(
    db: AsyncSession,
    *,
    user_id: int,
    photo_id: int,
    text: str,
) -> Comment:
    c = Comment(user_id=user_id, photo_id=photo_id, text=text)
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


async def get_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    res = await db.execute(select(Comment).where(Comment.id == comment_id))
    return res.scalar_one_or_none()


async def list_photo_comments_with_authors(
    db: AsyncSession, photo_id: int
) -> List[tuple[Comment, User | None]]:
    # más nuevos primero (id para desempatar)
    res = await db.execute(
        select(Comment, User)
        .outerjoin(User, User.id == Comment.user_id)
        .where(Comment.photo_id == photo_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return [(c, u) for c, u in res.all()]


async def count_photo_comments(db: AsyncSession, photo_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(Comment).where(Comment.photo_id == photo_id)
    )
    return int(res.scalar_one() or 0)


async def delete_comment(db: AsyncSession, comment: Comment) -> None:
    await db.delete(comment)
    await db.flush()


async def delete_photo_comments(db: AsyncSession, photo_id: int) -> int:
    res = await db.execute(delete(Comment).where(Comment.photo_id == photo_id))
    return res.rowcount or 0
