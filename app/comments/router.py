#app/comments/router.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity, path_id, require_identity
from app.core.schemas import Message
from app.db.session import get_session
from app.comments import service as svc
from app.comments.schemas import (
    CommentCreated,
    CommentEdited,
    CommentIn,
    CommentUpdated,
)

router = APIRouter(prefix="/api", tags=["comments"])


@router.post(
    "/photos/{photo_id}/comments",
    response_model=CommentCreated,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    photo_id: str,
    payload: CommentIn,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    comment = await svc.add_comment(db, identity, path_id(photo_id), payload.text)
    await db.commit()
    return {"comment": comment}


@router.put("/comments/{comment_id}", response_model=CommentUpdated)
async def edit_comment(
    comment_id: str,
    payload: CommentIn,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    """
    Solo el autor del comentario puede editarlo, sin importar
    quién sea el dueño de la publicación.
    """
    c = await svc.edit_comment(db, identity, path_id(comment_id, "Comment not found"), payload.text)
    await db.commit()
    return CommentUpdated(
        message="Comment updated",
        comment=CommentEdited(id=str(c.id), text=c.text, updated_at=c.updated_at),
    )


@router.delete("/comments/{comment_id}", response_model=Message)
async def delete_comment(
    comment_id: str,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    await svc.delete_comment(db, identity, path_id(comment_id, "Comment not found"))
    await db.commit()
    return Message(message="Comment deleted")
