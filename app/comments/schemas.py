# app/comments/schemas.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from app.core.schemas import CamelModel
from app.photos.schemas import CommentOut


class CommentIn(BaseModel):
    # puede venir vacío o con otro tipo: el service responde 400
    text: Any = None


class CommentCreated(BaseModel):
    comment: CommentOut


class CommentEdited(CamelModel):
    id: str
    text: str
    updated_at: datetime | None = None


class CommentUpdated(BaseModel):
    message: str
    comment: CommentEdited
