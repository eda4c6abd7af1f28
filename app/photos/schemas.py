# app/photos/schemas.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from app.core.schemas import CamelModel


class CreatorRef(CamelModel):
    id: str


class CreatorPublic(CamelModel):
    id: str
    email: str


class PhotoListItem(CamelModel):
    id: str
    title: str
    image_url: str
    video_url: str
    media_type: str
    thumbnail_url: str
    created_at: datetime | None = None
    comments_count: int
    ratings_count: int
    # solo en el feed público; en "mis publicaciones" no viaja
    creator: CreatorRef | None = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class PhotoPage(CamelModel):
    photos: list[PhotoListItem]
    pagination: Pagination


class CommentUser(CamelModel):
    id: str
    email: str


class CommentOut(CamelModel):
    id: str
    text: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: CommentUser
    # calificación del mismo autor sobre esta publicación (si existe)
    rating: int | None = None


class PhotoDetail(CamelModel):
    id: str
    title: str
    caption: str
    location: str
    people: list[str]
    image_url: str
    video_url: str
    media_type: str
    thumbnail_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    creator: CreatorPublic
    comments: list[CommentOut]
    avg_rating: float | None = None
    ratings_count: int = 0


class PhotoCreate(CamelModel):
    """
    Campos opcionales a propósito: la validación (400) la hace el service.
    media_type llega del cliente pero se ignora.
    """
    title: str | None = None
    image_url: str | None = None
    caption: str | None = None
    location: str | None = None
    people: list[str] | None = None
    media_type: str | None = None
    thumbnail_url: str | None = None


class PhotoCreated(CamelModel):
    id: str
    title: str
    image_url: str
    media_type: str
    thumbnail_url: str = ""


class PhotoPatch(CamelModel):
    """
    Patch parcial: solo se aplican las claves presentes (model_fields_set).
    Ausente ≠ null.
    """
    title: str | None = None
    caption: str | None = None
    location: str | None = None
    people: list[str] | None = None

    def changes(self) -> dict[str, Any]:
        return {k: getattr(self, k) for k in self.model_fields_set}


class PhotoFields(CamelModel):
    id: str
    title: str
    caption: str
    location: str
    people: list[str]


class PhotoUpdated(BaseModel):
    message: str
    photo: PhotoFields


class RatingIn(BaseModel):
    # se valida en el service para responder 400 con mensaje claro
    value: Any = None


class RatingValue(BaseModel):
    value: int


class RatingResult(CamelModel):
    rating: RatingValue
    avg_rating: float | None = None
    ratings_count: int = 0
