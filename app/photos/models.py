# app/photos/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Integer,
    DateTime,
    func,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
    JSON,
)
from sqlalchemy.types import UnicodeText
from sqlalchemy.dialects.postgresql import JSONB
from app.db.base import Base
from app.photos.media import detect_media_type


class Photo(Base):
    """
    Publicación (foto o video) de un CREATOR.
    """
    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # dueño: no cambia después de crear. Sin FK: el detalle tolera creador ausente
    creator_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    caption: Mapped[str] = mapped_column(UnicodeText, nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # tags de personas, en orden
    people: Mapped[list] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list
    )

    # URL devuelta por el media store (imagen o video)
    media_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    # ⚠️ se guarda, pero NO se confía en él al leer: ver media_kind
    media_type: Mapped[str] = mapped_column(String(8), nullable=False, default="image")
    thumbnail_url: Mapped[str] = mapped_column(String(1000), nullable=False, default="")

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @property
    def media_kind(self) -> str:
        """Tipo canónico, siempre recalculado desde la URL."""
        return detect_media_type(self.media_url)


class Rating(Base):
    """
    Calificación 1..5 de un usuario sobre una publicación.
    Un usuario tiene a lo sumo una calificación por publicación (upsert).
    """
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("photo_id", "user_id", name="uq_rating_photo_user"),
        CheckConstraint("value >= 1 AND value <= 5", name="ck_rating_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # sin FK a photos: el borrado en cascada lo hace el service
    photo_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    value: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
