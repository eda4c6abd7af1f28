# app/comments/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    Integer,
    Text,
    DateTime,
    func,
    ForeignKey,
)
from app.db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # sin FK: el borrado de la publicación limpia los comentarios
    photo_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )

    # nunca vacío ni solo espacios
    text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
