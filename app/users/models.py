# app/users/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime, func
from app.db.base import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    # CREATOR | CONSUMER
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="CONSUMER")

    # 👉 username es "sparse": NULL cuando no está definido. UNIQUE en SQL
    # ignora los NULL, así que dos usuarios sin username nunca chocan.
    # Nunca guardar "" aquí.
    username: Mapped[str | None] = mapped_column(String(30), unique=True, nullable=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    bio: Mapped[str] = mapped_column(String(150), nullable=False, default="")
    avatar_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    website: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
