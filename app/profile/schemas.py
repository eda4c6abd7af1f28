# app/profile/schemas.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_serializer

from app.core.schemas import CamelModel


class ProfileFields(CamelModel):
    id: int
    email: str
    role: str
    username: str | None = None
    display_name: str = ""
    bio: str = ""
    avatar_url: str = ""
    website: str = ""
    created_at: datetime | None = None

    @field_serializer("id")
    def _id_str(self, v: int) -> str:
        return str(v)

    @field_serializer("username")
    def _username_str(self, v: str | None) -> str:
        # sin username → "" hacia el front (en la DB queda NULL)
        return v or ""


class ProfileOut(ProfileFields):
    # solo en GET
    post_count: int = 0


class ProfileEnvelope(BaseModel):
    profile: ProfileOut


class ProfileUpdated(BaseModel):
    message: str
    profile: ProfileFields


class ProfilePatch(CamelModel):
    """
    Solo se aplican las claves presentes; null cuenta como ausente.
    """
    username: str | None = None
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    website: str | None = None

    def changes(self) -> dict[str, Any]:
        return {
            k: getattr(self, k)
            for k in self.model_fields_set
            if getattr(self, k) is not None
        }
