# app/users/schemas.py
from typing import Literal
from pydantic import BaseModel, EmailStr, Field, field_serializer

from app.core.schemas import CamelModel


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["CREATOR", "CONSUMER"] = "CONSUMER"


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserOut(CamelModel):
    id: int
    email: str
    role: str
    username: str | None = None

    @field_serializer("id")
    def _id_str(self, v: int) -> str:
        return str(v)

    @field_serializer("username")
    def _username_str(self, v: str | None) -> str:
        return v or ""


class AuthOut(BaseModel):
    user: UserOut
    access_token: str
    token_type: str = "bearer"


class MeOut(BaseModel):
    user: UserOut
