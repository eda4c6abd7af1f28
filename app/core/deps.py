# app/core/deps.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, Query, Request
from jose import JWTError

from app.core.config import settings
from app.core.errors import Forbidden, NotFound, Unauthorized
from app.core.security import decode_access_token

ROLE_CREATOR = "CREATOR"
ROLE_CONSUMER = "CONSUMER"
ROLES = (ROLE_CREATOR, ROLE_CONSUMER)


@dataclass(frozen=True)
class Identity:
    user_id: int
    role: str

    @property
    def is_creator(self) -> bool:
        return self.role == ROLE_CREATOR


def _extract_token(
    token: str | None,
    authorization: str | None,
    cookie: str | None,
) -> str | None:
    """
    Orden: ?token=..., luego Authorization: Bearer XXX, luego la cookie.
    """
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1]
    if not token:
        token = cookie
    return token or None


async def get_identity(
    request: Request,
    token: str | None = Query(None),
    authorization: str | None = Header(None),
) -> Identity | None:
    """
    Identidad opcional: None si no hay token o si no es válido.
    """
    tok = _extract_token(token, authorization, request.cookies.get(settings.AUTH_COOKIE_NAME))
    if not tok:
        return None
    try:
        sub, role = decode_access_token(tok)
        return Identity(user_id=int(sub), role=role)
    except (JWTError, ValueError):
        return None


async def require_identity(identity: Identity | None = Depends(get_identity)) -> Identity:
    if identity is None:
        raise Unauthorized()
    return identity


def creator_only(message: str = "Only creators can do this"):
    """
    Dependencia para endpoints de CREATOR.
    Sin identidad o sin rol CREATOR → 403 (no 401).
    """
    async def _require_creator(identity: Identity | None = Depends(get_identity)) -> Identity:
        if identity is None or not identity.is_creator:
            raise Forbidden(message)
        return identity

    return _require_creator


# ids son INTEGER (int4 en Postgres)
MAX_DB_ID = 2**31 - 1


def path_id(raw: str, message: str = "Not found") -> int:
    """
    Id de la URL → int. Lo que no puede ser un id de la base
    (texto, negativo, fuera de rango) no existe: 404, no 400 ni 500.
    """
    if not (raw.isascii() and raw.isdigit()) or len(raw) > len(str(MAX_DB_ID)):
        raise NotFound(message)
    value = int(raw)
    if not 1 <= value <= MAX_DB_ID:
        raise NotFound(message)
    return value
