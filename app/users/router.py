# app/users/router.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.deps import Identity, require_identity
from app.db.session import get_session
from app.users.schemas import AuthOut, MeOut, UserCreate, UserLogin, UserOut
from app.users import service as svc

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MIN * 60,
        httponly=True,
        samesite="lax",
    )


@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    response: Response,
    db: AsyncSession = Depends(get_session),
):
    user, token = await svc.register_user(db, payload)
    await db.commit()
    _set_session_cookie(response, token)
    return AuthOut(user=UserOut.model_validate(user), access_token=token)


@router.post("/login", response_model=AuthOut)
async def login(
    payload: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_session),
):
    user, token = await svc.login_user(db, payload.email, payload.password)
    _set_session_cookie(response, token)
    return AuthOut(user=UserOut.model_validate(user), access_token=token)


@router.get("/me", response_model=MeOut)
async def me(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    user = await svc.current_user(db, identity.user_id)
    return MeOut(user=UserOut.model_validate(user))


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return {"message": "Logged out"}
