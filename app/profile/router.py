# app/profile/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity, require_identity
from app.db.session import get_session
from app.profile import service as svc
from app.profile.schemas import ProfileEnvelope, ProfilePatch, ProfileUpdated

router = APIRouter(prefix="/api/profile", tags=["profile"])


# ---------------------------
# GET /api/profile
# ---------------------------
@router.get("", response_model=ProfileEnvelope)
async def my_profile(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    # siempre el perfil propio (nunca el de otro usuario)
    return {"profile": await svc.get_profile(db, identity.user_id)}


# ---------------------------
# PUT /api/profile
# ---------------------------
@router.put("", response_model=ProfileUpdated)
async def update_my_profile(
    payload: ProfilePatch,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    profile = await svc.update_profile(db, identity.user_id, payload.changes())
    await db.commit()
    return {"message": "Profile updated", "profile": profile}
