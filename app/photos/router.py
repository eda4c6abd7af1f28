# app/photos/router.py
import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity, creator_only, path_id, require_identity
from app.core.json import UTF8JSONResponse
from app.core.schemas import Message
from app.db.session import get_session
from app.media.storage import MediaStore, get_media_store
from app.photos import service as svc
from app.photos.schemas import (
    PhotoCreate,
    PhotoCreated,
    PhotoDetail,
    PhotoFields,
    PhotoPage,
    PhotoPatch,
    PhotoUpdated,
    RatingIn,
    RatingResult,
)

log = logging.getLogger("uvicorn")

router = APIRouter(
    prefix="/api",
    tags=["photos"],
    default_response_class=UTF8JSONResponse,
)


# page/limit llegan como texto: si no son números válidos se usan
# los defaults en vez de responder 400
@router.get("/photos", response_model=PhotoPage)
async def feed_list(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    search: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
):
    return await svc.list_feed(db, page=page, limit=limit, search=search)


@router.get("/creator/photos", response_model=PhotoPage, response_model_exclude_none=True)
async def my_photos(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    identity: Identity = Depends(creator_only("Only creators can view their posts")),
    db: AsyncSession = Depends(get_session),
):
    return await svc.list_creator_photos(db, identity, page=page, limit=limit)


@router.post("/photos", response_model=PhotoCreated, status_code=status.HTTP_201_CREATED)
async def publish(
    payload: PhotoCreate,
    identity: Identity = Depends(creator_only("Only creators can upload")),
    db: AsyncSession = Depends(get_session),
):
    """
    Crea la publicación con la URL que ya devolvió POST /api/upload.
    El mediaType guardado es el detectado desde la URL.
    """
    photo = await svc.create_photo(
        db,
        identity,
        title=payload.title,
        image_url=payload.image_url,
        caption=payload.caption,
        location=payload.location,
        people=payload.people,
        thumbnail_url=payload.thumbnail_url,
        claimed_media_type=payload.media_type,
    )
    await db.commit()
    return PhotoCreated(
        id=str(photo.id),
        title=photo.title,
        image_url=photo.media_url,
        media_type=photo.media_type,
        thumbnail_url=photo.thumbnail_url,
    )


@router.get("/photos/{photo_id}", response_model=PhotoDetail)
async def photo_detail(
    photo_id: str,
    db: AsyncSession = Depends(get_session),
):
    return await svc.get_detail(db, path_id(photo_id, "Not Found"))


@router.put("/photos/{photo_id}", response_model=PhotoUpdated)
async def edit_photo(
    photo_id: str,
    body: PhotoPatch,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    """
    Edita title/caption/location/people. Solo el autor.
    Lo que no viene en el body no se toca.
    """
    photo = await svc.edit_photo(db, identity, path_id(photo_id), body.changes())
    await db.commit()
    return PhotoUpdated(
        message="Post updated",
        photo=PhotoFields(
            id=str(photo.id),
            title=photo.title,
            caption=photo.caption,
            location=photo.location,
            people=list(photo.people or []),
        ),
    )


@router.delete("/photos/{photo_id}", response_model=Message)
async def delete_photo(
    photo_id: str,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
    store: MediaStore = Depends(get_media_store),
):
    """
    Elimina la publicación con sus comentarios y calificaciones.
    Solo el autor puede borrar.
    """
    media_url = await svc.delete_photo(db, identity, path_id(photo_id))
    await db.commit()

    # 🧹 best-effort: borrar el archivo si está en nuestro store
    # y ninguna otra publicación lo usa
    if media_url:
        try:
            await run_in_threadpool(store.delete, media_url)
        except OSError as e:
            log.warning("media cleanup failed for photo %s: %r", photo_id, e)

    return Message(message="Post deleted successfully")


@router.post("/photos/{photo_id}/ratings", response_model=RatingResult)
async def rate_photo(
    photo_id: str,
    payload: RatingIn,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_session),
):
    result = await svc.rate_photo(db, identity, path_id(photo_id), payload.value)
    await db.commit()
    return result
