# app/media/router.py
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.core.deps import Identity, creator_only, require_identity
from app.core.errors import UpstreamError
from app.media.schemas import UploadOut
from app.media.storage import MediaStore, classify_upload, get_media_store

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/upload", tags=["upload"])


async def _store_file(store: MediaStore, file: UploadFile, media_type: str) -> UploadOut:
    # escritura a disco/red: fuera del event loop
    try:
        result = await run_in_threadpool(store.upload, file, media_type)
    except OSError as e:
        log.error("media store upload failed: %r", e)
        raise UpstreamError() from e
    return UploadOut(
        secure_url=result.secure_url,
        public_id=result.public_id,
        mediaType=result.media_type,
        thumbnailUrl=result.thumbnail_url,
    )


@router.post("", response_model=UploadOut)
async def upload_media(
    file: UploadFile = File(...),
    identity: Identity = Depends(creator_only("Only creators can upload media")),
    store: MediaStore = Depends(get_media_store),
):
    """
    Sube imagen o video de una publicación. Si falla el proveedor no se
    crea nada: el cliente solo llama a POST /api/photos con la URL devuelta.
    """
    media_type = classify_upload(file)
    return await _store_file(store, file, media_type)


@router.post("/avatar", response_model=UploadOut)
async def upload_avatar(
    file: UploadFile = File(...),
    identity: Identity = Depends(require_identity),
    store: MediaStore = Depends(get_media_store),
):
    """Variante para avatar: cualquier usuario, solo imágenes."""
    media_type = classify_upload(file, allow_video=False)
    return await _store_file(store, file, media_type)
