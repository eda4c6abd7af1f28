# app/media/streaming.py
from __future__ import annotations
import os, hashlib, time
from mimetypes import guess_type
from fastapi import APIRouter, Depends, Request
from starlette.responses import FileResponse, Response
from app.core.config import settings
from app.core.errors import NotFound
from app.media.storage import MediaStore, get_media_store

router = APIRouter(tags=["media"])

_BASE = settings.MEDIA_BASE_URL.rstrip("/")


def _etag(stat: os.stat_result) -> str:
    base = f"{stat.st_mtime_ns}-{stat.st_size}".encode()
    return hashlib.md5(base).hexdigest()


def _headers(abs_path: str) -> dict:
    stat = os.stat(abs_path)
    ct, _ = guess_type(abs_path)
    return {
        "Accept-Ranges": "bytes",
        "Content-Type": ct or "application/octet-stream",
        # los uploads tienen nombre único: nunca cambian
        "Cache-Control": "public, max-age=31536000, immutable",
        "ETag": _etag(stat),
        "Last-Modified": time.strftime("%a, %d %b %Y %H:%M:%S GMT", time.gmtime(int(stat.st_mtime))),
    }


@router.get(_BASE + "/{path:path}")
async def stream_media(
    path: str,
    request: Request,
    store: MediaStore = Depends(get_media_store),
):
    abs_path = store.resolve(path)
    if not abs_path or not os.path.isfile(abs_path):
        raise NotFound("file not found")
    headers = _headers(abs_path)
    inm = request.headers.get("if-none-match")
    if inm and inm == headers["ETag"]:
        return Response(status_code=304, headers=headers)
    # Starlette maneja Range (200/206)
    return FileResponse(abs_path, headers=headers)
