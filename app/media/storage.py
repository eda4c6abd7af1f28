# app/media/storage.py
import os
import uuid
import shutil
from dataclasses import dataclass

from fastapi import UploadFile

from app.core.config import settings
from app.core.errors import ValidationFailed


ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
ALLOWED_VIDEO_TYPES = {"video/mp4", "video/webm", "video/quicktime", "video/x-msvideo"}

# extensión por content-type (el nombre que manda el cliente no se usa)
_EXT_BY_TYPE = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "video/mp4": ".mp4",
    "video/webm": ".webm",
    "video/quicktime": ".mov",
    "video/x-msvideo": ".avi",
}


@dataclass(frozen=True)
class UploadResult:
    secure_url: str
    public_id: str
    media_type: str
    thumbnail_url: str = ""


def _file_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    f = upload.file
    f.seek(0, os.SEEK_END)
    size = f.tell()
    f.seek(0)
    return size


def classify_upload(upload: UploadFile, *, allow_video: bool = True) -> str:
    """
    Valida content-type y tamaño. Devuelve "image" | "video".
    Lanza ValidationFailed (400) si no cumple.
    """
    ct = (upload.content_type or "").lower()
    is_video = allow_video and ct in ALLOWED_VIDEO_TYPES
    is_image = ct in ALLOWED_IMAGE_TYPES

    if not is_video and not is_image:
        allowed = "JPG, PNG, GIF, WEBP, MP4, WEBM, MOV, AVI" if allow_video else "JPG, PNG, GIF, WEBP"
        raise ValidationFailed(f"Invalid file type. Allowed: {allowed}")

    max_size = settings.MAX_VIDEO_BYTES if is_video else settings.MAX_IMAGE_BYTES
    if _file_size(upload) > max_size:
        raise ValidationFailed(f"File too large. Max size: {max_size // (1024 * 1024)}MB")

    return "video" if is_video else "image"


class MediaStore:
    """
    Proveedor de almacenamiento de media: recibe el archivo y devuelve
    una URL durable. No procesa el archivo (sin transcoding ni resize).
    """

    def upload(self, upload: UploadFile, media_type: str) -> UploadResult:
        """Lanza OSError si el proveedor no pudo guardar el archivo."""
        raise NotImplementedError

    def delete(self, url: str) -> bool:
        raise NotImplementedError

    def resolve(self, rel: str) -> str | None:
        # stores remotos: el archivo no se sirve desde esta API
        return None


class LocalMediaStore(MediaStore):
    """
    Guarda en MEDIA_DIR/uploads/{images,videos}/ y sirve desde MEDIA_BASE_URL
    (ver app/media/streaming.py).
    """

    def __init__(self, media_dir: str, base_url: str):
        self.media_dir = media_dir
        self.base_url = base_url.rstrip("/")

    def _rel_for(self, media_type: str, content_type: str) -> str:
        ext = _EXT_BY_TYPE.get(content_type, ".bin")
        return f"uploads/{media_type}s/{uuid.uuid4().hex}{ext}"

    def upload(self, upload: UploadFile, media_type: str) -> UploadResult:
        rel = self._rel_for(media_type, (upload.content_type or "").lower())
        abs_path = os.path.join(self.media_dir, rel)
        os.makedirs(os.path.dirname(abs_path), exist_ok=True)
        upload.file.seek(0)
        with open(abs_path, "wb") as out:
            shutil.copyfileobj(upload.file, out)

        public_id = os.path.splitext(rel)[0]
        return UploadResult(
            secure_url=f"{self.base_url}/{rel}",
            public_id=public_id,
            media_type=media_type,
            # sin procesamiento local → no hay thumbnail de video
            thumbnail_url="",
        )

    def resolve(self, rel: str) -> str | None:
        """Ruta absoluta de un archivo del store; None si cae fuera de media_dir."""
        root = os.path.normpath(self.media_dir)
        abs_path = os.path.normpath(os.path.join(root, rel))
        if not abs_path.startswith(root + os.sep):
            return None
        return abs_path

    def delete(self, url: str) -> bool:
        """
        Borra el archivo si la URL es nuestra. No lanza error si ya no está.
        """
        prefix = f"{self.base_url}/"
        if not url or not url.startswith(prefix):
            return False
        abs_path = self.resolve(url[len(prefix):])
        if abs_path is None:
            return False
        try:
            os.remove(abs_path)
            return True
        except FileNotFoundError:
            return False


_store: MediaStore | None = None


def get_media_store() -> MediaStore:
    global _store
    if _store is None:
        _store = LocalMediaStore(settings.MEDIA_DIR, settings.MEDIA_BASE_URL)
    return _store
