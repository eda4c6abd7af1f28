# app/photos/media.py
import re

IMAGE = "image"
VIDEO = "video"

# patrón de Cloudinary y compatibles: .../video/upload/...
_VIDEO_PATH_MARKER = "/video/upload/"
_VIDEO_EXT_RE = re.compile(r"\.(mp4|webm|mov|avi|mkv)$", re.IGNORECASE)


def detect_media_type(url: str | None) -> str:
    """
    Tipo canónico de una publicación a partir de su URL.
    Nunca se usa el mediaType que manda el cliente o el proveedor.
    """
    if not url:
        return IMAGE
    if _VIDEO_PATH_MARKER in url:
        return VIDEO
    if _VIDEO_EXT_RE.search(url):
        return VIDEO
    return IMAGE


def split_media_urls(url: str | None) -> tuple[str, str, str]:
    """
    (image_url, video_url, media_type): solo uno de los dos slots lleva la URL,
    el otro queda en "".
    """
    kind = detect_media_type(url)
    if kind == VIDEO:
        return "", url or "", kind
    return url or "", "", kind
