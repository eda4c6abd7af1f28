# app/photos/service.py
import logging
import math
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.deps import MAX_DB_ID, Identity
from app.core.errors import Forbidden, NotFound, ValidationFailed
from app.comments import repository as comments_repo
from app.photos import repository as repo
from app.photos.media import VIDEO, detect_media_type, split_media_urls
from app.photos.models import Photo, Rating
from app.users.repository import get_by_id

log = logging.getLogger("uvicorn")

UNKNOWN_CREATOR = {"id": "", "email": "Unknown Creator"}


# -------------------------
# helpers
# -------------------------
def _to_positive_int(raw: Any, default: int, upper: int | None = None) -> int:
    """
    Lo que no se pueda interpretar como entero en [1, upper] vuelve al
    default, sin error.
    """
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    if value < 1 or (upper is not None and value > upper):
        return default
    return value


def parse_pagination(page: Any, limit: Any) -> tuple[int, int]:
    # page fuera de rango desbordaría el OFFSET en la base
    page_n = _to_positive_int(page, 1, upper=MAX_DB_ID)
    limit_n = _to_positive_int(limit, settings.DEFAULT_PAGE_SIZE)
    return page_n, min(limit_n, settings.MAX_PAGE_SIZE)


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def average_rating(ratings: list[Rating]) -> float | None:
    """Media aritmética cruda; None si no hay calificaciones."""
    if not ratings:
        return None
    return sum(r.value for r in ratings) / len(ratings)


def _clean_people(people: Any) -> list[str]:
    if people is None:
        return []
    if not isinstance(people, list):
        raise ValidationFailed("people must be a list of strings")
    return [str(p) for p in people]


async def _list_item(db: AsyncSession, photo: Photo, *, with_creator: bool) -> dict:
    image_url, video_url, media_type = split_media_urls(photo.media_url)
    item = {
        "id": str(photo.id),
        "title": photo.title,
        "image_url": image_url,
        "video_url": video_url,
        "media_type": media_type,
        "thumbnail_url": photo.thumbnail_url or "",
        "created_at": photo.created_at,
        # una consulta de conteo por item; el tamaño de página es chico
        "comments_count": await comments_repo.count_photo_comments(db, photo.id),
        "ratings_count": await repo.count_photo_ratings(db, photo.id),
    }
    if with_creator:
        item["creator"] = {"id": str(photo.creator_id)}
    return item


async def get_owned_photo(db: AsyncSession, photo_id: int, identity: Identity, action: str) -> Photo:
    photo = await repo.get_photo(db, photo_id)
    if not photo:
        raise NotFound("Not found")
    if photo.creator_id != identity.user_id:
        raise Forbidden(f"You can only {action} your own posts")
    return photo


# -------------------------
# listados
# -------------------------
async def list_feed(
    db: AsyncSession,
    *,
    page: Any = None,
    limit: Any = None,
    search: str | None = None,
) -> dict:
    page_n, limit_n = parse_pagination(page, limit)
    search = (search or "").strip() or None

    photos = await repo.list_photos(
        db, limit=limit_n, offset=(page_n - 1) * limit_n, search=search
    )
    total = await repo.count_photos(db, search=search)

    return {
        "photos": [await _list_item(db, p, with_creator=True) for p in photos],
        "pagination": {
            "page": page_n,
            "limit": limit_n,
            "total": total,
            "pages": page_count(total, limit_n),
        },
    }


async def list_creator_photos(
    db: AsyncSession,
    identity: Identity,
    *,
    page: Any = None,
    limit: Any = None,
) -> dict:
    page_n, limit_n = parse_pagination(page, limit)

    photos = await repo.list_photos(
        db,
        limit=limit_n,
        offset=(page_n - 1) * limit_n,
        creator_id=identity.user_id,
    )
    total = await repo.count_photos(db, creator_id=identity.user_id)

    return {
        "photos": [await _list_item(db, p, with_creator=False) for p in photos],
        "pagination": {
            "page": page_n,
            "limit": limit_n,
            "total": total,
            "pages": page_count(total, limit_n),
        },
    }


# -------------------------
# detalle
# -------------------------
async def get_detail(db: AsyncSession, photo_id: int) -> dict:
    """
    Vista completa de una publicación:
    - creador (o "Unknown Creator" si ya no existe)
    - comentarios, más nuevos primero, cada uno con la calificación que
      su autor le dio a ESTA publicación (join por user_id, no hay FK)
    - promedio de calificaciones (None si no hay)
    """
    photo = await repo.get_photo(db, photo_id)
    if not photo:
        raise NotFound("Not Found")

    creator = await get_by_id(db, photo.creator_id)
    ratings = await repo.list_photo_ratings(db, photo_id)
    rows = await comments_repo.list_photo_comments_with_authors(db, photo_id)

    # la primera calificación de cada usuario gana (con upsert hay una sola)
    rating_by_user: dict[int, int] = {}
    for r in ratings:
        rating_by_user.setdefault(r.user_id, r.value)

    comments = []
    for c, author in rows:
        comments.append(
            {
                "id": str(c.id),
                "text": c.text,
                "created_at": c.created_at,
                "updated_at": c.updated_at,
                "user": {
                    "id": str(c.user_id),
                    "email": author.email if author else "",
                },
                "rating": rating_by_user.get(c.user_id),
            }
        )

    image_url, video_url, media_type = split_media_urls(photo.media_url)

    return {
        "id": str(photo.id),
        "title": photo.title,
        "caption": photo.caption or "",
        "location": photo.location or "",
        "people": list(photo.people or []),
        "image_url": image_url,
        "video_url": video_url,
        "media_type": media_type,
        "thumbnail_url": photo.thumbnail_url or "",
        "created_at": photo.created_at,
        "updated_at": photo.updated_at,
        "creator": (
            {"id": str(creator.id), "email": creator.email}
            if creator
            else dict(UNKNOWN_CREATOR)
        ),
        "comments": comments,
        "avg_rating": average_rating(ratings),
        "ratings_count": len(ratings),
    }


# -------------------------
# mutaciones
# -------------------------
async def create_photo(
    db: AsyncSession,
    identity: Identity,
    *,
    title: str | None,
    image_url: str | None,
    caption: str | None = None,
    location: str | None = None,
    people: list[str] | None = None,
    thumbnail_url: str | None = None,
    claimed_media_type: str | None = None,
) -> Photo:
    title = (title or "").strip()
    image_url = (image_url or "").strip()
    if not title or not image_url:
        raise ValidationFailed("Title + Media required")

    # siempre el tipo detectado desde la URL, nunca el que manda el cliente
    media_type = detect_media_type(image_url)
    if claimed_media_type and claimed_media_type != media_type:
        log.info(
            "photo create: claimed mediaType=%s overridden by detected=%s",
            claimed_media_type,
            media_type,
        )

    photo = await repo.create_photo(
        db,
        creator_id=identity.user_id,
        title=title,
        media_url=image_url,
        media_type=media_type,
        # el thumbnail solo tiene sentido para video
        thumbnail_url=(thumbnail_url or "") if media_type == VIDEO else "",
        caption=caption or "",
        location=location or "",
        people=_clean_people(people),
    )
    log.info("photo created id=%s creator=%s type=%s", photo.id, identity.user_id, media_type)
    return photo


async def edit_photo(
    db: AsyncSession,
    identity: Identity,
    photo_id: int,
    changes: dict[str, Any],
) -> Photo:
    """
    Update parcial: solo title/caption/location/people, y solo si vienen.
    URL / tipo / thumbnail no se tocan.
    """
    photo = await get_owned_photo(db, photo_id, identity, "edit")

    if "title" in changes:
        title = (changes["title"] or "").strip()
        if not title:
            raise ValidationFailed("Title cannot be empty")
        photo.title = title
    if "caption" in changes:
        photo.caption = changes["caption"] or ""
    if "location" in changes:
        photo.location = changes["location"] or ""
    if "people" in changes:
        photo.people = _clean_people(changes["people"])

    await db.flush()
    await db.refresh(photo)
    return photo


async def delete_photo(db: AsyncSession, identity: Identity, photo_id: int) -> str | None:
    """
    Borra comentarios, luego calificaciones, luego la publicación.
    Todo dentro de la transacción de la sesión: el commit lo hace el router,
    si algo falla no queda nada a medias.
    Devuelve la URL del archivo si ya ninguna publicación lo usa
    (se puede borrar del store); None si otra sigue apuntando a él.
    """
    photo = await get_owned_photo(db, photo_id, identity, "delete")
    media_url = photo.media_url

    n_comments = await comments_repo.delete_photo_comments(db, photo_id)
    n_ratings = await repo.delete_photo_ratings(db, photo_id)
    await repo.delete_photo(db, photo_id)
    await db.flush()

    log.info(
        "photo deleted id=%s comments=%s ratings=%s",
        photo_id,
        n_comments,
        n_ratings,
    )
    if await repo.count_media_refs(db, media_url):
        return None
    return media_url


async def rate_photo(db: AsyncSession, identity: Identity, photo_id: int, value: Any) -> dict:
    # bool es int en Python: no lo aceptamos como calificación
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 5:
        raise ValidationFailed("Rating must be an integer between 1 and 5")

    photo = await repo.get_photo(db, photo_id)
    if not photo:
        raise NotFound("Not found")

    rating = await repo.upsert_rating(
        db, photo_id=photo_id, user_id=identity.user_id, value=value
    )
    ratings = await repo.list_photo_ratings(db, photo_id)
    return {
        "rating": {"value": rating.value},
        "avg_rating": average_rating(ratings),
        "ratings_count": len(ratings),
    }
