# app/photos/repository.py
from sqlalchemy import select, desc, func, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from app.photos.models import Photo, Rating


# -------------------------
# PHOTOS
# -------------------------
async def create_photo(
    db: AsyncSession,
    *,
    creator_id: int,
    title: str,
    media_url: str,
    media_type: str,
    thumbnail_url: str = "",
    caption: str = "",
    location: str = "",
    people: list[str] | None = None,
) -> Photo:
    photo = Photo(
        creator_id=creator_id,
        title=title,
        caption=caption,
        location=location,
        people=list(people or []),
        media_url=media_url,
        media_type=media_type,
        thumbnail_url=thumbnail_url,
    )
    db.add(photo)
    await db.flush()
    await db.refresh(photo)
    return photo


async def get_photo(db: AsyncSession, photo_id: int) -> Photo | None:
    res = await db.execute(select(Photo).where(Photo.id == photo_id))
    return res.scalar_one_or_none()


def _filters(search: str | None, creator_id: int | None) -> list:
    conds = []
    if creator_id is not None:
        conds.append(Photo.creator_id == creator_id)
    if search:
        # autoescape: % y _ del usuario se buscan literalmente
        conds.append(
            or_(
                Photo.title.icontains(search, autoescape=True),
                Photo.caption.icontains(search, autoescape=True),
                Photo.location.icontains(search, autoescape=True),
            )
        )
    return conds


async def list_photos(
    db: AsyncSession,
    *,
    limit: int,
    offset: int = 0,
    search: str | None = None,
    creator_id: int | None = None,
) -> list[Photo]:
    q = (
        select(Photo)
        .where(*_filters(search, creator_id))
        .order_by(desc(Photo.created_at), desc(Photo.id))
        .limit(limit)
        .offset(offset)
    )
    res = await db.execute(q)
    return list(res.scalars())


async def count_photos(
    db: AsyncSession,
    *,
    search: str | None = None,
    creator_id: int | None = None,
) -> int:
    q = select(func.count()).select_from(Photo).where(*_filters(search, creator_id))
    res = await db.execute(q)
    return int(res.scalar_one() or 0)


async def delete_photo(db: AsyncSession, photo_id: int) -> int:
    res = await db.execute(delete(Photo).where(Photo.id == photo_id))
    return res.rowcount or 0


async def count_media_refs(db: AsyncSession, media_url: str) -> int:
    """Cuántas publicaciones apuntan al mismo archivo."""
    q = select(func.count()).select_from(Photo).where(Photo.media_url == media_url)
    res = await db.execute(q)
    return int(res.scalar_one() or 0)


# -------------------------
# ⭐ RATINGS
# -------------------------
async def count_photo_ratings(db: AsyncSession, photo_id: int) -> int:
    q = select(func.count()).select_from(Rating).where(Rating.photo_id == photo_id)
    res = await db.execute(q)
    return int(res.scalar_one() or 0)


async def list_photo_ratings(db: AsyncSession, photo_id: int) -> list[Rating]:
    res = await db.execute(
        select(Rating).where(Rating.photo_id == photo_id).order_by(Rating.id)
    )
    return list(res.scalars())


async def get_user_rating(db: AsyncSession, photo_id: int, user_id: int) -> Rating | None:
    res = await db.execute(
        select(Rating).where(
            Rating.photo_id == photo_id,
            Rating.user_id == user_id,
        )
    )
    return res.scalar_one_or_none()


async def upsert_rating(
    db: AsyncSession,
    *,
    photo_id: int,
    user_id: int,
    value: int,
) -> Rating:
    """
    Una sola calificación por (usuario, publicación): si ya existe se
    reemplaza el valor.
    """
    existing = await get_user_rating(db, photo_id, user_id)
    if existing:
        existing.value = value
        await db.flush()
        await db.refresh(existing)
        return existing

    rating = Rating(photo_id=photo_id, user_id=user_id, value=value)
    db.add(rating)
    await db.flush()
    await db.refresh(rating)
    return rating


async def delete_photo_ratings(db: AsyncSession, photo_id: int) -> int:
    res = await db.execute(delete(Rating).where(Rating.photo_id == photo_id))
    return res.rowcount or 0
