import logging
from app.db.session import get_engine
from app.db.base import Base

# 👇 importa todos los modelos que deben existir en la DB
from app.users.models import User  # noqa: F401
from app.photos.models import Photo, Rating  # noqa: F401
from app.comments.models import Comment  # noqa: F401

log = logging.getLogger("uvicorn")


async def init_models():
    """
    Crea/verifica todas las tablas declaradas en Base.metadata.
    Si la DB no responde el error se propaga y el arranque falla.
    """
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("✅ DB init: tablas creadas/verificadas.")
