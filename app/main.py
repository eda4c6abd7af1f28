# app/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.json import UTF8JSONResponse
from app.core.config import settings
from app.core.errors import register_error_handlers
from app.db.init_db import init_models

# routers
from app.users.router import router as auth_router
from app.profile.router import router as profile_router
from app.photos.router import router as photos_router
from app.comments.router import router as comments_router
from app.media.router import router as upload_router
from app.media.streaming import router as media_router

log = logging.getLogger("uvicorn")
log.setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="Media Share API",
    default_response_class=UTF8JSONResponse,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# errores → {"error": "..."}
register_error_handlers(app)


@app.on_event("startup")
async def on_startup():
    log.info("🚀 Iniciando servicio…")
    await init_models()
    log.info("✅ Startup listo.")


@app.get("/api/health")
async def health():
    return {"ok": True, "service": "media-share"}


# routers
app.include_router(auth_router)      # /api/auth/...
app.include_router(profile_router)   # /api/profile
app.include_router(photos_router)    # /api/photos/..., /api/creator/photos
app.include_router(comments_router)  # /api/photos/{id}/comments, /api/comments/...
app.include_router(upload_router)    # /api/upload
app.include_router(media_router)     # /media/...
