# app/core/errors.py
"""
Errores de dominio y los handlers que los convierten en

    {"error": "<mensaje>"}

con el status correspondiente. Los services lanzan estas excepciones
y los routers no necesitan traducirlas una por una.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.json import error_response

log = logging.getLogger("uvicorn")


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class ValidationFailed(AppError):
    status_code = 400
    default_message = "Invalid request"


class UpstreamError(AppError):
    """El proveedor de media falló; no se reintenta."""
    status_code = 500
    default_message = "Failed to upload media"


async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    msg = "Invalid request"
    if errors:
        first = errors[0]
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        msg = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    return error_response(400, msg)


async def unhandled_error_handler(request: Request, exc: Exception):
    # el detalle solo va al log, nunca al cliente
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
