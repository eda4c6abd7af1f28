# app/core/json.py
from typing import Any, Mapping
import json
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

class UTF8JSONResponse(JSONResponse):
    """
    JSON en UTF-8 sin escapes ASCII; pasa antes por jsonable_encoder
    (datetime, modelos pydantic, etc.).
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        payload = jsonable_encoder(content, exclude_none=False)
        return json.dumps(
            payload,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def error_response(
    status_code: int,
    message: str,
    headers: Mapping[str, str] | None = None,
) -> UTF8JSONResponse:
    """Forma única de error para toda la API."""
    return UTF8JSONResponse({"error": message}, status_code=status_code, headers=headers)
