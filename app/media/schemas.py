# app/media/schemas.py
from pydantic import BaseModel


class UploadOut(BaseModel):
    # claves tal como las devuelve el proveedor de media
    secure_url: str
    public_id: str
    mediaType: str
    thumbnailUrl: str = ""
