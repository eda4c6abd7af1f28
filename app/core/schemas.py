# app/core/schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base para todo lo que viaja al front: atributos snake_case en Python,
    claves camelCase en el JSON (imageUrl, avgRating, ...).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Message(BaseModel):
    message: str
