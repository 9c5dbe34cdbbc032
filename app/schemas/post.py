from datetime import datetime, timezone
from math import ceil
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

# Texto obligatorio: se recorta y una cadena vacía cuenta como ausente
ShortText = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1, max_length=255)]
LongText = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]

# Valores aceptados para un booleano (true/false, 1/0, "1"/"0")
BOOLEAN_VALUES = {True: True, False: False, "1": True, "0": False}


def coerce_boolean(value):
    if isinstance(value, (bool, int, str)) and value in BOOLEAN_VALUES:
        return BOOLEAN_VALUES[value]
    raise PydanticCustomError('boolean', 'Value must be true or false')


# 📝 Para crear un post
class PostCreate(BaseModel):
    title: ShortText
    content: LongText
    author: ShortText
    is_published: bool = False

    @field_validator('is_published', mode='before')
    @classmethod
    def check_is_published(cls, value):
        return coerce_boolean(value)


# ✏️ Para actualizar un post (todos los campos son opcionales)
class PostUpdate(BaseModel):
    title: Optional[ShortText] = None
    content: Optional[LongText] = None
    author: Optional[ShortText] = None
    is_published: Optional[bool] = None

    @field_validator('title', 'content', 'author', mode='before')
    @classmethod
    def reject_null(cls, value):
        # Si el campo viene en el payload, no puede ser null
        if value is None:
            raise PydanticCustomError('required', 'Field required')
        return value

    @field_validator('is_published', mode='before')
    @classmethod
    def check_is_published(cls, value):
        return coerce_boolean(value)

    def changes(self) -> dict:
        """Solo los campos enviados por el cliente"""
        return self.model_dump(exclude_unset=True)


# ✅ Para devolver post al cliente
class PostOut(BaseModel):
    id: int
    title: str
    content: str
    author: str
    is_published: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator('created_at', 'updated_at')
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # SQLite devuelve fechas sin zona horaria; siempre se guardan en UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# 📚 Una página del listado
class PostPage(BaseModel):
    items: list[PostOut]
    total: int
    per_page: int
    current_page: int
    last_page: int
    from_: Optional[int] = Field(default=None, serialization_alias='from')
    to: Optional[int] = None

    @classmethod
    def build(cls, posts, total: int, page: int, per_page: int) -> 'PostPage':
        offset = (page - 1) * per_page
        items = [PostOut.model_validate(post) for post in posts]
        return cls(
            items=items,
            total=total,
            per_page=per_page,
            current_page=page,
            last_page=max(1, ceil(total / per_page)),
            from_=offset + 1 if items else None,
            to=offset + len(items) if items else None,
        )
