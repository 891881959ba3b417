"""
Genre Form Schema
"""

from typing import Any, ClassVar

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from catalog.models import Genre


class GenreForm(BaseModel):
    """Schema for the genre create and update form."""

    list_fields: ClassVar[tuple[str, ...]] = ()

    name: str

    @field_validator("name", mode="before")
    @classmethod
    def name_length(cls, v: Any) -> str:
        if not isinstance(v, str) or not 3 <= len(v) <= 100:
            raise PydanticCustomError(
                "genre_name_length", "Genre name must be 3-100 characters"
            )
        return v

    def to_record(self) -> dict[str, Any]:
        return {"name": self.name}

    @staticmethod
    def initial(genre: Genre | None = None) -> dict[str, Any]:
        return {"name": genre.name if genre else ""}
