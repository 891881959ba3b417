"""
Author Form Schema

Names are required and limited to 100 characters. Dates are optional
ISO-8601 strings; an empty value means "unknown".
"""

from datetime import date
from typing import Any, ClassVar

from pydantic import BaseModel, field_validator

from catalog.models import Author
from catalog.schemas.fields import optional_iso_date, require_text


class AuthorForm(BaseModel):
    """Schema for the author create and update form."""

    list_fields: ClassVar[tuple[str, ...]] = ()

    first_name: str
    family_name: str
    date_of_birth: date | None = None
    date_of_death: date | None = None

    @field_validator("first_name", mode="before")
    @classmethod
    def first_name_required(cls, v: Any) -> str:
        return require_text(v, "First name must be specified.", max_length=100)

    @field_validator("family_name", mode="before")
    @classmethod
    def family_name_required(cls, v: Any) -> str:
        return require_text(v, "Family name must be specified.", max_length=100)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def valid_date_of_birth(cls, v: Any) -> date | None:
        return optional_iso_date(v, "Invalid date of birth")

    @field_validator("date_of_death", mode="before")
    @classmethod
    def valid_date_of_death(cls, v: Any) -> date | None:
        return optional_iso_date(v, "Invalid date of death")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump()

    @staticmethod
    def initial(author: Author | None = None) -> dict[str, Any]:
        if author is None:
            return {
                "first_name": "",
                "family_name": "",
                "date_of_birth": "",
                "date_of_death": "",
            }
        return {
            "first_name": author.first_name,
            "family_name": author.family_name,
            "date_of_birth": author.isodate_of_birth,
            "date_of_death": author.isodate_of_death,
        }
