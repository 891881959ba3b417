"""
BookInstance Form Schema

An empty status falls back to Maintenance; an empty due_back means the
copy has no due date.
"""

from datetime import date
from typing import Any, ClassVar

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from catalog.models import BookInstance, BookInstanceStatus
from catalog.schemas.fields import optional_iso_date, reference_id, require_text


class BookInstanceForm(BaseModel):
    """Schema for the book copy create and update form."""

    list_fields: ClassVar[tuple[str, ...]] = ()

    book: int
    imprint: str
    status: BookInstanceStatus = BookInstanceStatus.MAINTENANCE
    due_back: date | None = None

    @field_validator("book", mode="before")
    @classmethod
    def book_required(cls, v: Any) -> int:
        return reference_id(v, "Book must be specified")

    @field_validator("imprint", mode="before")
    @classmethod
    def imprint_required(cls, v: Any) -> str:
        return require_text(v, "Imprint must be specified", max_length=255)

    @field_validator("status", mode="before")
    @classmethod
    def known_status(cls, v: Any) -> BookInstanceStatus:
        if not v:
            return BookInstanceStatus.MAINTENANCE
        try:
            return BookInstanceStatus(v)
        except ValueError:
            raise PydanticCustomError("invalid_status", "Invalid status") from None

    @field_validator("due_back", mode="before")
    @classmethod
    def valid_due_back(cls, v: Any) -> date | None:
        return optional_iso_date(v, "Invalid date")

    def to_record(self) -> dict[str, Any]:
        return {
            "book_id": self.book,
            "imprint": self.imprint,
            "status": self.status.value,
            "due_back": self.due_back,
        }

    @staticmethod
    def initial(bookinstance: BookInstance | None = None) -> dict[str, Any]:
        if bookinstance is None:
            return {
                "book": "",
                "imprint": "",
                "status": BookInstanceStatus.MAINTENANCE.value,
                "due_back": "",
            }
        return {
            "book": str(bookinstance.book_id),
            "imprint": bookinstance.imprint,
            "status": bookinstance.status,
            "due_back": bookinstance.due_back_iso,
        }
