"""
Book Form Schema

The genre field is posted once per ticked checkbox, so it arrives as a
list of ids (possibly empty).
"""

from typing import Any, ClassVar

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from catalog.models import Book
from catalog.schemas.fields import reference_id, require_text


class BookForm(BaseModel):
    """Schema for the book create and update form."""

    list_fields: ClassVar[tuple[str, ...]] = ("genre",)

    title: str
    author: int
    summary: str
    isbn: str
    genre: list[int] = []

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v: Any) -> str:
        return require_text(v, "Title must not be empty.", max_length=500)

    @field_validator("author", mode="before")
    @classmethod
    def author_required(cls, v: Any) -> int:
        return reference_id(v, "Author must not be empty.")

    @field_validator("summary", mode="before")
    @classmethod
    def summary_required(cls, v: Any) -> str:
        return require_text(v, "Summary must not be empty.")

    @field_validator("isbn", mode="before")
    @classmethod
    def isbn_required(cls, v: Any) -> str:
        return require_text(v, "ISBN must not be empty", max_length=20)

    @field_validator("genre", mode="before")
    @classmethod
    def genre_ids(cls, v: Any) -> list[int]:
        if v is None:
            return []
        if isinstance(v, (str, int)):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise PydanticCustomError("invalid_reference", "Invalid genre")
        return [reference_id(item, "Invalid genre") for item in v if item != ""]

    def to_record(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "author_id": self.author,
            "summary": self.summary,
            "isbn": self.isbn,
            "genres": self.genre,
        }

    @staticmethod
    def initial(book: Book | None = None) -> dict[str, Any]:
        if book is None:
            return {"title": "", "author": "", "summary": "", "isbn": "", "genre": []}
        return {
            "title": book.title,
            "author": str(book.author_id),
            "summary": book.summary,
            "isbn": book.isbn,
            "genre": [str(genre.id) for genre in book.genres],
        }
