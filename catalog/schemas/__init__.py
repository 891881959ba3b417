"""
Pydantic Form Schemas Package

One schema per entity form. Each schema:
- validates the sanitized (trimmed) strings posted by the HTML form
- produces field errors with the messages shown next to the form
- converts itself into store values with to_record()
- builds the initial form values for an existing record with initial()

Usage:
    from catalog.schemas import GenreForm
"""

from catalog.schemas.author import AuthorForm
from catalog.schemas.book import BookForm
from catalog.schemas.bookinstance import BookInstanceForm
from catalog.schemas.genre import GenreForm

__all__ = [
    "AuthorForm",
    "BookForm",
    "BookInstanceForm",
    "GenreForm",
]
