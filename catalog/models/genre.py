"""
Genre Model

Represents a book genre/category in the catalog.

Genre names are treated as unique by the create flow
(catalog.services.integrity.get_or_create_genre); the table itself carries
no UNIQUE constraint.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.utils import display

if TYPE_CHECKING:
    from catalog.models.book import Book


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    Relationships:
    - books: Many-to-Many relationship through book_genres table
    """

    __tablename__ = "genres"

    kind = "genre"
    label = "Genre"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'Science Fiction', 'Poetry')"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        secondary="book_genres",
        back_populates="genres",
    )

    @property
    def url(self) -> str:
        return display.entity_url(self.kind, self.id)

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name='{self.name}')"
