"""
Book Model

A catalogued title. Physical copies are BookInstance records.

This file also contains the book_genres association table that links
books to genres.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.utils import display

if TYPE_CHECKING:
    from catalog.models.author import Author
    from catalog.models.bookinstance import BookInstance
    from catalog.models.genre import Genre


# =============================================================================
# Association Table
# =============================================================================
# A "pure" association table: it stores only the relationship.
# Deleting a genre is guarded while books still reference it, so the
# cascade only matters for deleting books.

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        Integer,
        ForeignKey("genres.id"),
        primary_key=True,
    ),
    comment="Association table linking books to their genres",
)


class Book(Base):
    """
    Book model representing titles in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - author_id: Reference to the author (required)
    - summary: Short description (required)
    - isbn: International Standard Book Number (required)

    Relationships:
    - author: Many-to-One
    - genres: Many-to-Many through book_genres
    - instances: One-to-Many, the physical copies
    """

    __tablename__ = "books"

    kind = "book"
    label = "Book"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    summary: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book summary"
    )

    isbn: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="International Standard Book Number"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    genres: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary=book_genres,
        back_populates="books",
    )

    instances: Mapped[list["BookInstance"]] = relationship(
        "BookInstance",
        back_populates="book",
    )

    @property
    def url(self) -> str:
        return display.entity_url(self.kind, self.id)

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"
