"""
Author Model

Represents an author in the catalog.

Computed fields (name, formatted dates, url) are properties derived from
the stored columns at read time; see catalog.utils.display.
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.utils import display

# TYPE_CHECKING is True only during type checking (mypy, IDE)
# This prevents circular imports at runtime while enabling type hints
if TYPE_CHECKING:
    from catalog.models.book import Book


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Relationships:
    - books: One-to-Many, the books whose author is this record

    Example:
        author = Author(
            first_name="Patrick",
            family_name="Rothfuss",
            date_of_birth=date(1973, 6, 6),
        )
    """

    __tablename__ = "authors"

    kind = "author"
    label = "Author"

    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Author's first name"
    )

    family_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Author's family name, used for sorting"
    )

    date_of_birth: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    date_of_death: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    # -------------------------------------------------------------------------
    # Derived Fields
    # -------------------------------------------------------------------------
    @property
    def name(self) -> str:
        return display.author_display_name(self.first_name, self.family_name)

    @property
    def formatted_date_of_birth(self) -> str:
        return display.format_date(self.date_of_birth, default="unknown")

    @property
    def formatted_date_of_death(self) -> str:
        return display.format_date(self.date_of_death)

    @property
    def isodate_of_birth(self) -> str:
        return display.iso_date(self.date_of_birth)

    @property
    def isodate_of_death(self) -> str:
        return display.iso_date(self.date_of_death)

    @property
    def lifespan(self) -> str:
        return display.lifespan(self.date_of_birth, self.date_of_death)

    @property
    def url(self) -> str:
        return display.entity_url(self.kind, self.id)

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"
