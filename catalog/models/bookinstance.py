"""
BookInstance Model

A physical copy of a book that can be borrowed.
"""

import enum
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.utils import display

if TYPE_CHECKING:
    from catalog.models.book import Book


class BookInstanceStatus(str, enum.Enum):
    """Loan status of a copy."""

    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(Base):
    """
    BookInstance model representing one copy of a book.

    Table: book_instances

    The status column stores the BookInstanceStatus value as plain text.
    due_back is only meaningful while the copy is on loan.
    """

    __tablename__ = "book_instances"

    kind = "bookinstance"
    label = "Book copy"

    id: Mapped[int] = mapped_column(primary_key=True)

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id"),
        index=True,
        nullable=False,
    )

    imprint: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Publisher and edition details"
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookInstanceStatus.MAINTENANCE.value,
    )

    due_back: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    book: Mapped["Book"] = relationship(
        "Book",
        back_populates="instances",
    )

    @property
    def due_back_formatted(self) -> str:
        return display.format_date(self.due_back)

    @property
    def due_back_iso(self) -> str:
        return display.iso_date(self.due_back)

    @property
    def url(self) -> str:
        return display.entity_url(self.kind, self.id)

    def __repr__(self) -> str:
        return f"BookInstance(id={self.id}, book_id={self.book_id}, status='{self.status}')"
