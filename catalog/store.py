"""
Catalog Store

CatalogStore is the persistence capability handed to every route and
service. It wraps a SQLAlchemy session factory and opens one short-lived
session per call, so independent queries can run in separate worker
threads at the same time (see catalog.services.aggregation).

Every method is blocking. Async callers run them with asyncio.to_thread.

Ids outside the 64-bit INTEGER range are treated as absent: get and
replace return None, delete returns False, dependent lookups return [].
Any other SQLAlchemyError (or a value the driver cannot bind) is logged
and re-raised as StoreError; nothing is retried.

Objects returned by the store are detached from their session. Relations
rendered by the templates are eager-loaded (see _LOAD_OPTIONS); touching
any other lazy relation on a returned object raises DetachedInstanceError.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from catalog.database import MAX_ID, Base
from catalog.exceptions import StoreError
from catalog.models import Book, BookInstance, Genre

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def storable_id(entity_id: int) -> bool:
    """Whether entity_id fits an INTEGER column; larger ids can never exist."""
    return -MAX_ID - 1 <= entity_id <= MAX_ID


# Relations each kind needs on list and detail pages
_LOAD_OPTIONS = {
    Book: (selectinload(Book.author), selectinload(Book.genres)),
    BookInstance: (selectinload(BookInstance.book).selectinload(Book.author),),
}


class CatalogStore:
    """
    Generic CRUD access to the four catalog collections.

    Usage:
        store = CatalogStore(SessionLocal)
        genre = store.create(Genre, {"name": "Poetry"})
        store.find(Book, Book.author_id == 3, order_by=Book.title)
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error(f"Store error: {exc}")
            raise StoreError(str(exc)) from exc

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def get(self, model: type[ModelT], entity_id: int) -> ModelT | None:
        """Fetch one record by id, or None."""
        if not storable_id(entity_id):
            return None
        stmt = (
            select(model)
            .options(*_LOAD_OPTIONS.get(model, ()))
            .where(model.id == entity_id)
        )
        with self._session() as session:
            return session.execute(stmt).scalar_one_or_none()

    def find(self, model: type[ModelT], *criteria, order_by=None) -> list[ModelT]:
        """All records matching every criterion, optionally ordered."""
        stmt = select(model).options(*_LOAD_OPTIONS.get(model, ())).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        with self._session() as session:
            return list(session.execute(stmt).scalars().all())

    def find_one(self, model: type[ModelT], *criteria) -> ModelT | None:
        """First record matching every criterion, or None."""
        stmt = (
            select(model)
            .options(*_LOAD_OPTIONS.get(model, ()))
            .where(*criteria)
            .order_by(model.id)
            .limit(1)
        )
        with self._session() as session:
            return session.execute(stmt).scalars().first()

    def count(self, model: type[Base], *criteria) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        with self._session() as session:
            return session.execute(stmt).scalar_one()

    # -------------------------------------------------------------------------
    # Dependents
    # -------------------------------------------------------------------------
    def books_by_author(self, author_id: int) -> list[Book]:
        if not storable_id(author_id):
            return []
        return self.find(Book, Book.author_id == author_id, order_by=Book.title)

    def books_by_genre(self, genre_id: int) -> list[Book]:
        if not storable_id(genre_id):
            return []
        return self.find(
            Book,
            Book.genres.any(Genre.id == genre_id),
            order_by=Book.title,
        )

    def instances_of_book(self, book_id: int) -> list[BookInstance]:
        if not storable_id(book_id):
            return []
        return self.find(
            BookInstance,
            BookInstance.book_id == book_id,
            order_by=BookInstance.id,
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    def create(self, model: type[ModelT], values: Mapping[str, Any]) -> ModelT:
        """Insert a new record built from values and return it."""
        with self._session() as session:
            record = model()
            self._assign(session, record, values)
            session.add(record)
            session.commit()
            logger.info(f"Created {record!r}")
            return record

    def replace(
        self,
        model: type[ModelT],
        entity_id: int,
        values: Mapping[str, Any],
    ) -> ModelT | None:
        """
        Overwrite the given fields of an existing record.

        Returns the updated record, or None when the id does not exist.
        """
        if not storable_id(entity_id):
            return None
        with self._session() as session:
            record = session.get(model, entity_id)
            if record is None:
                return None
            self._assign(session, record, values)
            session.commit()
            logger.info(f"Updated {record!r}")
            return record

    def delete(self, model: type[Base], entity_id: int) -> bool:
        """Delete a record by id. Returns False when it was already gone."""
        if not storable_id(entity_id):
            return False
        with self._session() as session:
            record = session.get(model, entity_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            logger.info(f"Deleted {model.__name__} {entity_id}")
            return True

    @staticmethod
    def _assign(session: Session, record: Base, values: Mapping[str, Any]) -> None:
        # Collection relations (Book.genres) are given as lists of ids
        relationships = inspect(type(record)).relationships
        for key, value in values.items():
            if key in relationships and relationships[key].uselist:
                target = relationships[key].mapper.class_
                ids = [item for item in value if storable_id(item)]
                value = list(
                    session.execute(select(target).where(target.id.in_(ids))).scalars()
                )
            setattr(record, key, value)

