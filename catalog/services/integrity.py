"""
Referential Integrity Service

Delete Guard
============
An Author or Genre that still has books, and a Book that still has copies,
cannot be deleted. The GET confirmation page and the POST delete both
compute dependents through dependent_queries(), so they always apply the
same rule: block if any dependent exists.

Deleting a record that is already gone is not an error; it reports
deleted=True so the caller redirects to the list page as usual.

Neither the guard nor the genre uniqueness check is atomic: a book added
between the check and the delete, or two concurrent creates of the same
genre name, are not prevented.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from catalog.exceptions import EntityNotFound
from catalog.models import Author, Book, Genre
from catalog.services.aggregation import Aggregate, aggregate, gather_queries, run_query
from catalog.store import CatalogStore

logger = logging.getLogger(__name__)

# Dependents that block deletion, by kind and template name
DEPENDENTS: dict[type, dict[str, Callable[[CatalogStore, int], list]]] = {
    Author: {"author_books": CatalogStore.books_by_author},
    Genre: {"genre_books": CatalogStore.books_by_genre},
    Book: {"book_instances": CatalogStore.instances_of_book},
}


@dataclass
class DeleteResult:
    """
    Outcome of guarded_delete.

    deleted is False only when dependents blocked the delete; entity and
    dependents then carry what the confirmation page shows.
    """

    deleted: bool
    entity: Any = None
    dependents: dict[str, list] = field(default_factory=dict)

    @property
    def blocked(self) -> bool:
        return not self.deleted

    def as_context(self, primary_name: str) -> dict[str, Any]:
        return {primary_name: self.entity, **self.dependents}


def dependent_queries(
    store: CatalogStore,
    model: type,
    entity_id: int,
) -> dict[str, Callable[[], list]]:
    return {
        name: partial(query, store, entity_id)
        for name, query in DEPENDENTS.get(model, {}).items()
    }


async def find_dependents(
    store: CatalogStore,
    model: type,
    entity_id: int,
    timeout: float | None = None,
) -> dict[str, list]:
    """Every dependent list of a record, by name. Empty for leaf kinds."""
    return await gather_queries(dependent_queries(store, model, entity_id), timeout)


async def load_delete_context(
    store: CatalogStore,
    model: type,
    entity_id: int,
    timeout: float | None = None,
) -> Aggregate:
    """
    The record to delete plus its dependents, for the confirmation page.

    Raises:
        EntityNotFound: If the record does not exist
    """
    return await aggregate(
        model.label,
        entity_id,
        partial(store.get, model, entity_id),
        dependent_queries(store, model, entity_id),
        timeout,
    )


async def guarded_delete(
    store: CatalogStore,
    model: type,
    entity_id: int,
    timeout: float | None = None,
) -> DeleteResult:
    """
    Delete a record unless something still depends on it.

    Returns:
        DeleteResult(deleted=True) if the record was deleted or was
        already missing; DeleteResult(deleted=False, ...) listing the
        blocking dependents otherwise.

    Raises:
        StoreError: If any query or the delete itself fails
    """
    try:
        context = await load_delete_context(store, model, entity_id, timeout)
    except EntityNotFound:
        logger.info(f"{model.label} {entity_id} already deleted")
        return DeleteResult(deleted=True)

    if any(context.results.values()):
        blocking = {name: len(items) for name, items in context.results.items()}
        logger.info(f"Delete of {model.label} {entity_id} blocked: {blocking}")
        return DeleteResult(
            deleted=False,
            entity=context.primary,
            dependents=context.results,
        )

    await run_query(store.delete, model, entity_id)
    return DeleteResult(deleted=True, entity=context.primary)


async def get_or_create_genre(store: CatalogStore, name: str) -> tuple[Genre, bool]:
    """
    Return the genre with exactly this name, creating it if needed.

    Returns:
        (genre, created)
    """
    existing = await run_query(store.find_one, Genre, Genre.name == name)
    if existing is not None:
        logger.info(f"Genre '{name}' already exists as {existing.id}")
        return existing, False

    genre = await run_query(store.create, Genre, {"name": name})
    return genre, True
