"""
Query Aggregation Service

Detail, form and delete pages need several independent store queries
(a genre and the books in it, a book plus every author and genre for its
form, ...). This module runs them concurrently and joins the results
before the page is built.

Concurrency Model
=================
- Store calls are blocking, so each query runs in a worker thread via
  asyncio.to_thread; the request coroutine suspends until all are done.
- asyncio.gather fails fast: the first exception propagates unchanged
  and no partial result is returned.
- Queries must not depend on each other's output.
- An optional deadline bounds the whole join; expiry raises StoreError.

Usage:
    agg = await aggregate(
        "Genre",
        genre_id,
        partial(store.get, Genre, genre_id),
        {"genre_books": partial(store.books_by_genre, genre_id)},
    )
    agg.primary          # the Genre
    agg["genre_books"]   # list of Book
"""

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from catalog.exceptions import EntityNotFound, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Query = Callable[[], Any]

# Key for the primary lookup; cannot collide with a query name
_PRIMARY = object()


@dataclass
class Aggregate:
    """A primary record plus the named results gathered with it."""

    primary: Any
    results: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Any:
        return self.results[name]

    def as_context(self, primary_name: str) -> dict[str, Any]:
        """Template context: the primary under primary_name, then every result."""
        return {primary_name: self.primary, **self.results}


async def run_query(query: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run one blocking store call off the event loop."""
    return await asyncio.to_thread(query, *args, **kwargs)


async def gather_queries(
    queries: Mapping[Any, Query],
    timeout: float | None = None,
) -> dict[Any, Any]:
    """
    Run every query concurrently and return their results by name.

    Args:
        queries: Mapping of name to zero-argument blocking callable
        timeout: Deadline in seconds for the whole batch, None for no limit

    Returns:
        Dict with the same keys as queries

    Raises:
        StoreError: If the deadline expires
        Exception: The first error raised by any query, unchanged
    """
    names = list(queries)
    if not names:
        return {}

    started = time.perf_counter()
    pending = asyncio.gather(*(asyncio.to_thread(queries[name]) for name in names))
    try:
        results = await asyncio.wait_for(pending, timeout)
    except TimeoutError as exc:
        logger.error(f"Aggregated queries timed out after {timeout}s")
        raise StoreError(f"Queries did not finish within {timeout}s") from exc

    logger.debug(
        f"Gathered {len(names)} queries in {time.perf_counter() - started:.3f}s"
    )
    return dict(zip(names, results))


async def aggregate(
    kind: str,
    entity_id: int,
    fetch: Callable[[], Any],
    queries: Mapping[str, Query] | None = None,
    timeout: float | None = None,
) -> Aggregate:
    """
    Fetch a primary record together with independent secondary queries.

    The primary lookup runs concurrently with the secondary queries. When
    it finds nothing, the secondary results are discarded.

    Args:
        kind: Label of the primary entity, used in the not-found error
        entity_id: Id of the primary entity
        fetch: Blocking callable returning the primary record or None
        queries: Named secondary queries
        timeout: Deadline in seconds for the whole batch

    Raises:
        EntityNotFound: If fetch returned None
    """
    results = await gather_queries({_PRIMARY: fetch, **(queries or {})}, timeout)
    primary = results.pop(_PRIMARY)
    if primary is None:
        raise EntityNotFound(kind, entity_id)
    return Aggregate(primary=primary, results=results)
