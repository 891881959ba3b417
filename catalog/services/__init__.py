"""
Services Package

Business logic shared by the routers:
- aggregation.py: run independent store queries concurrently and join them
- integrity.py: delete guard and genre uniqueness
"""

from catalog.services.aggregation import Aggregate, aggregate, gather_queries, run_query
from catalog.services.integrity import (
    DeleteResult,
    find_dependents,
    get_or_create_genre,
    guarded_delete,
    load_delete_context,
)

__all__ = [
    "Aggregate",
    "aggregate",
    "gather_queries",
    "run_query",
    "DeleteResult",
    "find_dependents",
    "get_or_create_genre",
    "guarded_delete",
    "load_delete_context",
]
