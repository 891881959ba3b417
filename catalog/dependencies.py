"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

The catalog store is the only per-request dependency. Routes receive it
as an argument instead of reaching for a module-level session, which lets
tests swap in a store bound to a throwaway database:

    app.dependency_overrides[get_store] = lambda: CatalogStore(test_factory)
"""

from typing import Annotated

from fastapi import Depends

from catalog.database import SessionLocal
from catalog.store import CatalogStore


def get_store() -> CatalogStore:
    """Store bound to the application's session factory."""
    return CatalogStore(SessionLocal)


# Type alias for cleaner route signatures
Store = Annotated[CatalogStore, Depends(get_store)]
