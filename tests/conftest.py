"""
pytest Fixtures for Catalog Tests

Shared fixtures used across all test files.

For database tests, every test gets its own SQLite file under tmp_path.
A file (rather than :memory:) is used because the store opens a separate
connection per query and the aggregator runs queries in worker threads;
each of those connections must see the same data.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# The application's own engine points at a throwaway in-memory database;
# tests talk to the per-test store through the get_store override.
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["QUERY_TIMEOUT"] = "10"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from catalog.database import Base, build_engine, build_session_factory
from catalog.dependencies import get_store
from catalog.main import app
from catalog.models import Author, Book, BookInstance, Genre
from catalog.store import CatalogStore

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """SQLite file database with all tables created."""
    engine = build_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return build_session_factory(engine)


@pytest.fixture
def store(session_factory: sessionmaker) -> CatalogStore:
    """The store under test, bound to the per-test database."""
    return CatalogStore(session_factory)


@pytest.fixture
def client(store: CatalogStore) -> Generator[TestClient, None, None]:
    """
    Test client wired to the per-test store.

    get_store is overridden so every route receives the test store.
    """
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(store: CatalogStore) -> Author:
    """Create a sample author for testing."""
    return store.create(
        Author,
        {
            "first_name": "Isaac",
            "family_name": "Asimov",
            "date_of_birth": date(1920, 1, 2),
            "date_of_death": date(1992, 4, 6),
        },
    )


@pytest.fixture
def sample_genre(store: CatalogStore) -> Genre:
    """Create a sample genre for testing."""
    return store.create(Genre, {"name": "Science Fiction"})


@pytest.fixture
def sample_book(
    store: CatalogStore,
    sample_author: Author,
    sample_genre: Genre,
) -> Book:
    """
    Create a sample book by sample_author in sample_genre.

    pytest resolves the author and genre fixtures first.
    """
    return store.create(
        Book,
        {
            "title": "Foundation",
            "author_id": sample_author.id,
            "summary": "The fall of the Galactic Empire.",
            "isbn": "9780553293357",
            "genres": [sample_genre.id],
        },
    )


@pytest.fixture
def sample_bookinstance(store: CatalogStore, sample_book: Book) -> BookInstance:
    """Create an available copy of sample_book."""
    return store.create(
        BookInstance,
        {
            "book_id": sample_book.id,
            "imprint": "Gnome Press, 1951.",
            "status": "Available",
            "due_back": None,
        },
    )
