#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample authors, genres, books and copies.

USAGE:
    # From the project root with the venv activated
    python scripts/seed_data.py

This script:
1. Creates the tables if they don't exist
2. Clears existing data (optional)
3. Inserts sample records through the CatalogStore
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete

from catalog.database import SessionLocal, create_tables
from catalog.models import Author, Book, BookInstance, Genre, book_genres
from catalog.store import CatalogStore


def clear_data() -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    with SessionLocal() as db:
        db.execute(delete(BookInstance))
        db.execute(delete(book_genres))
        db.execute(delete(Book))
        db.execute(delete(Author))
        db.execute(delete(Genre))
        db.commit()
    print("Data cleared.")


def create_authors(store: CatalogStore) -> dict[str, Author]:
    """Create sample authors, keyed by family name."""
    print("Creating authors...")
    authors_data = [
        {"first_name": "Patrick", "family_name": "Rothfuss", "date_of_birth": date(1973, 6, 6)},
        {"first_name": "Ben", "family_name": "Bova", "date_of_birth": date(1932, 11, 8)},
        {
            "first_name": "Isaac",
            "family_name": "Asimov",
            "date_of_birth": date(1920, 1, 2),
            "date_of_death": date(1992, 4, 6),
        },
        {"first_name": "Bob", "family_name": "Billings"},
        {"first_name": "Jim", "family_name": "Jones", "date_of_birth": date(1971, 12, 16)},
    ]

    authors = {data["family_name"]: store.create(Author, data) for data in authors_data}
    print(f"Created {len(authors)} authors.")
    return authors


def create_genres(store: CatalogStore) -> dict[str, Genre]:
    """Create sample genres, keyed by name."""
    print("Creating genres...")
    names = ["Fantasy", "Science Fiction", "French Poetry"]
    genres = {name: store.create(Genre, {"name": name}) for name in names}
    print(f"Created {len(genres)} genres.")
    return genres


def create_books(
    store: CatalogStore,
    authors: dict[str, Author],
    genres: dict[str, Genre],
) -> list[Book]:
    """Create sample books with author and genre references."""
    print("Creating books...")
    books_data = [
        ("The Name of the Wind (The Kingkiller Chronicle, #1)", "Rothfuss", "9781473211896", ["Fantasy"],
         "I have stolen princesses back from sleeping barrow kings. I burned down the town of Trebon."),
        ("The Wise Man's Fear (The Kingkiller Chronicle, #2)", "Rothfuss", "9788401352836", ["Fantasy"],
         "Picking up the tale of Kvothe Kingkiller once again, we follow him into exile."),
        ("The Slow Regard of Silent Things (Kingkiller Chronicle)", "Rothfuss", "9780756411336", ["Fantasy"],
         "Deep below the University, there is a dark place."),
        ("Apes and Angels", "Bova", "9780765379528", ["Science Fiction"],
         "Humankind headed out to the stars not for conquest, nor exploration, nor even for curiosity."),
        ("Death Wave", "Bova", "9780765379504", ["Science Fiction"],
         "In Ben Bova's previous novel New Earth, Jordan Kell led the first human mission beyond the solar system."),
        ("Test Book 1", "Billings", "ISBN111111", ["Fantasy", "Science Fiction"],
         "Summary of test book 1"),
        ("Test Book 2", "Billings", "ISBN222222", [],
         "Summary of test book 2"),
    ]

    books = []
    for title, family_name, isbn, genre_names, summary in books_data:
        books.append(
            store.create(
                Book,
                {
                    "title": title,
                    "author_id": authors[family_name].id,
                    "summary": summary,
                    "isbn": isbn,
                    "genres": [genres[name].id for name in genre_names],
                },
            )
        )

    print(f"Created {len(books)} books.")
    return books


def create_bookinstances(store: CatalogStore, books: list[Book]) -> list[BookInstance]:
    """Create a few copies of the sample books."""
    print("Creating book copies...")
    copies_data = [
        (0, "London Gollancz, 2014.", "Available", None),
        (1, "Gollancz, 2011.", "Loaned", date(2026, 11, 1)),
        (2, "Gollancz, 2015.", "Available", None),
        (3, "New York Tom Doherty Associates, 2016.", "Available", None),
        (3, "New York Tom Doherty Associates, 2016.", "Available", None),
        (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Available", None),
        (5, "Imprint XXX2", "Maintenance", None),
        (6, "Imprint XXX3", "Loaned", None),
    ]

    copies = [
        store.create(
            BookInstance,
            {
                "book_id": books[index].id,
                "imprint": imprint,
                "status": status,
                "due_back": due_back,
            },
        )
        for index, imprint, status, due_back in copies_data
    ]
    print(f"Created {len(copies)} book copies.")
    return copies


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    store = CatalogStore(SessionLocal)

    if clear_existing:
        clear_data()

    authors = create_authors(store)
    genres = create_genres(store)
    books = create_books(store, authors, genres)
    copies = create_bookinstances(store, books)

    print("=" * 60)
    print("Database seeding completed successfully!")
    print("=" * 60)
    print("\nSummary:")
    print(f"  - Authors: {len(authors)}")
    print(f"  - Genres: {len(genres)}")
    print(f"  - Books: {len(books)}")
    print(f"  - Copies: {len(copies)}")
    print("\nBrowse the catalog at http://localhost:8001/catalog")


if __name__ == "__main__":
    seed_database()
