"""
Tests for CatalogStore
"""

from datetime import date

import pytest

from catalog.database import build_engine, build_session_factory
from catalog.exceptions import StoreError
from catalog.models import Author, Book, BookInstance, Genre
from catalog.store import CatalogStore, storable_id


class TestQueries:
    """Tests for get, find, find_one and count."""

    def test_get(self, store, sample_author):
        author = store.get(Author, sample_author.id)

        assert author.name == "Asimov, Isaac"
        assert author.date_of_birth == date(1920, 1, 2)

    def test_get_missing(self, store):
        assert store.get(Author, 99999) is None

    def test_find_ordered(self, store):
        for name in ["Poetry", "Fantasy", "Mystery"]:
            store.create(Genre, {"name": name})

        genres = store.find(Genre, order_by=Genre.name)

        assert [genre.name for genre in genres] == ["Fantasy", "Mystery", "Poetry"]

    def test_find_with_criteria(self, store, sample_genre):
        store.create(Genre, {"name": "Poetry"})

        assert [g.name for g in store.find(Genre, Genre.name == "Poetry")] == ["Poetry"]

    def test_find_one_returns_oldest_match(self, store):
        first = store.create(Genre, {"name": "Poetry"})
        store.create(Genre, {"name": "Poetry"})

        assert store.find_one(Genre, Genre.name == "Poetry").id == first.id

    def test_find_one_no_match(self, store):
        assert store.find_one(Genre, Genre.name == "Poetry") is None

    def test_count(self, store, sample_bookinstance):
        assert store.count(BookInstance) == 1
        assert store.count(BookInstance, BookInstance.status == "Loaned") == 0

    def test_relations_loaded_after_session_closes(self, store, sample_bookinstance):
        copy = store.get(BookInstance, sample_bookinstance.id)

        assert copy.book.title == "Foundation"
        assert copy.book.author.name == "Asimov, Isaac"


class TestDependents:
    """Tests for the dependent lookups."""

    def test_books_by_author(self, store, sample_book, sample_author):
        assert [b.id for b in store.books_by_author(sample_author.id)] == [sample_book.id]

    def test_books_by_genre(self, store, sample_book, sample_genre):
        store.create(Genre, {"name": "Poetry"})

        assert [b.id for b in store.books_by_genre(sample_genre.id)] == [sample_book.id]

    def test_books_by_genre_sorted_by_title(self, store, sample_author, sample_genre):
        for title in ["Second Foundation", "Foundation and Empire"]:
            store.create(
                Book,
                {
                    "title": title,
                    "author_id": sample_author.id,
                    "summary": "More Foundation.",
                    "isbn": "0",
                    "genres": [sample_genre.id],
                },
            )

        titles = [b.title for b in store.books_by_genre(sample_genre.id)]

        assert titles == ["Foundation and Empire", "Second Foundation"]

    def test_instances_of_book(self, store, sample_book, sample_bookinstance):
        assert [c.id for c in store.instances_of_book(sample_book.id)] == [
            sample_bookinstance.id
        ]


class TestMutations:
    """Tests for create, replace and delete."""

    def test_create_assigns_id(self, store):
        genre = store.create(Genre, {"name": "Poetry"})

        assert genre.id is not None
        assert genre.url == f"/catalog/genre/{genre.id}"

    def test_create_book_with_genre_ids(self, store, sample_author, sample_genre):
        book = store.create(
            Book,
            {
                "title": "I, Robot",
                "author_id": sample_author.id,
                "summary": "Robots.",
                "isbn": "9780553382563",
                "genres": [sample_genre.id],
            },
        )

        assert [g.id for g in store.get(Book, book.id).genres] == [sample_genre.id]

    def test_replace(self, store, sample_genre):
        genre = store.replace(Genre, sample_genre.id, {"name": "Sci-Fi"})

        assert genre.name == "Sci-Fi"
        assert store.get(Genre, sample_genre.id).name == "Sci-Fi"

    def test_replace_genres(self, store, sample_book):
        poetry = store.create(Genre, {"name": "Poetry"})

        store.replace(Book, sample_book.id, {"genres": [poetry.id]})

        assert [g.name for g in store.get(Book, sample_book.id).genres] == ["Poetry"]

    def test_replace_missing(self, store):
        assert store.replace(Genre, 99999, {"name": "Poetry"}) is None

    def test_delete(self, store, sample_genre):
        assert store.delete(Genre, sample_genre.id) is True
        assert store.get(Genre, sample_genre.id) is None

    def test_delete_missing(self, store):
        assert store.delete(Genre, 99999) is False


class TestErrors:
    """Tests for error wrapping."""

    def test_database_error_becomes_store_error(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
        store = CatalogStore(build_session_factory(engine))

        with pytest.raises(StoreError):
            store.count(Genre)

        engine.dispose()

    def test_constraint_violation_becomes_store_error(self, store):
        with pytest.raises(StoreError):
            store.create(Genre, {"name": None})


class TestIdRange:
    """Ids too large for an INTEGER column behave like missing ids."""

    TOO_LARGE = 10**25

    def test_storable_id(self):
        assert storable_id(2**63 - 1)
        assert not storable_id(2**63)

    def test_get(self, store):
        assert store.get(Genre, self.TOO_LARGE) is None

    def test_replace(self, store):
        assert store.replace(Genre, self.TOO_LARGE, {"name": "Poetry"}) is None

    def test_delete(self, store):
        assert store.delete(Genre, self.TOO_LARGE) is False

    def test_dependents(self, store):
        assert store.books_by_author(self.TOO_LARGE) == []
        assert store.books_by_genre(self.TOO_LARGE) == []
        assert store.instances_of_book(self.TOO_LARGE) == []

    def test_genre_ids_out_of_range_are_skipped(self, store, sample_author, sample_genre):
        book = store.create(
            Book,
            {
                "title": "I, Robot",
                "author_id": sample_author.id,
                "summary": "Robots.",
                "isbn": "9780553382563",
                "genres": [sample_genre.id, self.TOO_LARGE],
            },
        )

        assert [g.id for g in store.get(Book, book.id).genres] == [sample_genre.id]

    def test_unbindable_value_becomes_store_error(self, store):
        with pytest.raises(StoreError):
            store.count(Genre, Genre.id == self.TOO_LARGE)
