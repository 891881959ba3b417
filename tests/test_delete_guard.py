"""
Tests for the Referential Integrity Service

Covers the delete guard (guarded_delete, find_dependents,
load_delete_context) and genre create-if-absent.
"""

import pytest

from catalog.exceptions import EntityNotFound
from catalog.models import Author, Book, BookInstance, Genre
from catalog.services import (
    DeleteResult,
    find_dependents,
    get_or_create_genre,
    guarded_delete,
    load_delete_context,
)


class TestGuardedDelete:
    """Tests for guarded_delete()."""

    @pytest.mark.asyncio
    async def test_deletes_record_without_dependents(self, store, sample_genre):
        result = await guarded_delete(store, Genre, sample_genre.id)

        assert result.deleted
        assert not result.blocked
        assert result.entity.id == sample_genre.id
        assert store.get(Genre, sample_genre.id) is None

    @pytest.mark.asyncio
    async def test_blocked_lists_exactly_the_dependents(self, store, sample_author, sample_book):
        second = store.create(
            Book,
            {
                "title": "I, Robot",
                "author_id": sample_author.id,
                "summary": "Robots.",
                "isbn": "9780553382563",
            },
        )
        other_author = store.create(Author, {"first_name": "Ben", "family_name": "Bova"})
        store.create(
            Book,
            {
                "title": "Mars",
                "author_id": other_author.id,
                "summary": "Mars.",
                "isbn": "9780553562415",
            },
        )

        result = await guarded_delete(store, Author, sample_author.id)

        assert result.blocked
        assert result.entity.id == sample_author.id
        assert list(result.dependents) == ["author_books"]
        assert {book.id for book in result.dependents["author_books"]} == {
            sample_book.id,
            second.id,
        }
        assert store.get(Author, sample_author.id) is not None

    @pytest.mark.asyncio
    async def test_genre_blocked_by_books(self, store, sample_book, sample_genre):
        result = await guarded_delete(store, Genre, sample_genre.id)

        assert result.blocked
        assert [book.title for book in result.dependents["genre_books"]] == ["Foundation"]
        assert result.as_context("genre")["genre"].id == sample_genre.id

    @pytest.mark.asyncio
    async def test_book_blocked_by_copies(self, store, sample_book, sample_bookinstance):
        result = await guarded_delete(store, Book, sample_book.id)

        assert result.blocked
        assert [copy.id for copy in result.dependents["book_instances"]] == [
            sample_bookinstance.id
        ]

    @pytest.mark.asyncio
    async def test_missing_record_counts_as_deleted(self, store):
        result = await guarded_delete(store, Author, 99999)

        assert result == DeleteResult(deleted=True)

    @pytest.mark.asyncio
    async def test_id_too_large_counts_as_deleted(self, store):
        assert (await guarded_delete(store, Genre, 10**25)).deleted

    @pytest.mark.asyncio
    async def test_copies_are_never_blocked(self, store, sample_bookinstance):
        result = await guarded_delete(store, BookInstance, sample_bookinstance.id)

        assert result.deleted
        assert store.count(BookInstance) == 0


class TestDependents:
    """Tests for find_dependents() and load_delete_context()."""

    @pytest.mark.asyncio
    async def test_find_dependents(self, store, sample_book, sample_author):
        dependents = await find_dependents(store, Author, sample_author.id)

        assert [book.id for book in dependents["author_books"]] == [sample_book.id]

    @pytest.mark.asyncio
    async def test_leaf_kind_has_no_dependents(self, store, sample_bookinstance):
        assert await find_dependents(store, BookInstance, sample_bookinstance.id) == {}

    @pytest.mark.asyncio
    async def test_confirmation_and_delete_agree(self, store, sample_book, sample_genre):
        """Test the confirmation page and the delete see the same dependents."""
        context = await load_delete_context(store, Genre, sample_genre.id)
        result = await guarded_delete(store, Genre, sample_genre.id)

        assert bool(context["genre_books"]) == result.blocked
        assert [b.id for b in context["genre_books"]] == [
            b.id for b in result.dependents["genre_books"]
        ]

    @pytest.mark.asyncio
    async def test_confirmation_for_missing_record(self, store):
        with pytest.raises(EntityNotFound):
            await load_delete_context(store, Genre, 99999)


class TestGetOrCreateGenre:
    """Tests for get_or_create_genre()."""

    @pytest.mark.asyncio
    async def test_creates_new_genre(self, store):
        genre, created = await get_or_create_genre(store, "Poetry")

        assert created
        assert genre.name == "Poetry"
        assert store.count(Genre) == 1

    @pytest.mark.asyncio
    async def test_returns_existing_genre(self, store, sample_genre):
        genre, created = await get_or_create_genre(store, "Science Fiction")

        assert not created
        assert genre.id == sample_genre.id
        assert store.count(Genre) == 1

    @pytest.mark.asyncio
    async def test_match_is_case_sensitive(self, store, sample_genre):
        _, created = await get_or_create_genre(store, "science fiction")

        assert created
        assert store.count(Genre) == 2

    @pytest.mark.asyncio
    async def test_check_then_create_is_not_atomic(self, store, monkeypatch):
        """
        Two requests that both pass the existence check both create.

        Simulated by hiding existing genres from the check.
        """
        monkeypatch.setattr(store, "find_one", lambda *args, **kwargs: None)

        await get_or_create_genre(store, "Poetry")
        await get_or_create_genre(store, "Poetry")

        assert store.count(Genre, Genre.name == "Poetry") == 2
