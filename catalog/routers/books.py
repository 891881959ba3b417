"""
Books Router

HTML pages and form handlers for books.

The book form needs every author and genre as choices, so form pages
gather those lists concurrently (with the book itself on update).
"""

from functools import partial
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.config import get_settings
from catalog.dependencies import Store
from catalog.exceptions import EntityNotFound
from catalog.forms import FormResult, validate_form
from catalog.models import Author, Book, Genre
from catalog.schemas import BookForm
from catalog.services import (
    aggregate,
    gather_queries,
    guarded_delete,
    load_delete_context,
    run_query,
)
from catalog.store import CatalogStore
from catalog.templating import redirect, render
from catalog.utils.display import list_url

settings = get_settings()

router = APIRouter(
    prefix="/catalog",
    tags=["Books"],
    default_response_class=HTMLResponse,
)


def form_choices(store: CatalogStore) -> dict[str, Any]:
    """Queries for the author select and the genre checkboxes."""
    return {
        "authors": partial(store.find, Author, order_by=Author.family_name),
        "genres": partial(store.find, Genre, order_by=Genre.name),
    }


def check_references(
    result: FormResult[BookForm],
    authors: list[Author],
    genres: list[Genre],
) -> None:
    """The chosen author and every ticked genre must be listed choices."""
    if not result.is_valid:
        return
    data = result.data
    if data.author not in {a.id for a in authors}:
        result.add_error("author", "Author does not exist")
    if not set(data.genre) <= {g.id for g in genres}:
        result.add_error("genre", "Genre does not exist")


@router.get("/books", summary="List all books")
async def book_list(request: Request, store: Store) -> Response:
    """All books with their authors, sorted by title."""
    books = await run_query(store.find, Book, order_by=Book.title)
    return render(request, "book_list.html", title="Book List", book_list=books)


@router.get("/book/create", summary="Book create form")
async def book_create_get(request: Request, store: Store) -> Response:
    choices = await gather_queries(form_choices(store), settings.query_deadline)
    return render(
        request,
        "book_form.html",
        title="Create Book",
        form=BookForm.initial(),
        errors=[],
        **choices,
    )


@router.post("/book/create", summary="Create a book")
async def book_create_post(request: Request, store: Store) -> Response:
    result = validate_form(BookForm, await request.form())
    choices = await gather_queries(form_choices(store), settings.query_deadline)
    check_references(result, choices["authors"], choices["genres"])
    if not result.is_valid:
        return render(
            request,
            "book_form.html",
            title="Create Book",
            form=result.values,
            errors=result.errors,
            **choices,
        )

    book = await run_query(store.create, Book, result.data.to_record())
    return redirect(book.url)


@router.get("/book/{book_id:int}", summary="Book detail")
async def book_detail(request: Request, book_id: int, store: Store) -> Response:
    """A book with its author, genres and copies."""
    book_page = await aggregate(
        Book.label,
        book_id,
        partial(store.get, Book, book_id),
        {"book_instances": partial(store.instances_of_book, book_id)},
        settings.query_deadline,
    )
    return render(
        request,
        "book_detail.html",
        title=book_page.primary.title,
        **book_page.as_context("book"),
    )


@router.get("/book/{book_id:int}/delete", summary="Book delete confirmation")
async def book_delete_get(request: Request, book_id: int, store: Store) -> Response:
    context = await load_delete_context(store, Book, book_id, settings.query_deadline)
    return render(
        request,
        "book_delete.html",
        title="Delete Book",
        **context.as_context("book"),
    )


@router.post("/book/{book_id:int}/delete", summary="Delete a book")
async def book_delete_post(request: Request, book_id: int, store: Store) -> Response:
    """Delete the book, or show the copies that still exist."""
    result = await guarded_delete(store, Book, book_id, settings.query_deadline)
    if result.blocked:
        return render(
            request,
            "book_delete.html",
            title="Delete Book",
            **result.as_context("book"),
        )
    return redirect(list_url(Book.kind))


@router.get("/book/{book_id:int}/update", summary="Book update form")
async def book_update_get(request: Request, book_id: int, store: Store) -> Response:
    book_page = await aggregate(
        Book.label,
        book_id,
        partial(store.get, Book, book_id),
        form_choices(store),
        settings.query_deadline,
    )
    return render(
        request,
        "book_form.html",
        title="Update Book",
        form=BookForm.initial(book_page.primary),
        errors=[],
        **book_page.results,
    )


@router.post("/book/{book_id:int}/update", summary="Update a book")
async def book_update_post(request: Request, book_id: int, store: Store) -> Response:
    """Replace every field of an existing book."""
    book_page = await aggregate(
        Book.label,
        book_id,
        partial(store.get, Book, book_id),
        form_choices(store),
        settings.query_deadline,
    )
    choices = book_page.results
    result = validate_form(BookForm, await request.form())
    check_references(result, choices["authors"], choices["genres"])
    if not result.is_valid:
        return render(
            request,
            "book_form.html",
            title="Update Book",
            form=result.values,
            errors=result.errors,
            **choices,
        )

    book = await run_query(store.replace, Book, book_id, result.data.to_record())
    if book is None:
        raise EntityNotFound(Book.label, book_id)
    return redirect(book.url)
