"""
Book Instances Router

HTML pages and form handlers for book copies.

Every page that shows a copy also shows its book. A copy whose book
cannot be resolved is reported as not found instead of rendering a
half-empty page.
"""

from functools import partial

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.config import get_settings
from catalog.dependencies import Store
from catalog.exceptions import EntityNotFound
from catalog.forms import FormResult, validate_form
from catalog.models import Book, BookInstance, BookInstanceStatus
from catalog.schemas import BookInstanceForm
from catalog.services import aggregate, guarded_delete, run_query
from catalog.store import CatalogStore
from catalog.templating import redirect, render
from catalog.utils.display import list_url

settings = get_settings()

router = APIRouter(
    prefix="/catalog",
    tags=["Book Instances"],
    default_response_class=HTMLResponse,
)

STATUSES = [status.value for status in BookInstanceStatus]


def require_book(bookinstance: BookInstance) -> BookInstance:
    if bookinstance.book is None:
        raise EntityNotFound(Book.label, bookinstance.book_id)
    return bookinstance


def check_book(result: FormResult[BookInstanceForm], books: list[Book]) -> None:
    """The chosen book must be one of the listed books."""
    if result.is_valid and result.data.book not in {b.id for b in books}:
        result.add_error("book", "Book does not exist")


async def get_bookinstance_or_404(store: CatalogStore, bookinstance_id: int) -> BookInstance:
    bookinstance = await run_query(store.get, BookInstance, bookinstance_id)
    if bookinstance is None:
        raise EntityNotFound(BookInstance.label, bookinstance_id)
    return require_book(bookinstance)


def render_form(
    request: Request,
    title: str,
    books: list[Book],
    form: dict,
    errors: list,
) -> Response:
    return render(
        request,
        "bookinstance_form.html",
        title=title,
        book_list=books,
        statuses=STATUSES,
        form=form,
        errors=errors,
    )


@router.get("/bookinstances", summary="List all book copies")
async def bookinstance_list(request: Request, store: Store) -> Response:
    bookinstances = await run_query(store.find, BookInstance, order_by=BookInstance.id)
    return render(
        request,
        "bookinstance_list.html",
        title="Book Instance List",
        bookinstance_list=bookinstances,
    )


@router.get("/bookinstance/create", summary="Book copy create form")
async def bookinstance_create_get(request: Request, store: Store) -> Response:
    books = await run_query(store.find, Book, order_by=Book.title)
    return render_form(
        request, "Create BookInstance", books, BookInstanceForm.initial(), []
    )


@router.post("/bookinstance/create", summary="Create a book copy")
async def bookinstance_create_post(request: Request, store: Store) -> Response:
    result = validate_form(BookInstanceForm, await request.form())
    books = await run_query(store.find, Book, order_by=Book.title)
    check_book(result, books)
    if not result.is_valid:
        return render_form(
            request, "Create BookInstance", books, result.values, result.errors
        )

    bookinstance = await run_query(
        store.create, BookInstance, result.data.to_record()
    )
    return redirect(bookinstance.url)


@router.get("/bookinstance/{bookinstance_id:int}", summary="Book copy detail")
async def bookinstance_detail(
    request: Request,
    bookinstance_id: int,
    store: Store,
) -> Response:
    bookinstance = await get_bookinstance_or_404(store, bookinstance_id)
    return render(
        request,
        "bookinstance_detail.html",
        title=f"Copy: {bookinstance.book.title}",
        bookinstance=bookinstance,
    )


@router.get(
    "/bookinstance/{bookinstance_id:int}/delete",
    summary="Book copy delete confirmation",
)
async def bookinstance_delete_get(
    request: Request,
    bookinstance_id: int,
    store: Store,
) -> Response:
    bookinstance = await get_bookinstance_or_404(store, bookinstance_id)
    return render(
        request,
        "bookinstance_delete.html",
        title="Delete Copy",
        bookinstance=bookinstance,
    )


@router.post("/bookinstance/{bookinstance_id:int}/delete", summary="Delete a book copy")
async def bookinstance_delete_post(
    request: Request,
    bookinstance_id: int,
    store: Store,
) -> Response:
    # Copies have no dependents, so this never blocks
    await guarded_delete(store, BookInstance, bookinstance_id, settings.query_deadline)
    return redirect(list_url(BookInstance.kind))


@router.get(
    "/bookinstance/{bookinstance_id:int}/update",
    summary="Book copy update form",
)
async def bookinstance_update_get(
    request: Request,
    bookinstance_id: int,
    store: Store,
) -> Response:
    copy_page = await aggregate(
        BookInstance.label,
        bookinstance_id,
        partial(store.get, BookInstance, bookinstance_id),
        {"book_list": partial(store.find, Book, order_by=Book.title)},
        settings.query_deadline,
    )
    bookinstance = require_book(copy_page.primary)
    return render_form(
        request,
        "Update BookInstance",
        copy_page["book_list"],
        BookInstanceForm.initial(bookinstance),
        [],
    )


@router.post("/bookinstance/{bookinstance_id:int}/update", summary="Update a book copy")
async def bookinstance_update_post(
    request: Request,
    bookinstance_id: int,
    store: Store,
) -> Response:
    copy_page = await aggregate(
        BookInstance.label,
        bookinstance_id,
        partial(store.get, BookInstance, bookinstance_id),
        {"book_list": partial(store.find, Book, order_by=Book.title)},
        settings.query_deadline,
    )
    books = copy_page["book_list"]
    result = validate_form(BookInstanceForm, await request.form())
    check_book(result, books)
    if not result.is_valid:
        return render_form(
            request, "Update BookInstance", books, result.values, result.errors
        )

    bookinstance = await run_query(
        store.replace, BookInstance, bookinstance_id, result.data.to_record()
    )
    if bookinstance is None:
        raise EntityNotFound(BookInstance.label, bookinstance_id)
    return redirect(bookinstance.url)
