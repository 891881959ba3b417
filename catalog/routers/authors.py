"""
Authors Router

HTML pages and form handlers for authors.
Follows the same patterns as the genres router.
"""

from functools import partial

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.config import get_settings
from catalog.dependencies import Store
from catalog.exceptions import EntityNotFound
from catalog.forms import validate_form
from catalog.models import Author
from catalog.schemas import AuthorForm
from catalog.services import aggregate, guarded_delete, load_delete_context, run_query
from catalog.templating import redirect, render
from catalog.utils.display import list_url

settings = get_settings()

router = APIRouter(
    prefix="/catalog",
    tags=["Authors"],
    default_response_class=HTMLResponse,
)


@router.get("/authors", summary="List all authors")
async def author_list(request: Request, store: Store) -> Response:
    """All authors, sorted by family name."""
    authors = await run_query(store.find, Author, order_by=Author.family_name)
    return render(request, "author_list.html", title="Author List", author_list=authors)


@router.get("/author/create", summary="Author create form")
async def author_create_get(request: Request) -> Response:
    return render(
        request,
        "author_form.html",
        title="Create Author",
        form=AuthorForm.initial(),
        errors=[],
    )


@router.post("/author/create", summary="Create an author")
async def author_create_post(request: Request, store: Store) -> Response:
    result = validate_form(AuthorForm, await request.form())
    if not result.is_valid:
        return render(
            request,
            "author_form.html",
            title="Create Author",
            form=result.values,
            errors=result.errors,
        )

    author = await run_query(store.create, Author, result.data.to_record())
    return redirect(author.url)


@router.get("/author/{author_id:int}", summary="Author detail")
async def author_detail(request: Request, author_id: int, store: Store) -> Response:
    """An author and every book they wrote."""
    author_page = await aggregate(
        Author.label,
        author_id,
        partial(store.get, Author, author_id),
        {"author_books": partial(store.books_by_author, author_id)},
        settings.query_deadline,
    )
    return render(
        request,
        "author_detail.html",
        title="Author Detail",
        **author_page.as_context("author"),
    )


@router.get("/author/{author_id:int}/delete", summary="Author delete confirmation")
async def author_delete_get(request: Request, author_id: int, store: Store) -> Response:
    context = await load_delete_context(store, Author, author_id, settings.query_deadline)
    return render(
        request,
        "author_delete.html",
        title="Delete Author",
        **context.as_context("author"),
    )


@router.post("/author/{author_id:int}/delete", summary="Delete an author")
async def author_delete_post(request: Request, author_id: int, store: Store) -> Response:
    """Delete the author, or show the books that still reference them."""
    result = await guarded_delete(store, Author, author_id, settings.query_deadline)
    if result.blocked:
        return render(
            request,
            "author_delete.html",
            title="Delete Author",
            **result.as_context("author"),
        )
    return redirect(list_url(Author.kind))


@router.get("/author/{author_id:int}/update", summary="Author update form")
async def author_update_get(request: Request, author_id: int, store: Store) -> Response:
    author = await run_query(store.get, Author, author_id)
    if author is None:
        raise EntityNotFound(Author.label, author_id)

    return render(
        request,
        "author_form.html",
        title="Update Author",
        form=AuthorForm.initial(author),
        errors=[],
    )


@router.post("/author/{author_id:int}/update", summary="Update an author")
async def author_update_post(request: Request, author_id: int, store: Store) -> Response:
    if await run_query(store.get, Author, author_id) is None:
        raise EntityNotFound(Author.label, author_id)

    result = validate_form(AuthorForm, await request.form())
    if not result.is_valid:
        return render(
            request,
            "author_form.html",
            title="Update Author",
            form=result.values,
            errors=result.errors,
        )

    author = await run_query(store.replace, Author, author_id, result.data.to_record())
    if author is None:
        raise EntityNotFound(Author.label, author_id)
    return redirect(author.url)
