"""
Genres Router

HTML pages and form handlers for genres.

Creating a genre whose name already exists does not insert a duplicate;
the browser is sent to the existing genre instead.
"""

from functools import partial

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.config import get_settings
from catalog.dependencies import Store
from catalog.exceptions import EntityNotFound
from catalog.forms import validate_form
from catalog.models import Genre
from catalog.schemas import GenreForm
from catalog.services import (
    aggregate,
    get_or_create_genre,
    guarded_delete,
    load_delete_context,
    run_query,
)
from catalog.templating import redirect, render
from catalog.utils.display import list_url

settings = get_settings()

router = APIRouter(
    prefix="/catalog",
    tags=["Genres"],
    default_response_class=HTMLResponse,
)


@router.get("/genres", summary="List all genres")
async def genre_list(request: Request, store: Store) -> Response:
    """All genres, sorted by name."""
    genres = await run_query(store.find, Genre, order_by=Genre.name)
    return render(request, "genre_list.html", title="Genre List", genre_list=genres)


@router.get("/genre/create", summary="Genre create form")
async def genre_create_get(request: Request) -> Response:
    return render(
        request,
        "genre_form.html",
        title="Create Genre",
        form=GenreForm.initial(),
        errors=[],
    )


@router.post("/genre/create", summary="Create a genre")
async def genre_create_post(request: Request, store: Store) -> Response:
    """
    Validate the name, then redirect to the genre with that name.

    The genre is only inserted when no genre with exactly the same
    (trimmed) name exists yet.
    """
    result = validate_form(GenreForm, await request.form())
    if not result.is_valid:
        return render(
            request,
            "genre_form.html",
            title="Create Genre",
            form=result.values,
            errors=result.errors,
        )

    genre, _ = await get_or_create_genre(store, result.data.name)
    return redirect(genre.url)


@router.get("/genre/{genre_id:int}", summary="Genre detail")
async def genre_detail(request: Request, genre_id: int, store: Store) -> Response:
    """A genre and every book in it."""
    genre_page = await aggregate(
        Genre.label,
        genre_id,
        partial(store.get, Genre, genre_id),
        {"genre_books": partial(store.books_by_genre, genre_id)},
        settings.query_deadline,
    )
    return render(
        request,
        "genre_detail.html",
        title="Genre Detail",
        **genre_page.as_context("genre"),
    )


@router.get("/genre/{genre_id:int}/delete", summary="Genre delete confirmation")
async def genre_delete_get(request: Request, genre_id: int, store: Store) -> Response:
    context = await load_delete_context(store, Genre, genre_id, settings.query_deadline)
    return render(
        request,
        "genre_delete.html",
        title="Delete Genre",
        **context.as_context("genre"),
    )


@router.post("/genre/{genre_id:int}/delete", summary="Delete a genre")
async def genre_delete_post(request: Request, genre_id: int, store: Store) -> Response:
    """Delete the genre, or show the books that still use it."""
    result = await guarded_delete(store, Genre, genre_id, settings.query_deadline)
    if result.blocked:
        return render(
            request,
            "genre_delete.html",
            title="Delete Genre",
            **result.as_context("genre"),
        )
    return redirect(list_url(Genre.kind))


@router.get("/genre/{genre_id:int}/update", summary="Genre update form")
async def genre_update_get(request: Request, genre_id: int, store: Store) -> Response:
    genre = await run_query(store.get, Genre, genre_id)
    if genre is None:
        raise EntityNotFound(Genre.label, genre_id)

    return render(
        request,
        "genre_form.html",
        title="Update Genre",
        form=GenreForm.initial(genre),
        errors=[],
    )


@router.post("/genre/{genre_id:int}/update", summary="Update a genre")
async def genre_update_post(request: Request, genre_id: int, store: Store) -> Response:
    if await run_query(store.get, Genre, genre_id) is None:
        raise EntityNotFound(Genre.label, genre_id)

    result = validate_form(GenreForm, await request.form())
    if not result.is_valid:
        return render(
            request,
            "genre_form.html",
            title="Update Genre",
            form=result.values,
            errors=result.errors,
        )

    genre = await run_query(store.replace, Genre, genre_id, result.data.to_record())
    if genre is None:
        raise EntityNotFound(Genre.label, genre_id)
    return redirect(genre.url)
