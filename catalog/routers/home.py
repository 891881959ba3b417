"""
Home Router

Catalog landing page with record counts.
"""

from functools import partial

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.config import get_settings
from catalog.dependencies import Store
from catalog.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from catalog.services import gather_queries
from catalog.templating import redirect, render

settings = get_settings()

router = APIRouter(tags=["Home"], default_response_class=HTMLResponse)


@router.get("/", summary="Site root", include_in_schema=False)
async def root() -> Response:
    return redirect("/catalog")


@router.get("/catalog", summary="Catalog home")
async def index(request: Request, store: Store) -> Response:
    """Counts of every kind of record, fetched concurrently."""
    counts = await gather_queries(
        {
            "book_count": partial(store.count, Book),
            "book_instance_count": partial(store.count, BookInstance),
            "book_instance_available_count": partial(
                store.count,
                BookInstance,
                BookInstance.status == BookInstanceStatus.AVAILABLE.value,
            ),
            "author_count": partial(store.count, Author),
            "genre_count": partial(store.count, Genre),
        },
        settings.query_deadline,
    )
    return render(request, "index.html", title="Local Library Home", data=counts)
