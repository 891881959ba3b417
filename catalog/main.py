"""
FastAPI Application Entry Point

This module creates and configures the catalog application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests build their own instance and override get_store

2. Lifespan Events
   - startup: make sure the tables exist
   - shutdown: dispose of the engine's connection pool

3. Exception Handlers
   - EntityNotFound -> 404 error page
   - StoreError -> 500 error page, details only in the log
   - Unmatched routes -> 404 error page
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog import __version__
from catalog.config import get_settings
from catalog.database import create_tables, engine
from catalog.dependencies import Store
from catalog.exceptions import EntityNotFound, StoreError
from catalog.models import Genre
from catalog.routers import (
    authors_router,
    bookinstances_router,
    books_router,
    genres_router,
    home_router,
)
from catalog.services import run_query
from catalog.templating import render

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    """
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")

    create_tables()

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="Server-rendered catalog of authors, genres, books and copies.",
        version=__version__,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(EntityNotFound)
    async def not_found_handler(request: Request, exc: EntityNotFound) -> Response:
        """Render the error page for a missing record."""
        logger.info(f"Not found: {exc}")
        return render(
            request,
            "error.html",
            status_code=status.HTTP_404_NOT_FOUND,
            title="Not Found",
            message=f"{exc.kind} not found",
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> Response:
        """
        Handle store failures.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Store error on {request.url.path}: {exc}")
        return render(
            request,
            "error.html",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            title="Error",
            message="A database error occurred. Please try again later.",
            detail=str(exc) if settings.debug else None,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> Response:
        return render(
            request,
            "error.html",
            status_code=exc.status_code,
            title="Error",
            message=str(exc.detail),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> Response:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return render(
            request,
            "error.html",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            title="Error",
            message="An internal error occurred.",
            detail=str(exc) if settings.debug else None,
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(home_router)
    app.include_router(genres_router)
    app.include_router(authors_router)
    app.include_router(books_router)
    app.include_router(bookinstances_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the catalog is running and its store reachable.",
    )
    async def health_check(store: Store) -> dict:
        """
        Health check endpoint.

        Used by load balancers, container probes and monitoring systems.
        """
        try:
            await run_query(store.count, Genre)
            database = "ok"
        except StoreError:
            database = "unavailable"

        return {
            "status": "healthy" if database == "ok" else "degraded",
            "app": settings.app_name,
            "version": __version__,
            "database": database,
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn catalog.main:app
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
