"""
Routers Package

One router per entity, each serving HTML pages under /catalog:
- home.py: / and /catalog (record counts)
- genres.py: /catalog/genres, /catalog/genre/*
- authors.py: /catalog/authors, /catalog/author/*
- books.py: /catalog/books, /catalog/book/*
- bookinstances.py: /catalog/bookinstances, /catalog/bookinstance/*

Each router is imported and registered in main.py.
"""

from catalog.routers.authors import router as authors_router
from catalog.routers.bookinstances import router as bookinstances_router
from catalog.routers.books import router as books_router
from catalog.routers.genres import router as genres_router
from catalog.routers.home import router as home_router

__all__ = [
    "home_router",
    "genres_router",
    "authors_router",
    "books_router",
    "bookinstances_router",
]
