"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the catalog.

Session Management Pattern
==========================
The catalog never shares a session between requests or threads. The
CatalogStore opens one short-lived session per query from the factory
built here, which lets the aggregator run independent queries in worker
threads at the same time.

expire_on_commit=False keeps loaded attributes readable after the session
closes, so templates can render detached objects.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from catalog.config import get_settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic reads Base.metadata to discover tables for migrations.
    """
    pass


# Largest value a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are handed between worker threads by the pool, so
    the same-thread check is switched off for that dialect.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=echo,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine; one session per store call."""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


settings = get_settings()

engine = build_engine(settings.database_url, echo=settings.db_echo)
SessionLocal = build_session_factory(engine)


def create_tables(bind: Engine | None = None) -> None:
    """
    Create all database tables.

    Useful in development and tests; production schemas are managed with
    Alembic migrations.
    """
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine | None = None) -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in development and tests.
    """
    Base.metadata.drop_all(bind=bind or engine)
