"""
Alembic environment for the catalog schema.

The database URL comes from catalog settings (DATABASE_URL), never from
alembic.ini. Online migrations reuse catalog.database.build_engine so the
migration connection is configured exactly like the application's.

    alembic upgrade head
    alembic upgrade head --sql      # print the SQL instead of running it
    alembic revision --autogenerate -m "add column"
"""

from logging.config import fileConfig

from alembic import context

from catalog import models  # noqa: F401 - registers every table on Base.metadata
from catalog.config import get_settings
from catalog.database import Base, build_engine

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

DATABASE_URL = get_settings().database_url

# Batch mode lets SQLite recreate tables for ALTER operations it lacks
MIGRATION_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
    "render_as_batch": True,
}


def run_offline() -> None:
    """Emit SQL for DATABASE_URL's dialect without connecting."""
    context.configure(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = build_engine(DATABASE_URL)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **MIGRATION_OPTIONS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
