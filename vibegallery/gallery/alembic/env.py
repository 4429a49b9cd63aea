"""Alembic migration environment.

Reads the database URL from GallerySettings (VIBE_DATABASE_URL, or the
SQLite file under VIBE_DATA_ROOT) and runs migrations synchronously with
the stdlib ``sqlite3`` driver.

When invoked programmatically (startup auto-migrate), the caller sets
``config.attributes["configure_logger"] = False`` so that ``fileConfig``
does not replace the loguru intercept handler.
"""

from __future__ import annotations

from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import create_engine, pool

from vibegallery.gallery.db.tables import Base
from vibegallery.gallery.settings import GallerySettings

# -- Alembic Config object ----------------------------------------------------
config = context.config
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# -- Target metadata for autogenerate ----------------------------------------
target_metadata = Base.metadata


def get_url() -> str:
    """Return a sync URL: an explicit override, else the settings URL."""
    url = config.attributes.get("database_url") or GallerySettings().resolve_database_url()
    return url.replace("sqlite+aiosqlite://", "sqlite://")


def include_object(obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any) -> bool:
    """Skip tables that exist in the database but not in our models."""
    return not (type_ == "table" and reflected and compare_to is None)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (emit SQL without connecting)."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode against a live connection.

    ``render_as_batch`` lets autogenerated ALTERs work on SQLite, which
    cannot alter most column properties in place.
    """
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
            compare_type=True,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
