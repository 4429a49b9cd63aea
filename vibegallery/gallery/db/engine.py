"""Async SQLAlchemy engine and session factory.

The catalog lives in a local SQLite file accessed through ``aiosqlite``.
SQLite leaves foreign keys off by default; they are switched on for every
new connection so that ``ON DELETE CASCADE`` on env configurations works.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def create_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Create an async SQLAlchemy engine for the catalog database.

    Defaults:

    - **pool_pre_ping=True**: validate connections before checkout.
    - **connect_args.timeout=30**: wait on SQLite's file lock instead of
      failing immediately with ``database is locked`` under concurrent
      writers.

    All defaults can be overridden via *kwargs*.
    """
    defaults: dict[str, Any] = {"echo": False, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        defaults["connect_args"] = {"timeout": 30}
    defaults.update(kwargs)
    engine = create_async_engine(database_url, **defaults)

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to *engine*.

    ``expire_on_commit=False`` so that ORM instances remain usable after
    commit without triggering lazy loads (implicit IO is forbidden in async).
    """
    return async_sessionmaker(engine, expire_on_commit=False)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
