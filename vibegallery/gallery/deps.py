"""FastAPI dependency injection for DB sessions and the launch manager.

Usage in route handlers::

    @router.post("/{project_id}/start")
    async def start(db: DbSession, manager: LaunchMgr, project_id: str) -> LaunchResponse:
        ...

Both dependencies raise HTTP 503 if the lifespan has not set them up.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.managers.launches import LaunchManager


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async SQLAlchemy session, closing it after the request.

    Managers commit their own writes.  If the handler raises, the session is
    closed and the open transaction is rolled back.
    """
    session_factory = getattr(request.app.state, "db_session_factory", None)
    if session_factory is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog database is not available.",
        )
    session: AsyncSession = session_factory()
    try:
        yield session
    finally:
        await session.close()


def get_launch_manager(request: Request) -> LaunchManager:
    manager: LaunchManager | None = getattr(request.app.state, "launch_manager", None)
    if manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Launch manager is not initialised.",
        )
    return manager


# -- Annotated type aliases for concise route signatures ---------------------

DbSession = Annotated[AsyncSession, Depends(get_db)]
"""Annotated dependency: async SQLAlchemy session (auto-closed after request)."""

LaunchMgr = Annotated[LaunchManager, Depends(get_launch_manager)]
"""Annotated dependency: the process-wide ``LaunchManager``."""
