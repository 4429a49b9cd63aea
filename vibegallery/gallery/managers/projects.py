"""Project CRUD operations.

``group_id`` and the ``default_*_tag`` columns are weak references: they are
stored as given and never validated against the referenced tables, here or
later.  Resolution code treats a dangling id as absent.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.db.tables import Project
from vibegallery.gallery.models.api import ProjectCreate, ProjectUpdate


class ProjectNotFoundError(LookupError):
    """Raised when a project is not found."""


async def create_project(db: AsyncSession, body: ProjectCreate) -> Project:
    project = Project(id=str(uuid.uuid4()), **body.model_dump())
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def list_projects(db: AsyncSession, *, group_id: str | None = None) -> list[Project]:
    """List projects, newest first, optionally restricted to one group."""
    stmt = select(Project).order_by(Project.created_at.desc())
    if group_id:
        stmt = stmt.where(Project.group_id == group_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_project(db: AsyncSession, project_id: str) -> Project:
    """Get a project by ID.  Raises ``ProjectNotFoundError`` if missing."""
    project = await db.get(Project, project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)
    return project


async def find_project_by_path(db: AsyncSession, path: str) -> Project | None:
    result = await db.execute(select(Project).where(Project.path == path).limit(1))
    return result.scalar_one_or_none()


async def update_project(db: AsyncSession, project_id: str, body: ProjectUpdate) -> Project:
    """Partially update a project.  ``updated_at`` advances on any change."""
    project = await get_project(db, project_id)

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        return project

    for key, value in changes.items():
        setattr(project, key, value)

    await db.commit()
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, project_id: str) -> None:
    project = await get_project(db, project_id)
    await db.delete(project)
    await db.commit()
