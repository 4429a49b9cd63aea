"""Project group CRUD operations.

Groups are labels.  Deleting one never touches its projects: their
``group_id`` is left pointing at the removed id.
"""

from __future__ import annotations

import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.db.tables import ProjectGroup
from vibegallery.gallery.models.api import GroupCreate, GroupUpdate


class GroupNotFoundError(LookupError):
    """Raised when a group is not found."""


async def create_group(db: AsyncSession, body: GroupCreate) -> ProjectGroup:
    group = ProjectGroup(id=str(uuid.uuid4()), **body.model_dump())
    db.add(group)
    await db.commit()
    await db.refresh(group)
    return group


async def list_groups(db: AsyncSession) -> list[ProjectGroup]:
    """List all groups, newest first."""
    result = await db.execute(select(ProjectGroup).order_by(ProjectGroup.created_at.desc()))
    return list(result.scalars().all())


async def get_group(db: AsyncSession, group_id: str) -> ProjectGroup:
    """Get a group by ID.  Raises ``GroupNotFoundError`` if missing."""
    group = await db.get(ProjectGroup, group_id)
    if group is None:
        raise GroupNotFoundError(group_id)
    return group


async def update_group(db: AsyncSession, group_id: str, body: GroupUpdate) -> ProjectGroup:
    group = await get_group(db, group_id)

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        return group

    for key, value in changes.items():
        setattr(group, key, value)

    await db.commit()
    await db.refresh(group)
    return group


async def delete_group(db: AsyncSession, group_id: str) -> None:
    """Delete a group.  Member projects are intentionally left as they are."""
    group = await get_group(db, group_id)
    await db.delete(group)
    await db.commit()
    logger.info("Group deleted: {} (member projects keep group_id)", group_id)
