"""IDE tag CRUD operations."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.db.tables import IDETag
from vibegallery.gallery.models.api import IDETagCreate, IDETagUpdate


class IDETagNotFoundError(LookupError):
    """Raised when an IDE tag is not found."""


async def create_ide_tag(db: AsyncSession, body: IDETagCreate) -> IDETag:
    tag = IDETag(id=str(uuid.uuid4()), **body.model_dump())
    db.add(tag)
    await db.commit()
    await db.refresh(tag)
    return tag


async def list_ide_tags(db: AsyncSession) -> list[IDETag]:
    result = await db.execute(select(IDETag).order_by(IDETag.created_at.desc()))
    return list(result.scalars().all())


async def get_ide_tag(db: AsyncSession, tag_id: str) -> IDETag:
    tag = await db.get(IDETag, tag_id)
    if tag is None:
        raise IDETagNotFoundError(tag_id)
    return tag


async def update_ide_tag(db: AsyncSession, tag_id: str, body: IDETagUpdate) -> IDETag:
    tag = await get_ide_tag(db, tag_id)

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        return tag

    for key, value in changes.items():
        setattr(tag, key, value)

    await db.commit()
    await db.refresh(tag)
    return tag


async def delete_ide_tag(db: AsyncSession, tag_id: str) -> None:
    tag = await get_ide_tag(db, tag_id)
    await db.delete(tag)
    await db.commit()
