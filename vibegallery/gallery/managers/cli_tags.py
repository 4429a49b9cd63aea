"""CLI tag CRUD operations."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.db.tables import CLITag
from vibegallery.gallery.models.api import CLITagCreate, CLITagUpdate


class CLITagNotFoundError(LookupError):
    """Raised when a CLI tag is not found."""


async def create_cli_tag(db: AsyncSession, body: CLITagCreate) -> CLITag:
    tag = CLITag(id=str(uuid.uuid4()), **body.model_dump())
    db.add(tag)
    await db.commit()
    await db.refresh(tag)
    return tag


async def list_cli_tags(db: AsyncSession) -> list[CLITag]:
    result = await db.execute(select(CLITag).order_by(CLITag.created_at.desc()))
    return list(result.scalars().all())


async def get_cli_tag(db: AsyncSession, tag_id: str) -> CLITag:
    """Get a CLI tag by ID.  Raises ``CLITagNotFoundError`` if missing."""
    tag = await db.get(CLITag, tag_id)
    if tag is None:
        raise CLITagNotFoundError(tag_id)
    return tag


async def update_cli_tag(db: AsyncSession, tag_id: str, body: CLITagUpdate) -> CLITag:
    tag = await get_cli_tag(db, tag_id)

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        return tag

    for key, value in changes.items():
        setattr(tag, key, value)

    await db.commit()
    await db.refresh(tag)
    return tag


async def delete_cli_tag(db: AsyncSession, tag_id: str) -> None:
    """Delete a CLI tag.  Projects defaulting to it will fail CLI resolution."""
    tag = await get_cli_tag(db, tag_id)
    await db.delete(tag)
    await db.commit()
