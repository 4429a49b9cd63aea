"""Environment tag CRUD operations.

An env tag owns its configurations: they are created with the tag,
replaced wholesale on update when a new list is given, and deleted with
the tag.  Configuration order is the order the caller supplied.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vibegallery.gallery.db.tables import EnvConfiguration, EnvTag
from vibegallery.gallery.models.api import EnvConfigurationInput, EnvTagCreate, EnvTagUpdate


class EnvTagNotFoundError(LookupError):
    """Raised when an env tag is not found."""


def _build_configurations(tag_id: str, items: list[EnvConfigurationInput]) -> list[EnvConfiguration]:
    return [
        EnvConfiguration(
            id=str(uuid.uuid4()),
            tag_id=tag_id,
            key=item.key,
            value=item.value,
            description=item.description,
            position=index,
        )
        for index, item in enumerate(items)
    ]


async def _load_env_tag(db: AsyncSession, tag_id: str) -> EnvTag | None:
    """Load a tag with its configurations freshly populated."""
    stmt = (
        select(EnvTag)
        .where(EnvTag.id == tag_id)
        .options(selectinload(EnvTag.configurations))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_env_tag(db: AsyncSession, body: EnvTagCreate) -> EnvTag:
    tag_id = str(uuid.uuid4())
    tag = EnvTag(id=tag_id, **body.model_dump(exclude={"configurations"}))
    tag.configurations = _build_configurations(tag_id, body.configurations)
    db.add(tag)
    await db.commit()
    return await get_env_tag(db, tag_id)


async def list_env_tags(db: AsyncSession) -> list[EnvTag]:
    """List all env tags (configurations included), newest first."""
    stmt = select(EnvTag).options(selectinload(EnvTag.configurations)).order_by(EnvTag.created_at.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_env_tag(db: AsyncSession, tag_id: str) -> EnvTag:
    """Get an env tag by ID.  Raises ``EnvTagNotFoundError`` if missing."""
    tag = await _load_env_tag(db, tag_id)
    if tag is None:
        raise EnvTagNotFoundError(tag_id)
    return tag


async def update_env_tag(db: AsyncSession, tag_id: str, body: EnvTagUpdate) -> EnvTag:
    """Partially update a tag; a provided ``configurations`` list replaces all."""
    tag = await get_env_tag(db, tag_id)

    changes = body.model_dump(exclude_unset=True, exclude={"configurations"})
    for key, value in changes.items():
        setattr(tag, key, value)

    if body.configurations is not None:
        # delete-orphan removes the previous rows on flush.
        tag.configurations = _build_configurations(tag_id, body.configurations)

    if not changes and body.configurations is None:
        return tag

    await db.commit()
    return await get_env_tag(db, tag_id)


async def delete_env_tag(db: AsyncSession, tag_id: str) -> None:
    """Delete a tag together with its configurations."""
    tag = await get_env_tag(db, tag_id)
    await db.delete(tag)
    await db.commit()


async def list_env_configurations(db: AsyncSession, tag_id: str) -> list[EnvConfiguration]:
    """Configurations of a tag in store order; empty for an unknown tag."""
    stmt = select(EnvConfiguration).where(EnvConfiguration.tag_id == tag_id).order_by(EnvConfiguration.position)
    result = await db.execute(stmt)
    return list(result.scalars().all())
