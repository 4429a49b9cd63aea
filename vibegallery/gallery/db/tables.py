"""SQLAlchemy ORM models for the project catalog.

These are the single source of truth for the database schema.  Alembic reads
``Base.metadata`` to autogenerate migration scripts.

Uses SQLAlchemy 2.0 declarative style with ``Mapped`` type annotations.

Projects hold *weak* references (``group_id``, ``default_*_tag``): plain
string columns without foreign key constraints.  Deleting a group or a tag
leaves those ids dangling on purpose; lookups treat them as absent.  The
only strong ownership is EnvTag -> EnvConfiguration.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Timezone-aware timestamp type for all datetime columns.
TimestampTZ = DateTime(timezone=True)


class Base(DeclarativeBase):
    """Declarative base with naming convention for constraints."""

    pass


# Apply naming convention to the metadata for deterministic constraint names.
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class ProjectGroup(Base):
    __tablename__ = "project_groups"

    id: Mapped[str] = mapped_column(primary_key=True)
    name: Mapped[str]
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None]
    color: Mapped[str | None]
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_group_id", "group_id"),
        Index("ix_projects_path", "path"),
    )

    id: Mapped[str] = mapped_column(primary_key=True)
    name: Mapped[str]
    description: Mapped[str | None] = mapped_column(Text)
    path: Mapped[str] = mapped_column(Text)
    group_id: Mapped[str | None]
    default_cli_tag: Mapped[str | None]
    default_env_tag: Mapped[str | None]
    default_ide_tag: Mapped[str | None]
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())


class CLITag(Base):
    __tablename__ = "cli_tags"

    id: Mapped[str] = mapped_column(primary_key=True)
    name: Mapped[str]
    command: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None]
    color: Mapped[str | None]
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())


class EnvTag(Base):
    __tablename__ = "env_tags"

    id: Mapped[str] = mapped_column(primary_key=True)
    name: Mapped[str]
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None]
    color: Mapped[str | None]
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())

    configurations: Mapped[list[EnvConfiguration]] = relationship(
        back_populates="tag",
        cascade="all, delete-orphan",
        order_by="EnvConfiguration.position",
        lazy="selectin",
        passive_deletes=True,
    )


class EnvConfiguration(Base):
    __tablename__ = "env_configurations"
    __table_args__ = (Index("ix_env_configurations_tag_id", "tag_id"),)

    id: Mapped[str] = mapped_column(primary_key=True)
    tag_id: Mapped[str] = mapped_column(
        ForeignKey("env_tags.id", ondelete="CASCADE", name="fk_env_configurations_tag_id"),
    )
    key: Mapped[str]
    value: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    position: Mapped[int] = mapped_column(default=0, server_default="0")
    """Insertion order within the owning tag; rendering follows it."""

    tag: Mapped[EnvTag] = relationship(back_populates="configurations")


class IDETag(Base):
    __tablename__ = "ide_tags"

    id: Mapped[str] = mapped_column(primary_key=True)
    name: Mapped[str]
    executable_path: Mapped[str] = mapped_column(Text)
    command_args: Mapped[str | None]
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None]
    color: Mapped[str | None]
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
