"""Catalog snapshots used by the launch pipeline.

Plain Pydantic copies of ORM rows.  The resolver hands these to the renderer
and the registry so that nothing downstream holds a live ORM instance (or
touches the database) after resolution.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class _Snapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class ProjectInfo(_Snapshot):
    id: str
    name: str
    description: str | None = None
    path: str
    group_id: str | None = None
    default_cli_tag: str | None = None
    default_env_tag: str | None = None
    default_ide_tag: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CLITagInfo(_Snapshot):
    id: str
    name: str
    command: str


class EnvVariable(_Snapshot):
    """One ``KEY=value`` pair of an env tag."""

    key: str
    value: str | None = None

    @property
    def is_set(self) -> bool:
        """Blank or whitespace-only values mean "not set" for launching."""
        return bool(self.value and self.value.strip())


class EnvTagInfo(_Snapshot):
    id: str
    name: str


class IDETagInfo(_Snapshot):
    id: str
    name: str
    executable_path: str
    command_args: str | None = None
