"""API request / response schemas.

These thin schemas sit between HTTP and the ORM layer:

- **Create** schemas validate user input and provide defaults.  Required
  text fields are stripped and must be non-empty, so blank names are
  rejected (422) before any store mutation.
- **Update** schemas allow partial updates via ``exclude_unset``.  Required
  fields may be omitted but not explicitly nulled.
- **Response** schemas serialize ORM rows via ``from_attributes``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints

from vibegallery.gallery.models.catalog import ProjectInfo
from vibegallery.gallery.models.enums import SessionStatus

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
"""A string that is non-empty after trimming (stored trimmed)."""


def _reject_null(value: object) -> object:
    if value is None:
        msg = "field is required and may not be null"
        raise ValueError(msg)
    return value


PatchStr = Annotated[NonEmptyStr | None, BeforeValidator(_reject_null)]
"""Update-schema form of ``NonEmptyStr``: may be omitted, not nulled."""


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


class GroupCreate(BaseModel):
    name: NonEmptyStr
    description: str | None = None
    icon: str | None = None
    color: str | None = None


class GroupUpdate(BaseModel):
    name: PatchStr = None
    description: str | None = None
    icon: str | None = None
    color: str | None = None


class GroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    created_at: datetime


# ---------------------------------------------------------------------------
# CLI tag
# ---------------------------------------------------------------------------


class CLITagCreate(BaseModel):
    name: NonEmptyStr
    command: NonEmptyStr = Field(description="Executable or alias invoked as the last launch statement.")
    description: str | None = None
    icon: str | None = None
    color: str | None = None


class CLITagUpdate(BaseModel):
    name: PatchStr = None
    command: PatchStr = None
    description: str | None = None
    icon: str | None = None
    color: str | None = None


class CLITagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    command: str
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Environment tag
# ---------------------------------------------------------------------------


class EnvConfigurationInput(BaseModel):
    key: NonEmptyStr
    value: str | None = ""
    description: str | None = None


class EnvTagCreate(BaseModel):
    name: NonEmptyStr
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    configurations: list[EnvConfigurationInput] = Field(default_factory=list)


class EnvTagUpdate(BaseModel):
    """Partial update.  A provided ``configurations`` list replaces the whole set."""

    name: PatchStr = None
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    configurations: list[EnvConfigurationInput] | None = None


class EnvConfigurationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tag_id: str
    key: str
    value: str | None = None
    description: str | None = None


class EnvTagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    created_at: datetime
    configurations: list[EnvConfigurationResponse] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# IDE tag
# ---------------------------------------------------------------------------


class IDETagCreate(BaseModel):
    name: NonEmptyStr
    executable_path: NonEmptyStr
    command_args: str | None = Field(default=None, description="Defaults to '.' when rendering if unset.")
    description: str | None = None
    icon: str | None = None
    color: str | None = None


class IDETagUpdate(BaseModel):
    name: PatchStr = None
    executable_path: PatchStr = None
    command_args: str | None = None
    description: str | None = None
    icon: str | None = None
    color: str | None = None


class IDETagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    executable_path: str
    command_args: str | None = None
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


class ProjectCreate(BaseModel):
    name: NonEmptyStr
    path: NonEmptyStr
    description: str | None = None
    group_id: str | None = None
    default_cli_tag: str | None = None
    default_env_tag: str | None = None
    default_ide_tag: str | None = None


class ProjectUpdate(BaseModel):
    """Partial update.  Send ``null`` to clear a group or default tag."""

    name: PatchStr = None
    path: PatchStr = None
    description: str | None = None
    group_id: str | None = None
    default_cli_tag: str | None = None
    default_env_tag: str | None = None
    default_ide_tag: str | None = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    path: str
    group_id: str | None = None
    default_cli_tag: str | None = None
    default_env_tag: str | None = None
    default_ide_tag: str | None = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Launching
# ---------------------------------------------------------------------------


class LaunchRequest(BaseModel):
    """Optional overrides; omitted or empty ids fall back to project defaults."""

    cli_tag_id: str | None = None
    env_tag_id: str | None = None


class LaunchResponse(BaseModel):
    session_id: str
    project_id: str
    status: str = "started"
    message: str


class OpenIDERequest(BaseModel):
    ide_tag_id: str | None = None


class OpenIDEResponse(BaseModel):
    project_id: str
    ide_tag: str
    status: str = "launched"
    message: str


class OpenFolderRequest(BaseModel):
    path: NonEmptyStr


class ScanRequest(BaseModel):
    scan_path: NonEmptyStr
    group_id: str | None = None


class ScanResponse(BaseModel):
    message: str
    projects: list[ProjectResponse]


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Launch sessions
# ---------------------------------------------------------------------------


class SessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    session_id: str
    project_id: str
    project: ProjectInfo
    cli_tag_name: str
    env_tag_applied: bool
    started_at: datetime
    status: SessionStatus


class StopSessionResponse(BaseModel):
    session_id: str
    status: str = "stopped"
    message: str
