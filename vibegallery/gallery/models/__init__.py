"""Data models for the gallery runtime."""

from vibegallery.gallery.models.api import (
    CLITagCreate,
    CLITagResponse,
    CLITagUpdate,
    EnvConfigurationInput,
    EnvTagCreate,
    EnvTagResponse,
    EnvTagUpdate,
    GroupCreate,
    GroupResponse,
    GroupUpdate,
    IDETagCreate,
    IDETagResponse,
    IDETagUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from vibegallery.gallery.models.catalog import (
    CLITagInfo,
    EnvTagInfo,
    EnvVariable,
    IDETagInfo,
    ProjectInfo,
)
from vibegallery.gallery.models.enums import SessionStatus, ShellDialect
from vibegallery.gallery.models.session import LaunchSession

__all__ = [
    # Catalog snapshots
    "CLITagInfo",
    # API schemas
    "CLITagCreate",
    "CLITagResponse",
    "CLITagUpdate",
    "EnvConfigurationInput",
    "EnvTagCreate",
    "EnvTagInfo",
    "EnvTagResponse",
    "EnvTagUpdate",
    "EnvVariable",
    "GroupCreate",
    "GroupResponse",
    "GroupUpdate",
    "IDETagCreate",
    "IDETagInfo",
    "IDETagResponse",
    "IDETagUpdate",
    # Session
    "LaunchSession",
    "ProjectCreate",
    "ProjectInfo",
    "ProjectResponse",
    "ProjectUpdate",
    # Enums
    "SessionStatus",
    "ShellDialect",
]
