"""Launch session value object.

A ``LaunchSession`` records that a launch was *dispatched*.  It carries
metadata only: no PID, no process handle.  The shell window it describes
was spawned detached, and the CLI tool chained inside it is not addressable
from here, so the session cannot be used to supervise or kill anything.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from vibegallery.gallery.models.catalog import ProjectInfo
from vibegallery.gallery.models.enums import SessionStatus


class LaunchSession(BaseModel):
    """Registry entry for one dispatched CLI launch."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    project_id: str
    project: ProjectInfo
    cli_tag_name: str
    env_tag_applied: bool = False
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    status: SessionStatus = SessionStatus.RUNNING
