"""Launch manager -- project start, open-in-IDE and session bookkeeping.

Ties the pipeline together for one request::

    project row -> resolve -> render -> spawn -> record session

The manager owns no state of its own beyond the injected registry and
launcher; both are created once in the app lifespan.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from vibegallery.gallery.launch.executor import executable_of
from vibegallery.gallery.launch.renderer import render_ide_command, render_launch_command
from vibegallery.gallery.launch.resolver import resolve_ide, resolve_launch
from vibegallery.gallery.managers.projects import get_project
from vibegallery.gallery.models.catalog import ProjectInfo
from vibegallery.gallery.models.session import LaunchSession

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vibegallery.gallery.launch.executor import ProcessLauncher
    from vibegallery.gallery.models.enums import ShellDialect
    from vibegallery.gallery.registry import LaunchRegistry


class SpawnFailureError(RuntimeError):
    """The OS refused to spawn the terminal or IDE process."""


class LaunchSessionNotFoundError(LookupError):
    """Raised when a session id is not in the registry."""


@dataclass(frozen=True)
class IDELaunch:
    project_id: str
    ide_tag_name: str
    command: str


class LaunchManager:
    """Launches projects and keeps the session registry up to date."""

    def __init__(self, registry: LaunchRegistry, launcher: ProcessLauncher, dialect: ShellDialect) -> None:
        self.registry = registry
        self.launcher = launcher
        self.dialect = dialect

    async def start_project(
        self,
        db: AsyncSession,
        project_id: str,
        *,
        cli_tag_id: str | None = None,
        env_tag_id: str | None = None,
    ) -> LaunchSession:
        """Open a terminal for *project_id* running its CLI tool.

        Raises
        ------
        ProjectNotFoundError:
            Unknown project.
        MissingCLIError:
            No CLI tag could be resolved.
        SpawnFailureError:
            The terminal process could not be spawned; nothing is recorded.
        """
        project = ProjectInfo.model_validate(await get_project(db, project_id))
        resolved = await resolve_launch(db, project, cli_tag_id=cli_tag_id, env_tag_id=env_tag_id)
        command_text = render_launch_command(project, resolved.cli, resolved.env_variables, self.dialect)

        dispatch = await self.launcher.launch_cli(command_text, executable=executable_of(resolved.cli.command))
        if not dispatch.ok:
            raise SpawnFailureError(f"Failed to open a terminal for project '{project.name}': {dispatch.error}")

        session = LaunchSession(
            session_id=uuid.uuid4().hex,
            project_id=project.id,
            project=project,
            cli_tag_name=resolved.cli.name,
            env_tag_applied=resolved.env_tag_applied,
        )
        self.registry.record(session)
        logger.info(
            "Started project {} with {} (session={}, env={})",
            project.name,
            resolved.cli.name,
            session.session_id,
            resolved.env_tag.name if resolved.env_tag else None,
        )
        return session

    async def open_in_ide(self, db: AsyncSession, project_id: str, *, ide_tag_id: str | None = None) -> IDELaunch:
        """Open *project_id* in its IDE.  No session is recorded."""
        project = ProjectInfo.model_validate(await get_project(db, project_id))
        ide = await resolve_ide(db, project, ide_tag_id=ide_tag_id)
        command_text = render_ide_command(project, ide)

        dispatch = await self.launcher.launch_ide(command_text, cwd=project.path)
        if not dispatch.ok:
            raise SpawnFailureError(f"Failed to open {ide.name}: {dispatch.error}")
        return IDELaunch(project_id=project.id, ide_tag_name=ide.name, command=command_text)

    async def open_folder(self, path: str) -> None:
        dispatch = await self.launcher.open_folder(path)
        if not dispatch.ok:
            raise SpawnFailureError(f"Failed to open folder '{path}': {dispatch.error}")

    # -- Sessions --------------------------------------------------------------

    def stop_session(self, session_id: str) -> LaunchSession:
        """Forget a session.  The terminal window itself is left running."""
        session = self.registry.forget(session_id)
        if session is None:
            raise LaunchSessionNotFoundError(session_id)
        logger.info("Stopped session {} (project={})", session_id, session.project.name)
        return session

    def list_sessions(self, project_id: str | None = None) -> list[LaunchSession]:
        if project_id:
            return self.registry.by_project(project_id)
        return self.registry.all_sessions()

    def get_session(self, session_id: str) -> LaunchSession:
        session = self.registry.get(session_id)
        if session is None:
            raise LaunchSessionNotFoundError(session_id)
        return session
