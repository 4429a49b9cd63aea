"""Launch resolver -- picks the effective CLI / env / IDE tags for a project.

Resolution order:

- **CLI**: request ``cli_tag_id``, else ``project.default_cli_tag``.  The
  chosen id must name an existing CLI tag, otherwise ``MissingCLIError``.
  A bad override does not fall back to the default; the caller asked for
  that tag specifically.
- **Env**: request ``env_tag_id``, else ``project.default_env_tag``.  No id,
  or an id whose tag was deleted, means "launch without extra variables".
- **IDE**: request ``ide_tag_id``, else ``project.default_ide_tag``.  No id
  or a dangling id raises ``MissingIDEError``.

Empty-string ids count as "not given".  The resolver only reads; results
are frozen snapshots, so resolving twice over an unchanged store gives
equal values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from vibegallery.gallery.db.tables import CLITag as CLITagRow
from vibegallery.gallery.db.tables import EnvTag as EnvTagRow
from vibegallery.gallery.db.tables import IDETag as IDETagRow
from vibegallery.gallery.managers.env_tags import list_env_configurations
from vibegallery.gallery.models.catalog import CLITagInfo, EnvTagInfo, EnvVariable, IDETagInfo, ProjectInfo

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MissingCLIError(LookupError):
    """No CLI tag could be resolved; the user has to pick one."""

    def __init__(self, project_id: str, tag_id: str | None = None) -> None:
        self.project_id = project_id
        self.tag_id = tag_id
        if tag_id is not None:
            super().__init__(f"CLI tag '{tag_id}' not found")
        else:
            super().__init__(f"Project '{project_id}' has no CLI tag selected and no default CLI tag")


class MissingIDEError(LookupError):
    """No IDE tag could be resolved for an open-in-IDE request."""

    def __init__(self, project_id: str, tag_id: str | None = None) -> None:
        self.project_id = project_id
        self.tag_id = tag_id
        if tag_id is not None:
            super().__init__(f"IDE tag '{tag_id}' not found")
        else:
            super().__init__(f"No IDE configured for project '{project_id}'")


# ---------------------------------------------------------------------------
# Output model
# ---------------------------------------------------------------------------


class ResolvedLaunch(BaseModel):
    """Effective configuration for one CLI launch."""

    model_config = ConfigDict(frozen=True)

    project: ProjectInfo
    cli: CLITagInfo
    env_tag: EnvTagInfo | None = None
    env_variables: list[EnvVariable] = Field(default_factory=list)

    @property
    def env_tag_applied(self) -> bool:
        return self.env_tag is not None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def resolve_launch(
    db: AsyncSession,
    project: ProjectInfo,
    *,
    cli_tag_id: str | None = None,
    env_tag_id: str | None = None,
) -> ResolvedLaunch:
    """Resolve the CLI tag and env variables for launching *project*.

    Raises
    ------
    MissingCLIError:
        Neither the override nor the project default names an existing CLI tag.
    """
    cli = await _resolve_cli(db, project, cli_tag_id)
    env_tag, env_variables = await _resolve_env(db, _first(env_tag_id, project.default_env_tag))
    return ResolvedLaunch(project=project, cli=cli, env_tag=env_tag, env_variables=env_variables)


async def resolve_ide(
    db: AsyncSession,
    project: ProjectInfo,
    *,
    ide_tag_id: str | None = None,
) -> IDETagInfo:
    """Resolve the IDE tag for opening *project*.

    Raises
    ------
    MissingIDEError:
        No IDE id was given or configured, or it names a deleted tag.
    """
    tag_id = _first(ide_tag_id, project.default_ide_tag)
    if tag_id is None:
        raise MissingIDEError(project.id)
    row = await db.get(IDETagRow, tag_id)
    if row is None:
        raise MissingIDEError(project.id, tag_id)
    return IDETagInfo.model_validate(row)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


async def _resolve_cli(db: AsyncSession, project: ProjectInfo, override_id: str | None) -> CLITagInfo:
    tag_id = _first(override_id, project.default_cli_tag)
    if tag_id is None:
        raise MissingCLIError(project.id)
    row = await db.get(CLITagRow, tag_id)
    if row is None:
        raise MissingCLIError(project.id, tag_id)
    return CLITagInfo.model_validate(row)


async def _resolve_env(db: AsyncSession, tag_id: str | None) -> tuple[EnvTagInfo | None, list[EnvVariable]]:
    """Look up an env tag and its variables; absent or dangling yields nothing."""
    if tag_id is None:
        return None, []
    row = await db.get(EnvTagRow, tag_id)
    if row is None:
        return None, []
    configurations = await list_env_configurations(db, tag_id)
    return EnvTagInfo.model_validate(row), [EnvVariable.model_validate(c) for c in configurations]


def _first(override: str | None, default: str | None) -> str | None:
    """Return the override if given (non-empty), otherwise the default."""
    if override:
        return override
    return default or None
