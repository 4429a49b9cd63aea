"""Command rendering -- resolved launch config -> one shell command line.

A launch command is a chain of statements joined with ``&&`` so that each
runs only if the previous one succeeded::

    title Demo - Claude Code && cd /d "C:\\proj\\demo" && set "A=1" && claude

Statement order is fixed: window title, directory change, one assignment per
env variable with a non-blank value (store order), then the CLI command.

Quoting is deliberately minimal: ``quote`` wraps a value in double quotes
and escapes nothing.  Project names, paths and tag fields are otherwise
inserted verbatim, so a crafted name or path can inject shell syntax.  The
catalog is local and single-user; this is a known limitation, not an
oversight.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable

from vibegallery.gallery.models.catalog import CLITagInfo, EnvVariable, IDETagInfo, ProjectInfo
from vibegallery.gallery.models.enums import ShellDialect

CHAIN_OPERATOR = " && "
DEFAULT_IDE_ARGS = "."


def quote(value: str) -> str:
    """Wrap *value* in double quotes.  No escaping is performed."""
    return f'"{value}"'


def default_dialect(setting: str = "auto") -> ShellDialect:
    """Map the ``shell_dialect`` setting to a dialect (``auto`` follows the OS)."""
    if setting != "auto":
        return ShellDialect(setting)
    return ShellDialect.CMD if sys.platform == "win32" else ShellDialect.POSIX


class CommandChain:
    """Ordered shell statements rendered with a run-if-previous-succeeded join."""

    def __init__(self, dialect: ShellDialect) -> None:
        self.dialect = dialect
        self._statements: list[str] = []

    @property
    def statements(self) -> list[str]:
        return list(self._statements)

    def add(self, statement: str) -> CommandChain:
        self._statements.append(statement)
        return self

    def title(self, text: str) -> CommandChain:
        if self.dialect is ShellDialect.CMD:
            return self.add(f"title {text}")
        return self.add(f"printf '\\033]0;%s\\007' {quote(text)}")

    def cd(self, path: str) -> CommandChain:
        if self.dialect is ShellDialect.CMD:
            # /d also switches drive letters.
            return self.add(f"cd /d {quote(path)}")
        return self.add(f"cd {quote(path)}")

    def set_env(self, key: str, value: str) -> CommandChain:
        if self.dialect is ShellDialect.CMD:
            # Unquoted, cmd keeps the space before "&&" in the value.
            return self.add(f"set {quote(f'{key}={value}')}")
        return self.add(f"export {key}={quote(value)}")

    def render(self) -> str:
        return CHAIN_OPERATOR.join(self._statements)


def build_launch_chain(
    project: ProjectInfo,
    cli: CLITagInfo,
    env_variables: Iterable[EnvVariable],
    dialect: ShellDialect,
) -> CommandChain:
    chain = CommandChain(dialect)
    chain.title(f"{project.name} - {cli.name}")
    chain.cd(project.path)
    for variable in env_variables:
        if variable.is_set:
            chain.set_env(variable.key, variable.value)  # type: ignore[arg-type]
    chain.add(cli.command)
    return chain


def render_launch_command(
    project: ProjectInfo,
    cli: CLITagInfo,
    env_variables: Iterable[EnvVariable],
    dialect: ShellDialect,
) -> str:
    """Render the full launch chain for *project* as one command string."""
    return build_launch_chain(project, cli, env_variables, dialect).render()


def render_ide_command(project: ProjectInfo, ide: IDETagInfo) -> str:
    """``{executable} {args or "."} "{path}"``, run with the project as CWD."""
    args = ide.command_args if ide.command_args and ide.command_args.strip() else DEFAULT_IDE_ARGS
    return f"{ide.executable_path} {args} {quote(project.path)}"
