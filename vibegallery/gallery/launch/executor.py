"""Process launcher -- fire-and-forget spawning of terminals, IDEs and folders.

Nothing spawned here is supervised.  A launch returns as soon as the OS has
created the process; the result only says the launch was *dispatched*.
Whether the CLI tool inside the new window actually starts is not
observable from here, so it is never reported as success or failure.

Spawn paths
-----------

- **CLI, cmd dialect** (Windows): ``start cmd /k "<chain>"`` through the
  shell.  ``start`` opens a new console window; ``/k`` keeps it open once
  the chain finishes so the user can keep working in it.
- **CLI, posix dialect**: a terminal argv template with a ``{command}``
  placeholder, filled with ``<chain>; exec "${SHELL:-/bin/sh}"`` so the
  window drops into an interactive shell afterwards.
- **IDE**: the rendered IDE command through the shell with the project as
  working directory.  stderr is captured and watched for a bounded time;
  IDE launchers usually hand off to a running instance and exit at once.
- **Folder**: the platform file manager.

Errors raised by the spawn call itself (``OSError`` for a missing terminal,
denied permission or a bad working directory, ``ValueError`` for a NUL byte
in the command or path) are logged and returned as
``LaunchDispatch(ok=False)``; they never propagate past this module.
Later failures are only visible to background watcher tasks, which log them.
"""

from __future__ import annotations

import asyncio
import shlex
import shutil
import subprocess
import sys
from collections.abc import Coroutine, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from vibegallery.gallery.models.enums import ShellDialect

COMMAND_PLACEHOLDER = "{command}"

# osascript hands trailing arguments to ``on run argv``, which avoids
# escaping the chain into an AppleScript string literal.
MACOS_TERMINAL = (
    "osascript",
    "-e",
    "on run argv",
    "-e",
    'tell application "Terminal" to do script (item 1 of argv)',
    "-e",
    "end run",
    COMMAND_PLACEHOLDER,
)
LINUX_TERMINAL = ("x-terminal-emulator", "-e", "sh", "-c", COMMAND_PLACEHOLDER)


@dataclass(frozen=True)
class LaunchDispatch:
    """Outcome of a spawn call: ``ok`` means the OS accepted the process."""

    ok: bool
    error: str | None = None


@dataclass(frozen=True)
class SpawnSpec:
    """What to spawn.  A ``str`` runs through the shell; a tuple is exec'd."""

    args: str | tuple[str, ...]
    cwd: str | None = None

    @property
    def shell(self) -> bool:
        return isinstance(self.args, str)


# ---------------------------------------------------------------------------
# Spawn construction
# ---------------------------------------------------------------------------


def default_terminal(platform: str = sys.platform) -> tuple[str, ...]:
    if platform == "darwin":
        return MACOS_TERMINAL
    return LINUX_TERMINAL


def terminal_spawn(
    command_text: str,
    dialect: ShellDialect,
    terminal: Sequence[str] | None = None,
) -> SpawnSpec:
    """Build the spawn for a new interactive window running *command_text*."""
    if dialect is ShellDialect.CMD:
        return SpawnSpec(f'start cmd /k "{command_text}"')

    template = tuple(terminal) if terminal else default_terminal()
    keep_open = f'{command_text}; exec "${{SHELL:-/bin/sh}}"'
    if COMMAND_PLACEHOLDER not in template:
        return SpawnSpec((*template, keep_open))
    return SpawnSpec(tuple(part.replace(COMMAND_PLACEHOLDER, keep_open) for part in template))


def folder_spawn(path: str, platform: str = sys.platform) -> SpawnSpec:
    if platform == "win32":
        return SpawnSpec(f'explorer "{path}"')
    if platform == "darwin":
        return SpawnSpec(("open", path))
    return SpawnSpec(("xdg-open", path))


def executable_of(command: str) -> str | None:
    """First word of a CLI tag command (``"claude --resume"`` -> ``"claude"``)."""
    try:
        words = shlex.split(command, posix=sys.platform != "win32")
    except ValueError:
        words = command.split()
    return words[0] if words else None


# ---------------------------------------------------------------------------
# Launcher
# ---------------------------------------------------------------------------


class ProcessLauncher:
    """Spawns detached processes and keeps only their watcher tasks.

    Instantiated once during app lifespan.  Watcher tasks are held in a set
    so the event loop does not garbage-collect them mid-flight.
    """

    def __init__(
        self,
        *,
        dialect: ShellDialect,
        terminal: Sequence[str] | None = None,
        ide_probe_timeout: float = 5.0,
    ) -> None:
        self.dialect = dialect
        self._terminal = tuple(terminal) if terminal else None
        self._ide_probe_timeout = ide_probe_timeout
        self._watchers: set[asyncio.Task[None]] = set()

    @property
    def pending_watchers(self) -> int:
        return len(self._watchers)

    # -- Public ----------------------------------------------------------------

    async def launch_cli(self, command_text: str, *, executable: str | None = None) -> LaunchDispatch:
        """Open a new terminal window running *command_text*.

        *executable* is the CLI tool the chain ends with.  When it is not on
        PATH a warning is logged, but the window is still opened: the shell
        inside it is what reports the failure to the user.
        """
        if executable and shutil.which(executable) is None:
            logger.warning("Launch warning: '{}' not found on PATH; dispatching anyway", executable)

        spec = terminal_spawn(command_text, self.dialect, self._terminal)
        try:
            process = await self._spawn(spec)
        except (OSError, ValueError) as exc:
            logger.error("Launch failed: could not spawn terminal ({})", exc)
            return LaunchDispatch(ok=False, error=str(exc))

        logger.info("Launch dispatched (pid={}): {}", process.pid, command_text)
        self._watch(self._watch_exit(process, "terminal"))
        return LaunchDispatch(ok=True)

    async def launch_ide(self, command_text: str, cwd: str) -> LaunchDispatch:
        """Run the IDE command in *cwd* and watch briefly for early errors."""
        try:
            process = await self._spawn(SpawnSpec(command_text, cwd=cwd), capture_stderr=True)
        except (OSError, ValueError) as exc:
            logger.error("IDE launch failed: {} (cwd={}): {}", command_text, cwd, exc)
            return LaunchDispatch(ok=False, error=str(exc))

        logger.info("IDE launch dispatched (pid={}): {}", process.pid, command_text)
        self._watch(self._watch_early_failure(process, command_text))
        return LaunchDispatch(ok=True)

    async def open_folder(self, path: str) -> LaunchDispatch:
        try:
            process = await self._spawn(folder_spawn(path))
        except (OSError, ValueError) as exc:
            logger.error("Open folder failed for {}: {}", path, exc)
            return LaunchDispatch(ok=False, error=str(exc))
        # explorer.exe exits with 1 even on success; not worth a warning.
        self._watch(self._watch_exit(process, "file manager", level="DEBUG"))
        return LaunchDispatch(ok=True)

    async def drain(self, timeout: float | None = None) -> bool:
        """Wait for watcher tasks; cancel the ones still running after *timeout*.

        Returns ``True`` if every watcher finished on its own.  Cancelled
        watchers are awaited, so none is left pending when this returns.
        """
        if not self._watchers:
            return True
        _, pending = await asyncio.wait(set(self._watchers), timeout=timeout)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        return not pending

    # -- Internals -------------------------------------------------------------

    async def _spawn(self, spec: SpawnSpec, *, capture_stderr: bool = False) -> asyncio.subprocess.Process:
        kwargs: dict[str, Any] = {
            "cwd": spec.cwd,
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.PIPE if capture_stderr else subprocess.DEVNULL,
        }
        if sys.platform != "win32":
            # Own session: terminals outlive a server restart.
            kwargs["start_new_session"] = True

        if spec.shell:
            return await asyncio.create_subprocess_shell(spec.args, **kwargs)  # type: ignore[arg-type]
        return await asyncio.create_subprocess_exec(*spec.args, **kwargs)

    def _watch(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._watchers.add(task)
        task.add_done_callback(self._watchers.discard)

    @staticmethod
    async def _watch_exit(process: asyncio.subprocess.Process, label: str, level: str = "WARNING") -> None:
        returncode = await process.wait()
        if returncode != 0:
            logger.log(level, "Launch warning: {} (pid={}) exited with code {}", label, process.pid, returncode)

    async def _watch_early_failure(self, process: asyncio.subprocess.Process, command_text: str) -> None:
        communicate = asyncio.ensure_future(process.communicate())
        try:
            done, _ = await asyncio.wait({communicate}, timeout=self._ide_probe_timeout)
            if not done:
                logger.debug("IDE process still running after {}s: {}", self._ide_probe_timeout, command_text)
                # Keep reading so a chatty IDE never blocks on a full stderr pipe.
                await communicate
                return
        except asyncio.CancelledError:
            communicate.cancel()
            await asyncio.gather(communicate, return_exceptions=True)
            raise

        _, stderr = communicate.result()
        if process.returncode:
            detail = (stderr or b"").decode(errors="replace").strip()
            logger.warning("IDE launch error (exit {}): {} {}", process.returncode, command_text, detail)
