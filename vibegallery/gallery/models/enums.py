"""Shared enumerations used across the gallery runtime."""

from __future__ import annotations

from enum import StrEnum


class SessionStatus(StrEnum):
    """Advisory launch-session status.

    Only ``RUNNING`` is ever assigned: the registry does not observe the
    spawned process, so nothing moves a session out of it.  A stopped
    session is simply removed from the registry.
    """

    RUNNING = "running"


class ShellDialect(StrEnum):
    """Shell syntax a launch command is rendered in."""

    CMD = "cmd"
    POSIX = "posix"
