"""In-process launch registry.

Tracks launch sessions dispatched by this server process.  Ephemeral --
empty on restart, never reconciled against the OS.  A recorded session
stays until it is explicitly forgotten, even after its terminal window has
been closed.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from vibegallery.gallery.models.session import LaunchSession


class LaunchRegistry:
    """Thread-safe map of session id to ``LaunchSession``.

    Created once during app lifespan and handed to the launch manager.
    Every read and write holds the lock, so concurrent request handlers
    never observe a half-updated map.  Recording an existing id replaces it.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, LaunchSession] = {}
        self._lock = threading.Lock()

    # -- Mutation --------------------------------------------------------------

    def record(self, session: LaunchSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session
        logger.debug("Registry: record session {} (project={})", session.session_id, session.project_id)

    def forget(self, session_id: str) -> LaunchSession | None:
        """Remove a session.  Returns it, or ``None`` if it was not recorded."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session:
            logger.debug("Registry: forget session {}", session_id)
        return session

    # -- Query -----------------------------------------------------------------

    def get(self, session_id: str) -> LaunchSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def all_sessions(self) -> list[LaunchSession]:
        """Return a snapshot of all recorded sessions, oldest first."""
        with self._lock:
            sessions = list(self._sessions.values())
        return sorted(sessions, key=lambda s: s.started_at)

    def by_project(self, project_id: str) -> list[LaunchSession]:
        return [s for s in self.all_sessions() if s.project_id == project_id]

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)
