"""Session storage abstractions for wizard sessions."""

from typing import Dict, Optional, Sequence

from .models import SessionData, StackCategory
from .selection import StackSelection


class InMemorySessionStore:
    """Lightweight in-memory session store (dev use only)."""

    def __init__(self, catalog: Optional[Sequence[StackCategory]] = None) -> None:
        """
        Initialize the in-memory session dictionary.

        Args:
            catalog: Catalog injected into every new session engine
        """
        self._sessions: Dict[str, SessionData] = {}
        self._catalog = catalog

    def get(self, session_id: str) -> Optional[SessionData]:
        """Return session data for a session id, if present."""
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> SessionData:
        """Return session data, creating a fresh selection engine when missing."""
        data = self._sessions.get(session_id)
        if data is None:
            data = SessionData(selection=StackSelection(self._catalog))
            self._sessions[session_id] = data
        return data

    def set(self, session_id: str, data: SessionData) -> None:
        """Persist session data for the given session id."""
        self._sessions[session_id] = data

    def delete(self, session_id: str) -> None:
        """Remove a session if it exists in the store."""
        if session_id in self._sessions:
            del self._sessions[session_id]

    def clear(self) -> None:
        """Remove all sessions from the store."""
        self._sessions.clear()

    def get_all_with_submissions(self) -> Dict[str, SessionData]:
        """Get all sessions that have a submitted contact request.

        Returns:
            Dictionary mapping session_id to SessionData for sessions with submissions
        """
        return {sid: data for sid, data in self._sessions.items() if data.submission is not None}
