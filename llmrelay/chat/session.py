"""Conversation sessions held in memory.

Durable storage is the embedding application's concern; the store only keeps
sessions for the lifetime of the process.
"""
from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..base.models import ChatMessage
from ..config.defaults import DEFAULT_SESSION_LABEL


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatSession:
    """One conversation: ordered messages plus a short label."""

    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    messages: List[ChatMessage] = field(default_factory=list)
    overview: str = DEFAULT_SESSION_LABEL
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self.updated_at = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "overview": self.overview,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "messages": [m.to_dict() for m in self.messages],
        }


class InMemorySessionStore:
    """Thread-safe session map with a notion of the current session."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: Dict[str, ChatSession] = {}
        self._current_id: Optional[str] = None

    def create(self) -> ChatSession:
        """Create a session and make it current."""
        session = ChatSession()
        with self._lock:
            self._sessions[session.id] = session
            self._current_id = session.id
        return session

    def get(self, session_id: str) -> Optional[ChatSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def current(self) -> ChatSession:
        """Return the current session, creating one when none exists."""
        with self._lock:
            if self._current_id is not None:
                return self._sessions[self._current_id]
        return self.create()

    def set_current(self, session_id: str) -> ChatSession:
        """Raises ``KeyError`` for an unknown id."""
        with self._lock:
            session = self._sessions[session_id]
            self._current_id = session_id
            return session

    def list_sessions(self) -> List[ChatSession]:
        """Sessions, most recently updated first."""
        with self._lock:
            items = list(self._sessions.values())
        return sorted(items, key=lambda s: s.updated_at, reverse=True)

    def update_overview(self, session_id: str, overview: str) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                session.overview = overview


__all__ = ["ChatSession", "InMemorySessionStore"]
