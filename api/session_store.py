"""
In-memory session store keyed by UUID.

Each session holds its own view-state controller (loaded dataset, filter,
sort, selection). Sessions expire after 1 hour of inactivity.
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from config.settings import Config
from core.favorites import FavoritesStore
from core.view_state import ViewStateController


@dataclass
class SessionData:
    """Per-session dashboard state."""

    controller: ViewStateController = field(default_factory=ViewStateController)
    last_accessed: float = field(default_factory=time.time)


# Global store: session_id -> SessionData
_sessions: Dict[str, SessionData] = {}

SESSION_TTL_SECONDS = 3600  # 1 hour


def create_session(favorites: Optional[FavoritesStore] = None) -> str:
    """Create a new session and return its ID."""
    session_id = str(uuid.uuid4())
    controller = ViewStateController(favorites=favorites, config=Config.load().app)
    _sessions[session_id] = SessionData(controller=controller)
    return session_id


def get_session(session_id: str) -> Optional[SessionData]:
    """Return the session if it exists and is not expired."""
    session = _sessions.get(session_id)
    if session is None:
        return None
    if time.time() - session.last_accessed > SESSION_TTL_SECONDS:
        del _sessions[session_id]
        return None
    session.last_accessed = time.time()
    return session


def cleanup_expired() -> int:
    """Remove expired sessions. Returns number removed."""
    now = time.time()
    expired = [
        sid for sid, s in _sessions.items()
        if now - s.last_accessed > SESSION_TTL_SECONDS
    ]
    for sid in expired:
        del _sessions[sid]
    return len(expired)


def clear_sessions() -> None:
    _sessions.clear()
