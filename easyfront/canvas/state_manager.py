"""
Canvas State Manager
====================

Keeps one document store per editing session.

Stores live only as long as the process; saving to the projects
collection is an explicit, separate action (see ProjectService).
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from .document_store import DocumentStore
from .grid import DEFAULT_GRID_SIZE

logger = logging.getLogger(__name__)


@dataclass
class EditingSession:
    """A document store plus session bookkeeping."""
    id: str
    store: DocumentStore
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    updated_at: Optional[str] = None
    # Held while a project load repopulates the store
    load_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def touch(self) -> None:
        self.updated_at = datetime.now().isoformat()


class StateManager:
    """Manages document stores for sessions."""

    def __init__(self, default_grid_size: int = DEFAULT_GRID_SIZE):
        self.default_grid_size = default_grid_size
        self._sessions: Dict[str, EditingSession] = {}
        logger.info(f"[STATE-MANAGER] Initialized with default_grid_size={default_grid_size}")

    def create_session(self, session_id: Optional[str] = None) -> str:
        """Create a new session with optional ID."""
        if session_id is None:
            session_id = str(uuid.uuid4())

        if session_id not in self._sessions:
            self._sessions[session_id] = EditingSession(
                id=session_id,
                store=DocumentStore(grid_size=self.default_grid_size),
            )
            logger.info(f"[STATE-MANAGER] Created session {session_id}")
        return session_id

    def get_session(self, session_id: str) -> Optional[EditingSession]:
        return self._sessions.get(session_id)

    def get_store(self, session_id: str) -> Optional[DocumentStore]:
        session = self._sessions.get(session_id)
        return session.store if session else None

    def clear_session(self, session_id: str) -> bool:
        """Clear all elements from a session's store."""
        session = self.get_session(session_id)
        if not session:
            return False

        session.store.clear()
        session.touch()
        return True

    def remove_session(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def session_ids(self):
        return list(self._sessions)
