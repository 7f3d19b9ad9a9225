"""In-memory registry of open viewer sessions."""
import logging
import uuid
from typing import Callable, Dict

from app.core.exceptions import SessionNotFoundError
from app.viewer.session import ViewerSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str], ViewerSession]


class SessionRegistry:
    def __init__(self, factory: SessionFactory):
        self._factory = factory
        self._sessions: Dict[str, ViewerSession] = {}

    def create(self) -> ViewerSession:
        session_id = uuid.uuid4().hex
        session = self._factory(session_id)
        self._sessions[session_id] = session
        logger.info(f"Opened viewer session {session_id}")
        return session

    def get(self, session_id: str) -> ViewerSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def close(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info(f"Closed viewer session {session_id}")

    def close_all(self) -> None:
        count = len(self._sessions)
        self._sessions.clear()
        if count:
            logger.info(f"Closed {count} viewer sessions")

    def __len__(self) -> int:
        return len(self._sessions)
