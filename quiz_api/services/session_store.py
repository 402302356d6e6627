import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from services.assessment_engine.engine import AssessmentSession
from services.assessment_engine.loader import load_question_bank_from_file
from services.assessment_engine.models import QuestionBank
from quiz_api.core.config import settings

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is not (or no longer) registered."""
    pass


class SessionRegistry:
    """
    In-memory registry of assessment sessions, one per respondent.

    Sessions never share state; each holds its own AssessmentSession over the
    same read-only question bank. Contents are lost on restart, which is fine
    because quiz results are not persisted.

    The registry is bounded two ways: sessions idle for longer than
    `idle_ttl_seconds` expire, and once `max_sessions` are held the least
    recently used one is evicted to make room for a new one.
    """
    def __init__(
        self,
        bank: QuestionBank,
        max_sessions: Optional[int] = None,
        idle_ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_sessions is not None and max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.bank = bank
        self.max_sessions = max_sessions
        self.idle_ttl_seconds = idle_ttl_seconds
        self._clock = clock
        # Ordered least recently used first; values are (session, last_seen)
        self._sessions: "OrderedDict[uuid.UUID, Tuple[AssessmentSession, float]]" = OrderedDict()

    def create(self) -> uuid.UUID:
        self._purge_expired()
        if self.max_sessions is not None:
            while len(self._sessions) >= self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info("Evicted least recently used assessment session", extra={"session_id": evicted_id})

        session_id = uuid.uuid4()
        self._sessions[session_id] = (AssessmentSession(self.bank), self._clock())
        logger.info("Created assessment session", extra={"session_id": session_id})
        return session_id

    def get(self, session_id: uuid.UUID) -> AssessmentSession:
        try:
            session, last_seen = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Assessment session '{session_id}' not found.")

        now = self._clock()
        if self._is_expired(last_seen, now):
            del self._sessions[session_id]
            logger.info("Assessment session expired", extra={"session_id": session_id})
            raise SessionNotFoundError(f"Assessment session '{session_id}' not found.")

        self._sessions[session_id] = (session, now)
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: uuid.UUID) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(f"Assessment session '{session_id}' not found.")
        logger.info("Deleted assessment session", extra={"session_id": session_id})

    def __len__(self) -> int:
        return len(self._sessions)

    def _is_expired(self, last_seen: float, now: float) -> bool:
        return self.idle_ttl_seconds is not None and now - last_seen > self.idle_ttl_seconds

    def _purge_expired(self) -> None:
        if self.idle_ttl_seconds is None:
            return
        now = self._clock()
        # Least recently used first, so stop at the first live session
        while self._sessions:
            session_id, (_, last_seen) = next(iter(self._sessions.items()))
            if not self._is_expired(last_seen, now):
                break
            del self._sessions[session_id]
            logger.info("Assessment session expired", extra={"session_id": session_id})


_registry: Optional[SessionRegistry] = None


def get_session_registry() -> SessionRegistry:
    """FastAPI dependency returning the process-wide registry, loading the bank on first use."""
    global _registry
    if _registry is None:
        bank = load_question_bank_from_file(settings.question_bank_path)
        _registry = SessionRegistry(
            bank,
            max_sessions=settings.max_sessions,
            idle_ttl_seconds=settings.session_idle_ttl_seconds,
        )
    return _registry
