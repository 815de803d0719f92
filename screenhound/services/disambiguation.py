"""Pending candidate lists, one per caller session."""

from collections import OrderedDict
from collections.abc import Sequence

from loguru import logger

from screenhound.core.exceptions import SelectionOutOfRangeError
from screenhound.core.models import CandidateScreen

DEFAULT_SESSION_ID = "default"
MAX_SESSIONS = 256


class DisambiguationSession:
    """The most recently presented candidate list of one caller."""

    def __init__(self, session_id: str = DEFAULT_SESSION_ID):
        self.session_id = session_id
        self._pool: list[CandidateScreen] = []

    @property
    def candidates(self) -> list[CandidateScreen]:
        return list(self._pool)

    def publish(self, candidates: Sequence[CandidateScreen]) -> None:
        """Replace the pool; order must match what was displayed."""
        self._pool = list(candidates)
        logger.debug(f"Session {self.session_id}: published {len(self._pool)} candidates")

    def select(self, index: int) -> CandidateScreen:
        """Resolve a 1-based selection against the current pool.

        Raises:
            SelectionOutOfRangeError: If index is outside the pool; the pool
                is left unchanged
        """
        if index < 1 or index > len(self._pool):
            raise SelectionOutOfRangeError(index, len(self._pool))
        return self._pool[index - 1]


class SessionRegistry:
    """Sessions keyed by caller or conversation id, least recently used evicted."""

    def __init__(self, max_sessions: int = MAX_SESSIONS):
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, DisambiguationSession] = OrderedDict()

    def get(self, session_id: str | None = None) -> DisambiguationSession:
        key = session_id or DEFAULT_SESSION_ID
        session = self._sessions.get(key)
        if session is None:
            session = self._sessions[key] = DisambiguationSession(key)
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug(f"Evicted disambiguation session {evicted}")
        else:
            self._sessions.move_to_end(key)
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
