"""In-memory holder for each session's current analysis"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional
from consigpro_gateway.domain.models import CalculationResult, ExtractedData
from consigpro_gateway.domain.margin import calculate_from_extracted
from consigpro_gateway.domain.exceptions import AnalysisNotFoundError, AnalysisSupersededError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Committed analysis plus the margins derived from it"""

    data: ExtractedData
    calculations: CalculationResult
    generation: int


@dataclass
class _SessionState:
    generation: int = 0
    snapshot: Optional[AnalysisSnapshot] = None
    touched_at: float = 0.0


class AnalysisStore:
    """
    Current analysis per session, last request wins.

    begin() hands out a new generation for every extraction request;
    commit() only stores a result whose generation is still the latest, so
    a slow request that resolves after a newer one is dropped.
    Failed requests never commit, leaving the previous snapshot in place.
    Generations come from one store-wide counter, so a session that expires
    and is recreated never reissues a generation still held in flight.
    """

    def __init__(self, ttl_seconds: float):
        self.ttl_seconds = ttl_seconds
        self._sessions: Dict[str, _SessionState] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def begin(self, session_id: str) -> int:
        """Register a new in-flight request and return its generation"""
        with self._lock:
            state = self._sessions.setdefault(session_id, _SessionState())
            state.generation = self._next_generation()
            state.touched_at = time.monotonic()
            return state.generation

    def commit(self, session_id: str, generation: int, data: ExtractedData) -> AnalysisSnapshot:
        """
        Store data as the session's current analysis.

        Raises:
            AnalysisSupersededError: A newer request was started for the session
        """
        calculations = calculate_from_extracted(data)

        with self._lock:
            state = self._sessions.get(session_id)
            if state is None or state.generation != generation:
                raise AnalysisSupersededError(
                    f"Request {generation} for session {session_id} was superseded"
                )
            state.snapshot = AnalysisSnapshot(data=data, calculations=calculations, generation=generation)
            state.touched_at = time.monotonic()
            return state.snapshot

    def get(self, session_id: str) -> AnalysisSnapshot:
        """
        Raises:
            AnalysisNotFoundError: Session has no committed analysis
        """
        with self._lock:
            state = self._sessions.get(session_id)
            if state is None or state.snapshot is None:
                raise AnalysisNotFoundError(f"No analysis for session {session_id}")
            state.touched_at = time.monotonic()
            return state.snapshot

    def clear(self, session_id: str) -> None:
        """Drop the current analysis; in-flight requests become stale too"""
        with self._lock:
            state = self._sessions.get(session_id)
            if state is not None:
                state.snapshot = None
                state.generation = self._next_generation()
                state.touched_at = time.monotonic()

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def cleanup_expired(self) -> int:
        """Remove idle sessions past the TTL. Returns number removed."""
        now = time.monotonic()
        with self._lock:
            expired = [
                sid for sid, state in self._sessions.items()
                if now - state.touched_at > self.ttl_seconds
            ]
            for sid in expired:
                del self._sessions[sid]

        if expired:
            logger.info(f"Expired {len(expired)} idle analysis sessions")
        return len(expired)
