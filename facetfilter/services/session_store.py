"""
Filter session store.

Each UI session owns an independent FilterStateMachine. Machines share the
read-only Value Index and nothing else. Sessions live in memory only and
are evicted least-recently-used once the store is full.
"""

import logging
import uuid
from collections import OrderedDict

from facetfilter.filtering.state_machine import FilterStateMachine
from facetfilter.filtering.value_index import ValueIndex
from facetfilter.models.errors import SessionNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000


class FilterSessionStore:
    """In-memory mapping of session id -> FilterStateMachine."""

    def __init__(self, index: ValueIndex, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be positive, got {max_sessions}")
        self.index = index
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, FilterStateMachine] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self) -> tuple[str, FilterStateMachine]:
        """Start a new session with an all-unset selection."""
        session_id = uuid.uuid4().hex
        machine = FilterStateMachine(self.index)
        self._sessions[session_id] = machine

        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("session_evicted", extra={"session_id": evicted})

        logger.info("session_created", extra={"session_id": session_id})
        return session_id, machine

    def get(self, session_id: str) -> FilterStateMachine:
        """
        Look up a session and mark it recently used.

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        machine = self._sessions.get(session_id)
        if machine is None:
            raise SessionNotFoundError(session_id)
        self._sessions.move_to_end(session_id)
        return machine

    def delete(self, session_id: str) -> None:
        """
        Remove a session.

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
