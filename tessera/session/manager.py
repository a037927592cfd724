"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. A client starts a session -> a GameState is created (in-memory only)
2. During the game:
   - Human moves are validated and applied by the reducer
   - Round ends are processed as soon as a round-over phase is reported
   - AI seats are played by the dispatcher
3. Game ends -> session is kept until ended or cleaned up as stale

PERSISTENCE RULES:
- No database; sessions live for the lifetime of the process
- The canonical state is the GameState value held by the session
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Any, Callable, Iterable
import uuid

from ..engine_core.action import Event
from ..engine_core.reducer import PlayerSpec, Reducer
from ..engine_core.state import GameState, Variant

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # Client quit


@dataclass
class Session:
    """
    One match being played.

    Holds the current canonical state and the events produced so far, so
    clients polling the session can catch up.
    """
    session_id: str
    game_state: GameState
    created_at: float

    state: SessionState = SessionState.ACTIVE
    events: list[Event] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state is SessionState.ACTIVE

    def is_human_turn(self) -> bool:
        """Check if the seat to move is controlled by a human."""
        if self.game_state.is_game_over:
            return False
        return self.game_state.current_player.is_human

    def record(self, new_state: GameState, events: Iterable[Event]) -> None:
        self.game_state = new_state
        self.events.extend(events)
        if new_state.is_game_over:
            self.state = SessionState.GAME_OVER


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up completed sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, reducer: Reducer | None = None, clock: Callable[[], float] = time.time):
        self.reducer = reducer or Reducer()
        self.clock = clock
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        variant: Variant | str,
        players: Iterable[PlayerSpec],
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Raises ValueError for an unknown variant or a bad player list.
        """
        session_id = str(uuid.uuid4())
        game_state = self.reducer.create_game(variant, players, seed=seed, game_id=session_id)
        session = Session(
            session_id=session_id,
            game_state=game_state,
            created_at=self.clock(),
        )
        self._sessions[session_id] = session
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> Session | None:
        """
        End a session and remove it from memory.

        Returns the removed session, or None if it did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session:
            if reason != "completed" and session.state is SessionState.ACTIVE:
                session.state = SessionState.ABANDONED
            logger.info("Session %s ended (%s)", session_id, reason)
        return session

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Called periodically to free memory. Returns the number removed.
        """
        now = self.clock()
        to_remove = [
            sid for sid, session in self._sessions.items()
            if now - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
