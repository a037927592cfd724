"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when a client starts a game
- Holds the current canonical game state
- Applies human moves and plays AI seats
- Dropped when the game is ended or goes stale
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, MatchResult, TurnResult, play_match

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "MatchResult",
    "TurnResult",
    "play_match",
]
