"""
API Module - HTTP interface for game clients.

Exposes the engine via a REST API.
A client:
1. Lists the available rule variants
2. Creates a game with human and AI seats
3. Fetches legal moves and submits actions for human seats
4. Receives the events of every AI move and round end that followed
5. Reads the final standings

All state is held in memory by the session manager. No accounts required.
"""

from .schemas import (
    # Requests
    ActionRequest,
    CreateGameRequest,
    PlayerConfig,
    # Responses
    GameResponse,
    GameStateResponse,
    LegalMovesResponse,
    WinnerResponse,
    ErrorResponse,
    # Shared
    ActionInfo,
    EventInfo,
    PlayerInfo,
    # Enums
    ErrorCode,
    PlayerKind,
)
from .service import GameService
from .app import create_app

__all__ = [
    # Requests
    "ActionRequest",
    "CreateGameRequest",
    "PlayerConfig",
    # Responses
    "GameResponse",
    "GameStateResponse",
    "LegalMovesResponse",
    "WinnerResponse",
    "ErrorResponse",
    # Shared
    "ActionInfo",
    "EventInfo",
    "PlayerInfo",
    # Enums
    "ErrorCode",
    "PlayerKind",
    # Service
    "GameService",
    "create_app",
]
