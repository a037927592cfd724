"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between HTTP clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- INVALID_MOVE: Proposed action failed validation
- NOT_HUMAN_TURN: An action was submitted while an AI seat is to move
- VALIDATION_ERROR: Malformed request (unknown variant, player type, ...)
"""

from enum import Enum
from typing import Optional, Any, Union
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_MOVE = "INVALID_MOVE"
    NOT_HUMAN_TURN = "NOT_HUMAN_TURN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PlayerKind(str, Enum):
    """Who controls a seat."""
    HUMAN = "human"
    AI_EASY = "ai-easy"
    AI_MEDIUM = "ai-medium"
    AI_HARD = "ai-hard"


# =============================================================================
# Requests
# =============================================================================

class PlayerConfig(BaseModel):
    """One seat of a new game."""
    name: str = Field(min_length=1, max_length=40)
    type: PlayerKind = PlayerKind.HUMAN


class CreateGameRequest(BaseModel):
    """Request to create a game."""
    variant: str = Field(default="classic", description="classic or summer")
    players: list[PlayerConfig] = Field(min_length=2, max_length=4)
    seed: Optional[int] = Field(default=None, description="Fix the shuffle for reproducible games")


class ActionRequest(BaseModel):
    """
    A proposed action.

    Classic: action_type=take with source, color, target_row (0-4 or "floor").
    Summer: action_type=draft (source, color), place (star, position, color,
    tiles_used, wild_tiles_used) or pass.
    """
    action_type: str = Field(description="take, draft, place or pass")
    source: Optional[str] = Field(default=None, description="factory or center")
    factory_index: Optional[int] = None
    color: Optional[str] = None
    target_row: Optional[Union[int, str]] = None
    star: Optional[str] = None
    position: Optional[int] = None
    tiles_used: int = 0
    wild_tiles_used: int = 0


# =============================================================================
# Shared Models
# =============================================================================

class ActionInfo(ActionRequest):
    """A legal action with a readable description."""
    description: str = ""


class EventInfo(BaseModel):
    """One observable effect of a transition."""
    event_type: str
    player_index: Optional[int] = None
    details: dict[str, Any] = Field(default_factory=dict)


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    player_type: str
    score: int = 0
    is_current_turn: bool = False
    has_first_player: bool = False

    # Classic
    pattern_lines: list[list[str]] = Field(default_factory=list)
    wall: list[list[Optional[str]]] = Field(default_factory=list)
    floor_line: list[str] = Field(default_factory=list)

    # Summer
    star_board: Optional[dict[str, list[Optional[str]]]] = None
    hand: list[str] = Field(default_factory=list)
    has_passed: bool = False

    end_game_bonus: int = 0


class RankingInfo(BaseModel):
    player_index: int
    name: str
    score: int
    complete_rows: int = 0
    end_game_bonus: int = 0


class VariantInfo(BaseModel):
    id: str
    name: str
    description: str = ""
    colors: list[str] = Field(default_factory=list)
    min_players: int = 2
    max_players: int = 4


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Full game state view."""
    game_id: str
    variant: str
    phase: str
    round_number: int
    current_player_index: int
    players: list[PlayerInfo]

    factories: list[list[str]] = Field(default_factory=list)
    center: list[str] = Field(default_factory=list)
    center_has_first_player: bool = False

    wild_color: Optional[str] = None
    bonus_supply: list[str] = Field(default_factory=list)

    bag_count: int = 0
    discard_count: int = 0
    turn_count: int = 0
    is_game_over: bool = False


class GameResponse(BaseModel):
    """Result of creating a game or submitting an action."""
    success: bool = True
    game_id: str
    state: GameStateResponse
    events: list[EventInfo] = Field(default_factory=list)
    ai_actions: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    winners: list[int] = Field(default_factory=list)


class LegalMovesResponse(BaseModel):
    game_id: str
    current_player_index: int
    moves: list[ActionInfo] = Field(default_factory=list)
    count: int = 0


class WinnerResponse(BaseModel):
    """Standings. Several winners means a shared victory."""
    game_id: str
    is_game_over: bool
    winners: list[int]
    is_tie: bool
    rankings: list[RankingInfo] = Field(default_factory=list)


class GameListResponse(BaseModel):
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    success: bool
    game_id: str


class VariantListResponse(BaseModel):
    variants: list[VariantInfo]


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "tessera"
    version: str
    environment: str


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
