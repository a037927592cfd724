"""
Engine Core - Deterministic game state management for both rule variants.

The engine is the runtime that:
1. Creates a GameState for a variant
2. Generates and validates legal actions
3. Applies actions via the reducer
4. Scores rounds and detects the end of the game
"""

from .config import CLASSIC, SUMMER, ClassicConfig, SummerConfig, FIRST_PLAYER_MARKER
from .errors import InvariantViolation
from .state import (
    GameState, GamePhase, PlayerState, PlayerType, TurnRecord, Variant, assert_conservation,
)
from .action import (
    FLOOR, Action, ActionType, ActionResult, Event, EventType, RoundEndResult,
    TileSource, ValidationResult,
)
from .supply import TileSupply
from .factory import FactoryDisplay, PickResult
from .board import FloorLine, PatternLine, Wall
from .star_board import StarBoard, payment_for
from .rules import GameRules, PlayerRanking, WinnerResult, determine_winner, get_legal_moves, validate_move
from .reducer import Reducer, apply_action, create_game, process_round_end
from .variants import GameVariant, get_variant, list_variants

__all__ = [
    "CLASSIC",
    "SUMMER",
    "ClassicConfig",
    "SummerConfig",
    "FIRST_PLAYER_MARKER",
    "InvariantViolation",
    "GameState",
    "GamePhase",
    "PlayerState",
    "PlayerType",
    "TurnRecord",
    "Variant",
    "assert_conservation",
    "FLOOR",
    "Action",
    "ActionType",
    "ActionResult",
    "Event",
    "EventType",
    "RoundEndResult",
    "TileSource",
    "ValidationResult",
    "TileSupply",
    "FactoryDisplay",
    "PickResult",
    "FloorLine",
    "PatternLine",
    "Wall",
    "StarBoard",
    "payment_for",
    "GameRules",
    "PlayerRanking",
    "WinnerResult",
    "determine_winner",
    "get_legal_moves",
    "validate_move",
    "Reducer",
    "apply_action",
    "create_game",
    "process_round_end",
    "GameVariant",
    "get_variant",
    "list_variants",
]
