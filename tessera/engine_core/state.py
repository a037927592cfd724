"""
Game State - Immutable value describing a match at a point in time.

Design principles:
- Immutable: frozen dataclasses over tuples; every transition builds a new
  value and shares the subtrees it did not touch
- Serializable: plain values only (strings, ints, tuples, dicts)
- Variant-aware: Classic and Summer fields live side by side on the player,
  the unused ones stay at their empty defaults
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .board import PatternLine, Wall, WallGrid
from .config import CLASSIC, SUMMER, FIRST_PLAYER_MARKER
from .errors import InvariantViolation
from .factory import FactoryDisplay
from .star_board import StarBoard
from .supply import TileSupply


class Variant(Enum):
    """Rule variants."""
    CLASSIC = "classic"
    SUMMER = "summer"


class GamePhase(Enum):
    """High-level round phases."""
    FACTORY_OFFER = "factory-offer"
    WALL_TILING = "wall-tiling"
    PLACEMENT = "placement"
    ROUND_END = "round-end"
    GAME_OVER = "game-over"


class PlayerType(Enum):
    """Who controls a seat."""
    HUMAN = "human"
    AI_EASY = "ai-easy"
    AI_MEDIUM = "ai-medium"
    AI_HARD = "ai-hard"

    @property
    def is_ai(self) -> bool:
        return self is not PlayerType.HUMAN


ROUND_OVER_PHASES = frozenset({GamePhase.WALL_TILING, GamePhase.ROUND_END})


@dataclass(frozen=True)
class TurnRecord:
    """One entry of the append-only turn log."""
    action: Any  # Action
    player_index: int
    round_number: int
    timestamp: float = 0.0


@dataclass(frozen=True)
class PlayerState:
    """
    State for a single seat.

    Classic uses pattern_lines/wall/floor_line; Summer uses
    star_board/hand/has_passed. has_first_player is shared.
    """
    player_id: str
    name: str
    player_type: PlayerType = PlayerType.HUMAN
    score: int = 0

    # Classic
    pattern_lines: tuple[tuple[str, ...], ...] = field(default_factory=PatternLine.empty)
    wall: WallGrid = field(default_factory=Wall.empty)
    floor_line: tuple[str, ...] = ()

    # Summer
    star_board: StarBoard | None = None
    hand: tuple[str, ...] = ()
    has_passed: bool = False

    has_first_player: bool = False
    end_game_bonus: int = 0

    @property
    def is_human(self) -> bool:
        return self.player_type is PlayerType.HUMAN

    def _copy_with(self, **kwargs) -> PlayerState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def with_pattern_line(self, row: int, line: tuple[str, ...]) -> PlayerState:
        lines = self.pattern_lines[:row] + (line,) + self.pattern_lines[row + 1:]
        return self._copy_with(pattern_lines=lines)

    def tiles(self) -> list[str]:
        """Every tile this player holds, across all of their structures."""
        tiles = [t for line in self.pattern_lines for t in line]
        tiles.extend(cell for row in self.wall for cell in row if cell is not None)
        tiles.extend(t for t in self.floor_line if t != FIRST_PLAYER_MARKER)
        tiles.extend(self.hand)
        if self.star_board is not None:
            tiles.extend(self.star_board.tiles())
        return tiles


@dataclass(frozen=True)
class GameState:
    """
    Complete match state.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    variant: Variant

    phase: GamePhase = GamePhase.FACTORY_OFFER
    round_number: int = 1
    current_player_idx: int = 0

    players: tuple[PlayerState, ...] = ()

    display: FactoryDisplay = field(default_factory=FactoryDisplay)
    supply: TileSupply = field(default_factory=TileSupply)

    # Summer
    wild_color: str | None = None
    bonus_supply: tuple[str, ...] = ()

    # History (append-only)
    turn_log: tuple[TurnRecord, ...] = ()

    # Seed for the next shuffle; advanced every time randomness is consumed
    rng_seed: int = 0

    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_round_over(self) -> bool:
        return self.phase in ROUND_OVER_PHASES

    @property
    def is_game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    @property
    def config(self):
        return SUMMER if self.variant is Variant.SUMMER else CLASSIC

    def with_player_at(self, index: int, player: PlayerState) -> GameState:
        """Return new state with the seat at index replaced."""
        players = self.players[:index] + (player,) + self.players[index + 1:]
        return self._copy_with(players=players)

    def with_turn(self, record: TurnRecord) -> GameState:
        return self._copy_with(turn_log=self.turn_log + (record,))

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def tile_counts(self) -> Counter:
        """Multiset of every tile in the match, wherever it sits."""
        counts: Counter = Counter(self.supply.bag)
        counts.update(self.supply.discard)
        for factory in self.display.factories:
            counts.update(factory)
        counts.update(self.display.center)
        counts.update(self.bonus_supply)
        for player in self.players:
            counts.update(player.tiles())
        return counts

    def without_timestamps(self) -> GameState:
        """Copy with turn-log timestamps zeroed, for structural comparison."""
        return self._copy_with(
            turn_log=tuple(replace(r, timestamp=0.0) for r in self.turn_log)
        )


def initial_tile_counts(variant: Variant) -> Counter:
    config = SUMMER if variant is Variant.SUMMER else CLASSIC
    return Counter({color: config.tiles_per_color for color in config.colors})


def assert_conservation(state: GameState) -> None:
    """Raise InvariantViolation if any tile was created or lost."""
    expected = initial_tile_counts(state.variant)
    actual = state.tile_counts()
    if actual != expected:
        raise InvariantViolation(
            f"Tile count mismatch: expected {dict(expected)}, found {dict(actual)}"
        )
