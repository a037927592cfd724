"""
Action System - Actions, events and results.

Actions represent player requests:
1. Classic: take every tile of a colour from a source onto a row or the floor
2. Summer: draft from a source, place on the star board, or pass

Events are read-only notifications describing what a transition did. They
never feed back into engine logic.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


FLOOR = "floor"


class ActionType(Enum):
    """Types of player actions."""
    TAKE = "take"  # Classic pick + stage
    DRAFT = "draft"  # Summer pick into hand
    PLACE = "place"  # Summer star placement
    PASS = "pass"  # Summer placement pass


class TileSource(Enum):
    FACTORY = "factory"
    CENTER = "center"


class EventType(Enum):
    """Observable effects of a transition."""
    INVALID_MOVE = "INVALID_MOVE"

    # Drafting
    TILES_PICKED = "TILES_PICKED"
    FIRST_PLAYER_TAKEN = "FIRST_PLAYER_TAKEN"
    FIRST_PLAYER_PENALTY = "FIRST_PLAYER_PENALTY"
    TILES_PLACED = "TILES_PLACED"
    TILES_TO_FLOOR = "TILES_TO_FLOOR"
    TILES_DRAFTED = "TILES_DRAFTED"

    # Summer placement
    PLACEMENT_PHASE_START = "PLACEMENT_PHASE_START"
    TILE_PLACED_STAR = "TILE_PLACED_STAR"
    DECORATION_BONUS = "DECORATION_BONUS"
    PLAYER_PASSED = "PLAYER_PASSED"

    # Turn and round lifecycle
    NEXT_TURN = "NEXT_TURN"
    ROUND_OVER = "ROUND_OVER"
    TILE_SCORED = "TILE_SCORED"
    FLOOR_PENALTY = "FLOOR_PENALTY"
    PLAYER_WALL_TILING = "PLAYER_WALL_TILING"
    EXCESS_TILES_DISCARDED = "EXCESS_TILES_DISCARDED"
    ROUND_START = "ROUND_START"
    END_GAME_BONUS = "END_GAME_BONUS"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are hashable values so a proposed action can be compared
    against the legal move list.
    """
    action_type: ActionType
    source: TileSource | None = None
    factory_index: int | None = None
    color: str | None = None
    target_row: int | str | None = None  # 0..4 or FLOOR

    # Summer placement
    star: str | None = None
    position: int | None = None
    tiles_used: int = 0
    wild_tiles_used: int = 0

    @classmethod
    def take(cls, source: TileSource, color: str, target_row: int | str,
             factory_index: int | None = None) -> Action:
        """Factory for a Classic pick."""
        return cls(
            action_type=ActionType.TAKE,
            source=source,
            factory_index=factory_index if source is TileSource.FACTORY else None,
            color=color,
            target_row=target_row,
        )

    @classmethod
    def draft(cls, source: TileSource, color: str, factory_index: int | None = None) -> Action:
        """Factory for a Summer draft."""
        return cls(
            action_type=ActionType.DRAFT,
            source=source,
            factory_index=factory_index if source is TileSource.FACTORY else None,
            color=color,
        )

    @classmethod
    def place(cls, star: str, position: int, color: str, tiles_used: int,
              wild_tiles_used: int = 0) -> Action:
        """Factory for a Summer star placement."""
        return cls(
            action_type=ActionType.PLACE,
            star=star,
            position=position,
            color=color,
            tiles_used=tiles_used,
            wild_tiles_used=wild_tiles_used,
        )

    @classmethod
    def pass_turn(cls) -> Action:
        return cls(action_type=ActionType.PASS)

    @property
    def to_floor(self) -> bool:
        return self.target_row == FLOOR

    def describe(self) -> str:
        """Short human-readable form, used in logs and the CLI."""
        if self.action_type is ActionType.PASS:
            return "pass"
        if self.action_type is ActionType.PLACE:
            return (
                f"place {self.color} on {self.star} #{self.position} "
                f"({self.tiles_used}+{self.wild_tiles_used} wild)"
            )
        where = (
            f"factory {self.factory_index}"
            if self.source is TileSource.FACTORY else "center"
        )
        if self.action_type is ActionType.DRAFT:
            return f"draft {self.color} from {where}"
        target = "floor" if self.to_floor else f"row {self.target_row}"
        return f"take {self.color} from {where} to {target}"


@dataclass(frozen=True)
class Event:
    """One observable effect of a transition."""
    event_type: EventType
    player_index: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def invalid(cls, error: str) -> Event:
        return cls(EventType.INVALID_MOVE, details={"error": error})


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    On failure new_state is the unmodified input state and events holds a
    single INVALID_MOVE event.
    """
    new_state: Any  # GameState
    events: list[Event] = field(default_factory=list)
    success: bool = True
    error: str | None = None

    @classmethod
    def failure(cls, state: Any, error: str) -> ActionResult:
        return cls(new_state=state, events=[Event.invalid(error)], success=False, error=error)

    @property
    def round_over(self) -> bool:
        return any(e.event_type is EventType.ROUND_OVER for e in self.events)


@dataclass
class RoundEndResult:
    """Result of the between-rounds processing."""
    new_state: Any  # GameState
    events: list[Event] = field(default_factory=list)
    game_over: bool = False
