"""
Scoring Engine - End-of-round and end-of-game scoring for both variants.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .action import Event, EventType
from .board import EndGameBonus, FloorLine, PatternLine, Wall, WallGrid
from .config import CLASSIC, SUMMER, ClassicConfig, SummerConfig
from .star_board import StarBoard, StarBonus
from .state import PlayerState


@dataclass
class WallTilingResult:
    """Outcome of one player's wall-tiling."""
    player: PlayerState
    discard: list[str] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    score_gained: int = 0


@dataclass
class ExcessTilesResult:
    player: PlayerState
    discard: tuple[str, ...] = ()
    penalty: int = 0


class ScoringEngine:
    """Stateless scoring helpers."""

    @staticmethod
    def wall_tiling(player: PlayerState, player_index: int,
                    config: ClassicConfig = CLASSIC) -> WallTilingResult:
        """
        Move every full pattern line to the wall, then charge the floor.

        Rows are processed top to bottom: a tile placed on an upper row is
        already on the wall when a lower row is scored.
        """
        wall: WallGrid = player.wall
        lines = list(player.pattern_lines)
        events: list[Event] = []
        discard: list[str] = []
        gained = 0

        for row, line in enumerate(player.pattern_lines):
            if not PatternLine.is_complete(line, row):
                continue
            color, leftovers = PatternLine.tile_to_wall(line)
            placement = Wall.place_tile(wall, row, color, config)
            wall = placement.wall
            gained += placement.score
            discard.extend(leftovers)
            lines[row] = ()
            events.append(Event(
                EventType.TILE_SCORED,
                player_index=player_index,
                details={"row": row, "col": placement.col, "color": color, "points": placement.score},
            ))

        penalty = FloorLine.calculate_penalty(player.floor_line, config)
        if penalty < 0:
            events.append(Event(
                EventType.FLOOR_PENALTY,
                player_index=player_index,
                details={"penalty": penalty},
            ))
        gained += penalty
        discard.extend(FloorLine.discard_tiles(player.floor_line))

        new_score = max(config.min_score, player.score + gained)
        new_player = player._copy_with(
            wall=wall,
            pattern_lines=tuple(lines),
            floor_line=(),
            score=new_score,
        )
        return WallTilingResult(
            player=new_player,
            discard=discard,
            events=events,
            score_gained=new_score - player.score,
        )

    @staticmethod
    def end_game_bonuses(wall: WallGrid, config: ClassicConfig = CLASSIC) -> EndGameBonus:
        return Wall.end_game_bonuses(wall, config)

    @staticmethod
    def star_bonuses(board: StarBoard, config: SummerConfig = SUMMER) -> StarBonus:
        return board.end_game_bonuses(config)

    @staticmethod
    def discard_excess_tiles(player: PlayerState, config: SummerConfig = SUMMER) -> ExcessTilesResult:
        """Hand tiles beyond corner storage are discarded at -1 point each."""
        if len(player.hand) <= config.corner_storage:
            return ExcessTilesResult(player=player)
        kept = player.hand[:config.corner_storage]
        excess = player.hand[config.corner_storage:]
        new_score = max(config.min_score, player.score - len(excess))
        return ExcessTilesResult(
            player=player._copy_with(hand=kept, score=new_score),
            discard=excess,
            penalty=player.score - new_score,
        )
