"""
Classic Variant - Wall-tiling rules.

Players take every tile of one colour from a factory or the center and
stage them on a pattern line or the floor. When the display is empty the
round is over; full lines move to the wall and score by adjacency.
"""

from __future__ import annotations
import logging

from ..action import (
    FLOOR, Action, ActionType, Event, EventType, RoundEndResult, TileSource, ValidationResult,
)
from ..board import FloorLine, PatternLine, Wall
from ..config import CLASSIC, ClassicConfig
from ..end_game import EndGameDetector
from ..state import GameState, GamePhase, PlayerState, Variant
from ..turn_manager import TurnManager
from .base import GameVariant

logger = logging.getLogger(__name__)


class ClassicVariant(GameVariant):
    variant = Variant.CLASSIC
    display_name = "Classic"
    description = "Draft tiles onto pattern lines and tile a 5x5 wall."

    @property
    def config(self) -> ClassicConfig:
        return CLASSIC

    def legal_moves(self, state: GameState) -> list[Action]:
        if state.phase is not GamePhase.FACTORY_OFFER:
            return []

        player = state.current_player
        moves: list[Action] = []

        sources: list[tuple[TileSource, int | None, tuple[str, ...]]] = [
            (TileSource.FACTORY, i, factory)
            for i, factory in enumerate(state.display.factories)
        ]
        sources.append((TileSource.CENTER, None, state.display.center))

        for source, factory_index, tiles in sources:
            for color in dict.fromkeys(tiles):
                for row in PatternLine.legal_rows(color, player.pattern_lines, player.wall):
                    moves.append(Action.take(source, color, row, factory_index))
                moves.append(Action.take(source, color, FLOOR, factory_index))
        return moves

    def validate_move(self, state: GameState, action: Action) -> ValidationResult:
        if state.phase is GamePhase.GAME_OVER:
            return ValidationResult.fail("Game is over")
        if state.phase is not GamePhase.FACTORY_OFFER:
            return ValidationResult.fail(f"Cannot take tiles during {state.phase.value}")
        if action.action_type is not ActionType.TAKE:
            return ValidationResult.fail(f"Action {action.action_type.value} is not allowed in the classic variant")

        display = state.display
        if action.source is TileSource.FACTORY:
            if not display.has_factory(action.factory_index):
                return ValidationResult.fail(f"Invalid factory index: {action.factory_index}")
            tiles = display.factories[action.factory_index]
        elif action.source is TileSource.CENTER:
            tiles = display.center
        else:
            return ValidationResult.fail("Unknown tile source")

        if not action.color or action.color not in tiles:
            return ValidationResult.fail(f"No {action.color} tiles in the selected source")

        if action.to_floor:
            return ValidationResult.ok()

        row = action.target_row
        if isinstance(row, bool) or not isinstance(row, int) or not 0 <= row < len(self.config.pattern_line_sizes):
            return ValidationResult.fail(f"Invalid target row: {row}")

        player = state.current_player
        line = player.pattern_lines[row]
        if line and line[0] != action.color:
            return ValidationResult.fail(f"Row {row} already holds {line[0]}")
        if not Wall.can_place_color(player.wall, row, action.color):
            return ValidationResult.fail(f"Wall row {row} already has {action.color}")
        if PatternLine.is_complete(line, row):
            return ValidationResult.fail(f"Row {row} is full")
        return ValidationResult.ok()

    def apply_action(self, state: GameState, action: Action) -> tuple[GameState, list[Event]]:
        idx = state.current_player_idx
        player = state.current_player
        events: list[Event] = []

        if action.source is TileSource.FACTORY:
            pick = state.display.pick_from_factory(action.factory_index, action.color)
        else:
            pick = state.display.pick_from_center(action.color)

        events.append(Event(
            EventType.TILES_PICKED,
            player_index=idx,
            details={
                "source": action.source.value,
                "factory_index": action.factory_index,
                "color": action.color,
                "count": len(pick.taken),
                "spilled": len(pick.spilled),
            },
        ))
        if pick.took_first_player:
            player = player._copy_with(has_first_player=True)
            events.append(Event(EventType.FIRST_PLAYER_TAKEN, player_index=idx))

        player, discarded, floor_events = self._stage(player, idx, action, pick.taken, pick.took_first_player)
        events.extend(floor_events)

        state = state._copy_with(
            display=pick.display,
            supply=state.supply.with_discarded(discarded),
        ).with_player_at(idx, player)

        if state.display.all_empty():
            state = state._copy_with(phase=GamePhase.WALL_TILING)
            events.append(Event(EventType.ROUND_OVER, details={"round": state.round_number}))
        else:
            state = state._copy_with(current_player_idx=TurnManager.next_player(state))
            events.append(Event(EventType.NEXT_TURN, player_index=state.current_player_idx))
        return state, events

    def _stage(
        self,
        player: PlayerState,
        idx: int,
        action: Action,
        taken: tuple[str, ...],
        with_marker: bool,
    ) -> tuple[PlayerState, tuple[str, ...], list[Event]]:
        """Put taken tiles on the target row, overflow and marker on the floor."""
        events: list[Event] = []
        if action.to_floor:
            to_floor = taken
        else:
            placement = PatternLine.place(
                player.pattern_lines[action.target_row], taken, action.color, action.target_row,
            )
            player = player.with_pattern_line(action.target_row, placement.line)
            to_floor = placement.overflow
            events.append(Event(
                EventType.TILES_PLACED,
                player_index=idx,
                details={"row": action.target_row, "color": action.color, "count": placement.placed},
            ))

        floor, discarded = FloorLine.add(player.floor_line, to_floor, with_marker=with_marker)
        if to_floor:
            events.append(Event(
                EventType.TILES_TO_FLOOR,
                player_index=idx,
                details={"color": action.color, "count": len(to_floor), "discarded": len(discarded)},
            ))
        return player._copy_with(floor_line=floor), discarded, events

    def is_round_over(self, state: GameState) -> bool:
        if state.phase is GamePhase.FACTORY_OFFER:
            return state.display.all_empty()
        return state.phase is GamePhase.WALL_TILING

    def is_game_over(self, state: GameState) -> bool:
        return state.phase is GamePhase.GAME_OVER

    def run_scoring_phase(self, state: GameState) -> RoundEndResult:
        state, events = TurnManager.process_wall_tiling(state)

        if EndGameDetector.should_end_classic(state):
            state, end_events = EndGameDetector.apply_classic_end_game(state)
            return RoundEndResult(new_state=state, events=events + end_events, game_over=True)

        holder = TurnManager.first_player_holder(state)
        first = holder if holder is not None else 0
        state, start_events = TurnManager.start_round(state, state.round_number + 1, first)
        events.extend(start_events)

        if state.display.all_empty():
            logger.warning("Game %s: no tiles left to deal, ending game", state.game_id)
            state, end_events = EndGameDetector.apply_classic_end_game(state)
            return RoundEndResult(new_state=state, events=events + end_events, game_over=True)

        return RoundEndResult(new_state=state, events=events)

    def tiebreak(self, player: PlayerState) -> int:
        return Wall.count_complete_rows(player.wall)
