"""
End Game Detector - Termination predicates and final bonuses.
"""

from __future__ import annotations
import logging

from .action import Event, EventType
from .board import Wall
from .config import SUMMER
from .scoring import ScoringEngine
from .state import GameState, GamePhase

logger = logging.getLogger(__name__)


class EndGameDetector:

    @staticmethod
    def should_end_classic(state: GameState) -> bool:
        """Any player has at least one complete horizontal row."""
        return any(Wall.has_complete_row(p.wall) for p in state.players)

    @staticmethod
    def should_end_summer(state: GameState) -> bool:
        return state.round_number >= SUMMER.rounds

    @staticmethod
    def apply_classic_end_game(state: GameState) -> tuple[GameState, list[Event]]:
        """Add row/column/colour bonuses and finish the game."""
        events: list[Event] = []
        players = []
        for i, player in enumerate(state.players):
            bonus = ScoringEngine.end_game_bonuses(player.wall)
            players.append(player._copy_with(
                score=player.score + bonus.bonus,
                end_game_bonus=bonus.bonus,
            ))
            events.append(Event(
                EventType.END_GAME_BONUS,
                player_index=i,
                details={
                    "bonus": bonus.bonus,
                    "rows": bonus.rows,
                    "columns": bonus.columns,
                    "colors": bonus.colors,
                },
            ))
        return EndGameDetector._finish(state._copy_with(players=tuple(players)), events)

    @staticmethod
    def apply_summer_end_game(state: GameState) -> tuple[GameState, list[Event]]:
        """Add completed-star and number-coverage bonuses and finish the game."""
        events: list[Event] = []
        players = []
        for i, player in enumerate(state.players):
            bonus = ScoringEngine.star_bonuses(player.star_board)
            players.append(player._copy_with(
                score=player.score + bonus.total,
                end_game_bonus=bonus.total,
            ))
            events.append(Event(
                EventType.END_GAME_BONUS,
                player_index=i,
                details={
                    "bonus": bonus.total,
                    "star_bonuses": dict(bonus.star_bonuses),
                    "number_bonuses": dict(bonus.number_bonuses),
                },
            ))
        return EndGameDetector._finish(state._copy_with(players=tuple(players)), events)

    @staticmethod
    def _finish(state: GameState, events: list[Event]) -> tuple[GameState, list[Event]]:
        state = state._copy_with(phase=GamePhase.GAME_OVER)
        scores = [p.score for p in state.players]
        events.append(Event(EventType.GAME_OVER, details={"scores": scores}))
        logger.info("Game %s over after round %d: scores %s", state.game_id, state.round_number, scores)
        return state, events
