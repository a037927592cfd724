"""
Greedy Strategy - Medium tier, one-ply lookahead.

Classic moves are scored by simulating only their local effect on the
mover's own board (no state copy). Summer moves are applied and the
resulting position evaluated.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..engine_core.action import ActionType, TileSource
from ..engine_core.board import FloorLine, PatternLine, Wall
from ..engine_core.state import Variant
from .evaluator import HeuristicEvaluator
from .policy import BotDecision, Difficulty, MoveStrategy

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState


FLOOR_DUMP_PENALTY = 5.0
FIRST_PLAYER_PENALTY = 1.5
DENIAL_WEIGHT = 0.3


def tiles_taken(state: GameState, move: Action) -> int:
    """How many tiles of the move's colour its source holds."""
    if move.source is TileSource.FACTORY:
        tiles = state.display.factories[move.factory_index]
    else:
        tiles = state.display.center
    return sum(1 for t in tiles if t == move.color)


class MediumStrategy(MoveStrategy):
    """Best immediate move; ties broken at random."""

    difficulty = Difficulty.MEDIUM
    delay_range = (0.8, 1.5)

    def __init__(self, evaluator: HeuristicEvaluator | None = None, seed: int | None = None):
        super().__init__(seed)
        self.evaluator = evaluator or HeuristicEvaluator()

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        scored = [(self.score_move(state, move), move) for move in legal_actions]
        best_score = max(score for score, _ in scored)
        best = [move for score, move in scored if score == best_score]

        return BotDecision(
            action=self.rng.choice(best),
            explanation=f"Greedy choice among {len(best)} best move(s)",
            evaluated_actions=len(legal_actions),
            best_score=best_score,
        )

    def score_move(self, state: GameState, move: Action) -> float:
        """One-ply value of move for the current player."""
        if state.variant is Variant.SUMMER or move.action_type is not ActionType.TAKE:
            return self.evaluator.evaluate_action(state, move, state.current_player_idx)
        return self._score_take(state, move)

    def _score_take(self, state: GameState, move: Action) -> float:
        player = state.current_player
        count = tiles_taken(state, move)
        floor_len = len(player.floor_line)

        if move.to_floor:
            return FloorLine.calculate_penalty(("x",) * (floor_len + count)) - FLOOR_DUMP_PENALTY

        row = move.target_row
        capacity = PatternLine.capacity(row)
        current = len(player.pattern_lines[row])
        placeable = min(count, capacity - current)
        overflow = count - placeable
        score = 0.0

        if current + placeable == capacity:
            score += Wall.place_tile(player.wall, row, move.color).score * 2
        else:
            score += placeable * 0.5
            score += (current + placeable) / capacity * 1.5

        if overflow > 0:
            before = FloorLine.calculate_penalty(("x",) * floor_len)
            after = FloorLine.calculate_penalty(("x",) * (floor_len + overflow))
            score += after - before

        if move.source is TileSource.CENTER and state.display.center_has_first_player:
            score -= FIRST_PLAYER_PENALTY

        score += self._denial(state, move, count) * DENIAL_WEIGHT
        return score

    @staticmethod
    def _denial(state: GameState, move: Action, count: int) -> float:
        """Value of taking tiles an opponent needs to finish a started line."""
        value = 0.0
        for i, opponent in enumerate(state.players):
            if i == state.current_player_idx:
                continue
            for row, line in enumerate(opponent.pattern_lines):
                if line and line[0] == move.color:
                    needed = PatternLine.capacity(row) - len(line)
                    value += min(count, needed) * 0.5
        return value
