"""
Heuristic Evaluator - Scores game states for bot decision-making.

The evaluator assigns a numeric score to a position from one player's
point of view.

Classic signals:
- Current score
- Pattern-line completion potential
- Wall adjacency potential (rows and columns close to completion)
- Floor-line penalty
- End-game bonus progress

Summer signals:
- Current score
- Ring progress on the star board
- Hand tiles that can still be stored after the round

Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.board import FloorLine, Wall
from ..engine_core.config import CLASSIC, SUMMER
from ..engine_core.reducer import apply_action
from ..engine_core.star_board import POSITIONS, STARS
from ..engine_core.state import Variant

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.board import WallGrid
    from ..engine_core.state import GameState, PlayerState


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    # Shared
    score: float = 1.0

    # Classic
    pattern_lines: float = 0.8
    wall_potential: float = 0.6
    floor_penalty: float = 1.2
    end_game_progress: float = 0.5

    # Summer
    ring_progress: float = 0.5
    hand_tiles: float = 0.2


@dataclass
class StateEvaluation:
    """
    Result of evaluating a game state.
    """
    total_score: float
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class HeuristicEvaluator:
    """
    Evaluates game states using weighted heuristics.

    Deterministic and read-only: the inspected state is never modified.
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, state: GameState, player_index: int) -> float:
        """Score the position for player_index (higher is better)."""
        return self.evaluate_detailed(state, player_index).total_score

    def evaluate_detailed(self, state: GameState, player_index: int) -> StateEvaluation:
        player = state.players[player_index]
        if state.variant is Variant.SUMMER:
            features = self._summer_features(player)
        else:
            features = self._classic_features(player)

        w = self.weights
        weights = {
            "score": w.score,
            "pattern_lines": w.pattern_lines,
            "wall_potential": w.wall_potential,
            "floor_penalty": w.floor_penalty,
            "end_game_progress": w.end_game_progress,
            "ring_progress": w.ring_progress,
            "hand_tiles": w.hand_tiles,
        }
        total = sum(value * weights[name] for name, value in features.items())
        return StateEvaluation(total_score=total, feature_breakdown=features)

    def evaluate_action(self, state: GameState, action: Action, player_index: int) -> float:
        """
        Evaluate an action by applying it and evaluating resulting state.

        This is the core of 1-ply lookahead.
        """
        result = apply_action(state, action)
        if not result.success:
            return float("-inf")  # Invalid action
        return self.evaluate(result.new_state, player_index)

    # ------------------------------------------------------------------
    # Classic
    # ------------------------------------------------------------------

    def _classic_features(self, player: PlayerState) -> dict[str, float]:
        return {
            "score": float(player.score),
            "pattern_lines": self.pattern_line_value(player),
            "wall_potential": self.wall_potential(player.wall),
            "floor_penalty": float(FloorLine.calculate_penalty(player.floor_line)),
            "end_game_progress": self.end_game_progress(player.wall),
        }

    @staticmethod
    def pattern_line_value(player: PlayerState) -> float:
        value = 0.0
        for row, line in enumerate(player.pattern_lines):
            if not line:
                continue
            if not Wall.can_place_color(player.wall, row, line[0]):
                continue
            progress = len(line) / (row + 1)
            value += progress * 2
            if progress >= 0.8:
                value += 1.5
        return value

    @staticmethod
    def wall_potential(wall: WallGrid) -> float:
        value = 0.0
        for row in range(len(wall)):
            filled = Wall.row_filled(wall, row)
            if filled >= 3:
                value += (filled - 2) * 1.5
            if filled == 4:
                value += 3
        for col in range(len(wall[0])):
            filled = Wall.column_filled(wall, col)
            if filled >= 3:
                value += (filled - 2) * 1.0
        return value

    @staticmethod
    def end_game_progress(wall: WallGrid) -> float:
        value = 0.0
        for row in range(len(wall)):
            filled = Wall.row_filled(wall, row)
            if filled >= 3:
                value += filled * 0.4
        for col in range(len(wall[0])):
            filled = Wall.column_filled(wall, col)
            if filled >= 3:
                value += filled * 0.6
        for color in CLASSIC.colors:
            count = Wall.color_filled(wall, color)
            if count >= 3:
                value += count * 0.8
        return value

    # ------------------------------------------------------------------
    # Summer
    # ------------------------------------------------------------------

    def _summer_features(self, player: PlayerState) -> dict[str, float]:
        return {
            "score": float(player.score),
            "ring_progress": self.ring_progress(player),
            "hand_tiles": float(min(len(player.hand), SUMMER.corner_storage)),
        }

    @staticmethod
    def ring_progress(player: PlayerState) -> float:
        """Filled fraction of each ring, squared so nearly full rings stand out."""
        board = player.star_board
        if board is None:
            return 0.0
        size = len(POSITIONS)
        return sum((board.filled_count(star) / size) ** 2 * size for star in STARS)
