"""
Minimax Strategy - Hard tier.

Depth-limited minimax with alpha-beta pruning under a wall-clock budget.
The budget is checked on entry to every node and before each child; when
it runs out the best root move found so far is returned.
"""

from __future__ import annotations
import logging
import time
from typing import TYPE_CHECKING, Callable

from ..engine_core.reducer import apply_action
from ..engine_core.rules import get_legal_moves
from .evaluator import HeuristicEvaluator
from .greedy import MediumStrategy
from .policy import BotDecision, Difficulty, MoveStrategy

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


DEFAULT_DEPTH = 2
DEFAULT_TIME_LIMIT_MS = 2000
BRANCH_LIMIT = 10


class HardStrategy(MoveStrategy):
    """Alpha-beta search over the top moves by one-ply value."""

    difficulty = Difficulty.HARD
    delay_range = (1.0, 2.0)

    def __init__(
        self,
        evaluator: HeuristicEvaluator | None = None,
        max_depth: int = DEFAULT_DEPTH,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        branch_limit: int = BRANCH_LIMIT,
        clock: Callable[[], float] = time.monotonic,
        seed: int | None = None,
    ):
        super().__init__(seed)
        self.evaluator = evaluator or HeuristicEvaluator()
        self.max_depth = max_depth
        self.time_limit_ms = time_limit_ms
        self.branch_limit = branch_limit
        self.clock = clock
        # Pre-scores for move ordering and pruning
        self.prescorer = MediumStrategy(self.evaluator, seed=seed)
        self._deadline = float("inf")
        self.nodes = 0

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")
        if len(legal_actions) == 1:
            return BotDecision(action=legal_actions[0], explanation="Only legal move", evaluated_actions=1)

        self._deadline = self.clock() + self.time_limit_ms / 1000.0
        self.nodes = 0
        player_index = state.current_player_idx

        ordered = self.order_moves(state, legal_actions)
        best_action = ordered[0]
        best_score = float("-inf")
        searched = 0

        for move in ordered:
            if self.time_up():
                logger.debug("Search timed out after %d root moves (%d nodes)", searched, self.nodes)
                break
            result = apply_action(state, move)
            score = self.minimax(result.new_state, self.max_depth - 1, float("-inf"), float("inf"), player_index)
            searched += 1
            if score > best_score:
                best_score = score
                best_action = move

        return BotDecision(
            action=best_action,
            explanation=f"Minimax depth {self.max_depth}",
            evaluated_actions=searched,
            best_score=best_score,
            evaluation_details={"nodes": self.nodes, "timed_out": searched < len(ordered)},
        )

    def minimax(self, state: GameState, depth: int, alpha: float, beta: float, player_index: int) -> float:
        """
        Value of state for player_index.

        A node maximizes when player_index is the one to move there; the
        mover is read from the state, not inferred from depth.
        """
        self.nodes += 1
        if depth <= 0 or state.is_round_over or state.is_game_over or self.time_up():
            return self.evaluator.evaluate(state, player_index)

        moves = get_legal_moves(state)
        if not moves:
            return self.evaluator.evaluate(state, player_index)
        if len(moves) > self.branch_limit:
            moves = self.order_moves(state, moves)[:self.branch_limit]

        maximizing = state.current_player_idx == player_index
        best = float("-inf") if maximizing else float("inf")
        for move in moves:
            if self.time_up():
                break
            child = apply_action(state, move).new_state
            value = self.minimax(child, depth - 1, alpha, beta, player_index)
            if maximizing:
                best = max(best, value)
                alpha = max(alpha, value)
            else:
                best = min(best, value)
                beta = min(beta, value)
            if beta <= alpha:
                break

        if best in (float("inf"), float("-inf")):
            # out of time before any child was explored
            return self.evaluator.evaluate(state, player_index)
        return best

    def order_moves(self, state: GameState, moves: list[Action]) -> list[Action]:
        """Moves sorted by one-ply value, best first."""
        scored = [(self.prescorer.score_move(state, m), i, m) for i, m in enumerate(moves)]
        scored.sort(key=lambda item: (-item[0], item[1]))
        return [m for _, _, m in scored]

    def time_up(self) -> bool:
        return self.clock() >= self._deadline
