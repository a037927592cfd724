"""
AI Dispatcher - Maps a seat's configured difficulty to a strategy.

Usage:
    ai = AIPlayer(seed=7)
    action = await ai.execute_ai_turn(state)   # None for human seats
"""

from __future__ import annotations
import asyncio
import logging
import time
from typing import TYPE_CHECKING, Awaitable, Callable

from .evaluator import HeuristicEvaluator
from .greedy import MediumStrategy
from .minimax import DEFAULT_TIME_LIMIT_MS, HardStrategy
from .policy import Difficulty, EasyStrategy, MoveStrategy

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState, PlayerType

logger = logging.getLogger(__name__)


def make_strategy(
    difficulty: Difficulty | str | None,
    seed: int | None = None,
    time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
    clock: Callable[[], float] = time.monotonic,
    evaluator: HeuristicEvaluator | None = None,
) -> MoveStrategy:
    """Build the strategy for a tier; unknown tiers get Easy."""
    difficulty = Difficulty.from_player_type(difficulty)
    if difficulty is Difficulty.HARD:
        return HardStrategy(evaluator=evaluator, time_limit_ms=time_limit_ms, clock=clock, seed=seed)
    if difficulty is Difficulty.MEDIUM:
        return MediumStrategy(evaluator=evaluator, seed=seed)
    return EasyStrategy(seed=seed)


class AIPlayer:
    """
    Runs AI turns.

    Strategies are created lazily, one per tier, and reused. The sleep
    callable is awaited with the strategy's thinking delay before the move
    is returned; tests inject a no-op.
    """

    def __init__(
        self,
        seed: int | None = None,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.seed = seed
        self.time_limit_ms = time_limit_ms
        self.sleep = sleep
        self.clock = clock
        self._strategies: dict[Difficulty, MoveStrategy] = {}

    @staticmethod
    def is_ai(player_type: PlayerType | str) -> bool:
        raw = getattr(player_type, "value", player_type)
        return isinstance(raw, str) and raw.startswith("ai-")

    def get_strategy(self, player_type: PlayerType | Difficulty | str | None) -> MoveStrategy:
        difficulty = Difficulty.from_player_type(player_type)
        if difficulty not in self._strategies:
            self._strategies[difficulty] = make_strategy(
                difficulty,
                seed=self.seed,
                time_limit_ms=self.time_limit_ms,
                clock=self.clock,
            )
        return self._strategies[difficulty]

    def select_move(self, state: GameState) -> Action | None:
        """Choose the current player's move without any delay."""
        player = state.current_player
        if not self.is_ai(player.player_type):
            return None
        strategy = self.get_strategy(player.player_type)
        move = strategy.select_move(state)
        logger.debug(
            "%s (%s) chose %s",
            player.name, strategy.get_name(), move.describe() if move else "nothing",
        )
        return move

    async def execute_ai_turn(self, state: GameState) -> Action | None:
        """
        Compute the AI move, then wait out the thinking delay.

        Returns None for human seats or when no legal move exists.
        """
        move = self.select_move(state)
        if move is None:
            return None
        delay = self.get_strategy(state.current_player.player_type).thinking_delay()
        await self.sleep(delay)
        return move
