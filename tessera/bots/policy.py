"""
Bot Policy - Interface for bot move selection.

A MoveStrategy takes a game state and returns a decision.
Decisions include:
- Which action to take
- Explanation and evaluation details (for logs and the API)
- A cosmetic thinking delay consumed by the presentation layer
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import random
from typing import TYPE_CHECKING, Any

from ..engine_core.rules import get_legal_moves

if TYPE_CHECKING:
    from ..engine_core.state import GameState, PlayerType
    from ..engine_core.action import Action


class Difficulty(Enum):
    """AI tiers, keyed by the player-type strings they are configured with."""
    EASY = "ai-easy"
    MEDIUM = "ai-medium"
    HARD = "ai-hard"

    @classmethod
    def from_player_type(cls, value: PlayerType | Difficulty | str | None) -> Difficulty:
        """Map a configured player type to a tier. Anything unknown plays Easy."""
        if isinstance(value, Difficulty):
            return value
        raw = getattr(value, "value", value)
        for member in cls:
            if raw in (member.value, member.name.lower()):
                return member
        return cls.EASY


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Confidence in the decision
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class MoveStrategy(ABC):
    """
    Abstract base class for move strategies.

    A strategy defines how a bot selects actions. Implementations range
    from uniform random choice to a time-boxed adversarial search.
    """

    difficulty: Difficulty
    delay_range: tuple[float, float] = (0.5, 1.0)

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action

        Raises:
            ValueError: if legal_actions is empty
        """
        pass

    def select_move(self, state: GameState) -> Action | None:
        """Pick a move for the current player, or None if there is none."""
        legal_actions = get_legal_moves(state)
        if not legal_actions:
            return None
        return self.select_action(state, legal_actions).action

    def thinking_delay(self) -> float:
        """Seconds of cosmetic delay before the move is revealed."""
        low, high = self.delay_range
        return self.rng.uniform(low, high)

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class EasyStrategy(MoveStrategy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - The Easy tier
    - Testing and baseline comparison
    """

    difficulty = Difficulty.EASY
    delay_range = (0.5, 1.0)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )
