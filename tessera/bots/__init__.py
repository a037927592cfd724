"""
Bots module - AI opponents.

Provides:
- MoveStrategy: Interface for move selection
- HeuristicEvaluator: Scores game states
- EasyStrategy / MediumStrategy / HardStrategy: the three tiers
- AIPlayer: Difficulty dispatcher with the async turn contract
"""

from .policy import MoveStrategy, BotDecision, Difficulty, EasyStrategy
from .evaluator import HeuristicEvaluator, EvaluationWeights, StateEvaluation
from .greedy import MediumStrategy
from .minimax import HardStrategy
from .dispatcher import AIPlayer, make_strategy

__all__ = [
    "MoveStrategy",
    "BotDecision",
    "Difficulty",
    "EasyStrategy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "StateEvaluation",
    "MediumStrategy",
    "HardStrategy",
    "AIPlayer",
    "make_strategy",
]
