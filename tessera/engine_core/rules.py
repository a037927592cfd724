"""
Game Rules - Pure predicates over a game state.

Used by:
1. The reducer to validate proposed actions
2. Bots to enumerate candidate moves
3. The API to show available moves and final standings
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .action import Action, ValidationResult
from .board import Wall
from .state import GameState
from .variants import get_variant


@dataclass(frozen=True)
class PlayerRanking:
    player_index: int
    name: str
    score: int
    complete_rows: int = 0
    end_game_bonus: int = 0


@dataclass(frozen=True)
class WinnerResult:
    """Final standings. Several winners means a shared victory."""
    winners: tuple[int, ...]
    rankings: tuple[PlayerRanking, ...] = field(default_factory=tuple)

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1


class GameRules:
    """Variant-dispatching rule queries."""

    @staticmethod
    def get_legal_moves(state: GameState) -> list[Action]:
        return get_variant(state.variant).legal_moves(state)

    @staticmethod
    def validate_move(state: GameState, action: Action) -> ValidationResult:
        return get_variant(state.variant).validate_move(state, action)

    @staticmethod
    def is_round_over(state: GameState) -> bool:
        return get_variant(state.variant).is_round_over(state)

    @staticmethod
    def is_game_over(state: GameState) -> bool:
        return get_variant(state.variant).is_game_over(state)

    @staticmethod
    def determine_winner(state: GameState) -> WinnerResult:
        """
        Rank players by score, then by the variant tiebreak.

        Players equal on both keys share the win.
        """
        variant = get_variant(state.variant)
        keyed = [
            ((p.score, variant.tiebreak(p)), i, p)
            for i, p in enumerate(state.players)
        ]
        keyed.sort(key=lambda item: item[0], reverse=True)

        best = keyed[0][0]
        winners = tuple(i for key, i, _ in keyed if key == best)
        rankings = tuple(
            PlayerRanking(
                player_index=i,
                name=p.name,
                score=p.score,
                complete_rows=Wall.count_complete_rows(p.wall),
                end_game_bonus=p.end_game_bonus,
            )
            for _, i, p in keyed
        )
        return WinnerResult(winners=winners, rankings=rankings)


def get_legal_moves(state: GameState) -> list[Action]:
    return GameRules.get_legal_moves(state)


def validate_move(state: GameState, action: Action) -> ValidationResult:
    return GameRules.validate_move(state, action)


def determine_winner(state: GameState) -> WinnerResult:
    return GameRules.determine_winner(state)
