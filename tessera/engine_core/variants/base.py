"""
Game Variant - Capability interface implemented by each rule set.

The reducer, the round-end processor and the bots only talk to a variant
through this interface, so adding a rule set means adding one subclass and
registering it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import random
from typing import Any

from ..action import Action, Event, RoundEndResult, ValidationResult
from ..factory import FactoryDisplay
from ..config import MAX_PLAYERS, MIN_PLAYERS
from ..state import GameState, PlayerState, PlayerType, Variant
from ..supply import TileSupply
from ..turn_manager import TurnManager


class GameVariant(ABC):
    """Base class for rule variants."""

    variant: Variant
    display_name: str = ""
    description: str = ""

    @property
    @abstractmethod
    def config(self) -> Any:
        """Immutable constants for this variant."""

    def new_player(self, index: int, name: str, player_type: PlayerType) -> PlayerState:
        return PlayerState(
            player_id=f"p{index}",
            name=name,
            player_type=player_type,
            score=self.config.starting_score,
        )

    def new_game(self, game_id: str, seats: list[tuple[str, PlayerType]], rng: random.Random) -> GameState:
        """Build the opening state and deal round one."""
        config = self.config
        state = GameState(
            game_id=game_id,
            variant=self.variant,
            players=tuple(
                self.new_player(i, name, player_type)
                for i, (name, player_type) in enumerate(seats)
            ),
            display=FactoryDisplay.empty(config.factory_count(len(seats))),
            supply=TileSupply.create(config.colors, config.tiles_per_color, rng),
            rng_seed=rng.getrandbits(64),
        )
        state, _ = TurnManager.start_round(state, round_number=1, first_player=0)
        return state

    @abstractmethod
    def legal_moves(self, state: GameState) -> list[Action]:
        """Every action the current player may take."""

    @abstractmethod
    def validate_move(self, state: GameState, action: Action) -> ValidationResult:
        pass

    @abstractmethod
    def apply_action(self, state: GameState, action: Action) -> tuple[GameState, list[Event]]:
        """Apply a validated action. Callers must validate first."""

    @abstractmethod
    def is_round_over(self, state: GameState) -> bool:
        pass

    @abstractmethod
    def is_game_over(self, state: GameState) -> bool:
        pass

    @abstractmethod
    def run_scoring_phase(self, state: GameState) -> RoundEndResult:
        """Between-rounds processing: scoring, cleanup and the next deal."""

    def tiebreak(self, player: PlayerState) -> int:
        """Secondary ranking key; higher wins."""
        return 0

    def info(self) -> dict[str, Any]:
        return {
            "id": self.variant.value,
            "name": self.display_name,
            "description": self.description,
            "colors": list(self.config.colors),
            "min_players": MIN_PLAYERS,
            "max_players": MAX_PLAYERS,
        }
