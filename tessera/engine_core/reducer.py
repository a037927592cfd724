"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action() or process_round_end().

Design principles:
- Pure function: (state, action) -> new_state + events
- Validates before applying, never raises on a bad action
- Dispatches to the active GameVariant instead of branching on the variant
- Randomness comes from the seed in the state, time from an injected clock
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
import time
from typing import Any, Callable, Iterable, Mapping, Union
import uuid

from .action import Action, ActionResult, Event, RoundEndResult
from .config import MAX_PLAYERS, MIN_PLAYERS
from .state import GameState, PlayerType, TurnRecord, Variant, assert_conservation
from .variants import get_variant, resolve_variant

logger = logging.getLogger(__name__)


PlayerSpec = Union[Mapping[str, Any], str, tuple]


def _parse_seat(index: int, seat: PlayerSpec) -> tuple[str, PlayerType]:
    """Accept {"name", "type"} mappings, (name, type) tuples or bare names."""
    if isinstance(seat, str):
        return seat, PlayerType.HUMAN
    if isinstance(seat, tuple):
        name, player_type = seat
    else:
        name = seat.get("name") or f"Player {index + 1}"
        player_type = seat.get("type", PlayerType.HUMAN)
    if not isinstance(player_type, PlayerType):
        try:
            player_type = PlayerType(player_type)
        except ValueError:
            raise ValueError(f"Unknown player type: {player_type}") from None
    return name, player_type


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the clock used to timestamp the turn log.
    """
    clock: Callable[[], float] = field(default=time.time)

    def create(self, options: Mapping[str, Any]) -> GameState:
        """Create a game from an options mapping: {variant, players, seed?, game_id?}."""
        return self.create_game(
            options.get("variant", Variant.CLASSIC),
            options.get("players", ()),
            seed=options.get("seed"),
            game_id=options.get("game_id"),
        )

    def create_game(
        self,
        variant: Variant | str,
        players: Iterable[PlayerSpec],
        seed: int | None = None,
        game_id: str | None = None,
    ) -> GameState:
        """
        Create a new match and deal the first round.

        Raises ValueError for an unknown variant, player type or a player
        count outside 2..4.
        """
        variant = resolve_variant(variant)
        seats = [_parse_seat(i, seat) for i, seat in enumerate(players)]
        if not MIN_PLAYERS <= len(seats) <= MAX_PLAYERS:
            raise ValueError(
                f"{variant.value} needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(seats)}"
            )

        state = get_variant(variant).new_game(
            game_id=game_id or str(uuid.uuid4()),
            seats=seats,
            rng=random.Random(seed),
        )
        if __debug__:
            assert_conservation(state)
        logger.info(
            "Created %s game %s with %d players (seed=%s)",
            variant.value, state.game_id, len(seats), seed,
        )
        return state

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state and events, or the untouched
        state and a single INVALID_MOVE event.
        """
        if not isinstance(action, Action):
            return ActionResult.failure(state, f"Not an action: {action!r}")

        variant = get_variant(state.variant)
        validation = variant.validate_move(state, action)
        if not validation.valid:
            logger.debug("Game %s rejected %s: %s", state.game_id, action.describe(), validation.error)
            return ActionResult.failure(state, validation.error)

        actor = state.current_player_idx
        new_state, events = variant.apply_action(state, action)
        new_state = new_state.with_turn(TurnRecord(
            action=action,
            player_index=actor,
            round_number=state.round_number,
            timestamp=self.clock(),
        ))

        if __debug__:
            assert_conservation(new_state)
        return ActionResult(new_state=new_state, events=events)

    def process_round_end(self, state: GameState) -> RoundEndResult:
        """Run scoring and set up the next round once a round-over phase is reached."""
        if not state.is_round_over:
            return RoundEndResult(
                new_state=state,
                events=[Event.invalid(f"Round is not over (phase {state.phase.value})")],
                game_over=state.is_game_over,
            )

        result = get_variant(state.variant).run_scoring_phase(state)
        if __debug__:
            assert_conservation(result.new_state)
        logger.debug(
            "Game %s finished round %d%s",
            state.game_id, state.round_number, " (game over)" if result.game_over else "",
        )
        return result


_default_reducer = Reducer()


def create_game(
    variant: Variant | str,
    players: Iterable[PlayerSpec],
    seed: int | None = None,
    game_id: str | None = None,
) -> GameState:
    return _default_reducer.create_game(variant, players, seed=seed, game_id=game_id)


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience function for applying an action with the default reducer."""
    return _default_reducer.apply(state, action)


def process_round_end(state: GameState) -> RoundEndResult:
    return _default_reducer.process_round_end(state)
