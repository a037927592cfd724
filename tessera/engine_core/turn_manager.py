"""
Turn Manager - Seat rotation, randomness and round setup.

Randomness is threaded through the state: every consumer builds a
random.Random from state.rng_seed and stores a fresh seed drawn from it, so
replaying the same actions from the same seed reproduces the same game.
"""

from __future__ import annotations
import logging
import random

from .action import Event, EventType
from .scoring import ScoringEngine
from .state import GameState, GamePhase, Variant

logger = logging.getLogger(__name__)


def seeded_rng(state: GameState) -> random.Random:
    return random.Random(state.rng_seed)


def with_next_seed(state: GameState, rng: random.Random) -> GameState:
    """Store the seed for the next consumer of randomness."""
    return state._copy_with(rng_seed=rng.getrandbits(64))


class TurnManager:

    @staticmethod
    def next_player(state: GameState) -> int:
        return (state.current_player_idx + 1) % state.num_players

    @staticmethod
    def next_active_player(state: GameState) -> int | None:
        """
        Next seat (clockwise, possibly the current one) that has not passed.

        Returns None once every player has passed.
        """
        n = state.num_players
        for step in range(1, n + 1):
            idx = (state.current_player_idx + step) % n
            if not state.players[idx].has_passed:
                return idx
        return None

    @staticmethod
    def first_player_holder(state: GameState) -> int | None:
        for i, player in enumerate(state.players):
            if player.has_first_player:
                return i
        return None

    @staticmethod
    def process_wall_tiling(state: GameState) -> tuple[GameState, list[Event]]:
        """Score every player's full pattern lines and floor, discarding the leftovers."""
        events: list[Event] = []
        supply = state.supply
        players = []
        for i, player in enumerate(state.players):
            result = ScoringEngine.wall_tiling(player, i)
            events.extend(result.events)
            events.append(Event(
                EventType.PLAYER_WALL_TILING,
                player_index=i,
                details={"score_gained": result.score_gained, "score": result.player.score},
            ))
            supply = supply.with_discarded(result.discard)
            players.append(result.player)
        return state._copy_with(players=tuple(players), supply=supply), events

    @staticmethod
    def start_round(state: GameState, round_number: int, first_player: int) -> tuple[GameState, list[Event]]:
        """
        Deal a new round.

        Refills every factory from the bag, puts the marker back in the
        center and clears per-round player flags. Summer rounds also set the
        wild colour and top the bonus supply back up.
        """
        config = state.config
        rng = seeded_rng(state)
        display, supply = state.display.fill(state.supply, config.tiles_per_factory, rng)

        wild_color = None
        bonus_supply = state.bonus_supply
        if state.variant is Variant.SUMMER:
            wild_color = config.wild_for_round(round_number)
            missing = config.supply_spaces - len(bonus_supply)
            if missing > 0:
                drawn, supply = supply.draw(missing, rng)
                bonus_supply = bonus_supply + drawn

        players = tuple(
            p._copy_with(has_passed=False, has_first_player=False)
            for p in state.players
        )
        state = state._copy_with(
            phase=GamePhase.FACTORY_OFFER,
            round_number=round_number,
            current_player_idx=first_player,
            players=players,
            display=display,
            supply=supply,
            wild_color=wild_color,
            bonus_supply=bonus_supply,
        )
        state = with_next_seed(state, rng)

        logger.debug(
            "Game %s round %d dealt %d tiles, %d left in bag",
            state.game_id, round_number, display.tile_count(), supply.remaining,
        )
        details = {"round": round_number, "first_player": first_player}
        if wild_color is not None:
            details["wild_color"] = wild_color
        return state, [Event(EventType.ROUND_START, player_index=first_player, details=details)]
