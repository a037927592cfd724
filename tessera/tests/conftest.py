"""
Pytest fixtures for Tessera tests.
"""

import pytest

from ..bots.dispatcher import AIPlayer
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState, initial_tile_counts
from ..engine_core.supply import TileSupply


def rebalance_bag(state: GameState) -> GameState:
    """
    Rebuild the bag so the state holds exactly the initial tile set again.

    Tests arrange factories and boards by hand; the bag absorbs the
    difference so the conservation check keeps passing.
    """
    expected = initial_tile_counts(state.variant)
    others = state._copy_with(supply=TileSupply(discard=state.supply.discard)).tile_counts()
    surplus = others - expected
    assert not surplus, f"arranged more tiles than the game has: {dict(surplus)}"
    bag = tuple(sorted((expected - others).elements()))
    return state._copy_with(supply=TileSupply(bag=bag, discard=state.supply.discard))


async def no_sleep(_delay: float) -> None:
    return None


@pytest.fixture
def reducer() -> Reducer:
    """Reducer with a frozen clock."""
    return Reducer(clock=lambda: 1000.0)


@pytest.fixture
def classic_state(reducer: Reducer) -> GameState:
    """Fresh 2-player Classic game."""
    return reducer.create_game(
        "classic",
        [("Alice", "human"), ("Bob", "human")],
        seed=42,
        game_id="classic_test",
    )


@pytest.fixture
def summer_state(reducer: Reducer) -> GameState:
    """Fresh 2-player Summer game."""
    return reducer.create_game(
        "summer",
        [("Alice", "human"), ("Bob", "human")],
        seed=42,
        game_id="summer_test",
    )


@pytest.fixture
def rebalance():
    return rebalance_bag


@pytest.fixture
def ai() -> AIPlayer:
    """Seeded AI dispatcher that never sleeps."""
    return AIPlayer(seed=7, time_limit_ms=500, sleep=no_sleep)
