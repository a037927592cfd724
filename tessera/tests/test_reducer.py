"""
Tests for the reducer - the single point of state transition.

Tests:
- Game creation and player validation
- Classic picks, staging, the floor and the first-player marker
- Invalid moves leave the state untouched
- Determinism modulo timestamps
- Round end, next deal and game over
"""

import pytest

from ..engine_core.action import FLOOR, Action, ActionType, EventType, TileSource
from ..engine_core.board import Wall
from ..engine_core.config import FIRST_PLAYER_MARKER
from ..engine_core.factory import FactoryDisplay
from ..engine_core.reducer import Reducer
from ..engine_core.rules import determine_winner
from ..engine_core.state import GamePhase, PlayerType, Variant, assert_conservation


def event_types(events):
    return [e.event_type for e in events]


class TestCreateGame:
    """Tests for game creation."""

    def test_classic_setup(self, classic_state):
        """2 players get 5 factories of 4 tiles and an empty center."""
        state = classic_state
        assert state.variant is Variant.CLASSIC
        assert state.phase is GamePhase.FACTORY_OFFER
        assert state.round_number == 1
        assert state.current_player_idx == 0
        assert [len(f) for f in state.display.factories] == [4] * 5
        assert state.display.center == ()
        assert state.display.center_has_first_player
        assert state.supply.remaining == 80
        assert [p.score for p in state.players] == [0, 0]
        assert not any(p.has_first_player for p in state.players)

    def test_factory_count_per_player_count(self, reducer):
        for count, factories in ((3, 7), (4, 9)):
            state = reducer.create_game("classic", [f"P{i}" for i in range(count)], seed=1)
            assert len(state.display.factories) == factories

    def test_player_specs(self, reducer):
        """Mappings, tuples and bare names are all accepted."""
        state = reducer.create_game(
            "classic",
            [{"name": "Ann", "type": "ai-hard"}, ("Ben", PlayerType.AI_EASY), "Cid"],
            seed=3,
        )
        assert [p.name for p in state.players] == ["Ann", "Ben", "Cid"]
        assert [p.player_type for p in state.players] == [
            PlayerType.AI_HARD, PlayerType.AI_EASY, PlayerType.HUMAN,
        ]
        assert [p.player_id for p in state.players] == ["p0", "p1", "p2"]

    def test_create_from_options(self, reducer):
        state = reducer.create({"variant": "summer", "players": ["A", "B"], "seed": 5, "game_id": "g1"})
        assert state.game_id == "g1"
        assert state.variant is Variant.SUMMER

    @pytest.mark.parametrize("players", [["solo"], ["a", "b", "c", "d", "e"]])
    def test_bad_player_count(self, reducer, players):
        with pytest.raises(ValueError):
            reducer.create_game("classic", players)

    def test_unknown_variant(self, reducer):
        with pytest.raises(ValueError):
            reducer.create_game("winter", ["A", "B"])

    def test_unknown_player_type(self, reducer):
        with pytest.raises(ValueError):
            reducer.create_game("classic", [("A", "robot"), ("B", "human")])

    def test_same_seed_same_deal(self, reducer):
        a = reducer.create_game("classic", ["A", "B"], seed=9, game_id="g")
        b = reducer.create_game("classic", ["A", "B"], seed=9, game_id="g")
        c = reducer.create_game("classic", ["A", "B"], seed=10, game_id="g")
        assert a == b
        assert a.display != c.display


class TestClassicPick:
    """Tests for Classic take actions."""

    @pytest.fixture
    def state(self, classic_state, rebalance):
        factories = (("blue", "blue", "blue", "red"),) + classic_state.display.factories[1:]
        display = FactoryDisplay(factories=factories)
        return rebalance(classic_state._copy_with(display=display))

    def test_blue_to_row_two(self, reducer, state):
        """Three blue tiles fill row 2 exactly; the red goes to the center."""
        result = reducer.apply(state, Action.take(TileSource.FACTORY, "blue", 2, factory_index=0))

        assert result.success
        new = result.new_state
        player = new.players[0]
        assert player.pattern_lines[2] == ("blue", "blue", "blue")
        assert player.floor_line == ()
        assert new.display.factories[0] == ()
        assert new.display.center == ("red",)
        assert new.current_player_idx == 1
        assert event_types(result.events) == [
            EventType.TILES_PICKED, EventType.TILES_PLACED, EventType.NEXT_TURN,
        ]
        assert state.players[0].pattern_lines[2] == ()

    def test_overflow_goes_to_floor(self, reducer, state):
        result = reducer.apply(state, Action.take(TileSource.FACTORY, "blue", 0, factory_index=0))

        player = result.new_state.players[0]
        assert player.pattern_lines[0] == ("blue",)
        assert player.floor_line == ("blue", "blue")
        assert EventType.TILES_TO_FLOOR in event_types(result.events)

    def test_floor_dump(self, reducer, state):
        result = reducer.apply(state, Action.take(TileSource.FACTORY, "blue", FLOOR, factory_index=0))
        assert result.new_state.players[0].floor_line == ("blue",) * 3

    def test_center_pick_takes_marker_once(self, reducer, state):
        """The marker lands on the floor once, ahead of any overflow."""
        state = reducer.apply(state, Action.take(TileSource.FACTORY, "blue", 2, factory_index=0)).new_state
        factory = state.display.factories[1]
        color = factory[0]
        state = reducer.apply(state, Action.take(TileSource.FACTORY, color, FLOOR, factory_index=1)).new_state

        reds = state.display.center.count("red")
        result = reducer.apply(state, Action.take(TileSource.CENTER, "red", FLOOR))

        assert result.success
        player = result.new_state.players[0]
        assert player.has_first_player
        assert player.floor_line.count(FIRST_PLAYER_MARKER) == 1
        assert player.floor_line == (FIRST_PLAYER_MARKER,) + ("red",) * reds
        assert not result.new_state.display.center_has_first_player
        assert EventType.FIRST_PLAYER_TAKEN in event_types(result.events)

    def test_turn_log(self, reducer, state):
        result = reducer.apply(state, Action.take(TileSource.FACTORY, "blue", 2, factory_index=0))
        record = result.new_state.turn_log[-1]
        assert record.player_index == 0
        assert record.round_number == 1
        assert record.timestamp == 1000.0
        assert record.action.color == "blue"


class TestInvalidMoves:
    """Rejected actions return the untouched state and one INVALID_MOVE event."""

    @pytest.mark.parametrize("action", [
        Action.take(TileSource.FACTORY, "blue", 2, factory_index=99),
        Action.take(TileSource.FACTORY, "green", 2, factory_index=0),
        Action.take(TileSource.CENTER, "blue", 0),
        Action.draft(TileSource.FACTORY, "blue", factory_index=0),
        Action.pass_turn(),
    ])
    def test_rejected(self, reducer, classic_state, action):
        result = reducer.apply(classic_state, action)

        assert not result.success
        assert result.new_state is classic_state
        assert len(result.events) == 1
        assert result.events[0].event_type is EventType.INVALID_MOVE
        assert result.events[0].details["error"] == result.error

    def test_row_holding_other_color(self, reducer, classic_state, rebalance):
        player = classic_state.players[0].with_pattern_line(3, ("red",))
        factories = (("blue",) * 4,) + classic_state.display.factories[1:]
        state = rebalance(classic_state.with_player_at(0, player)._copy_with(
            display=FactoryDisplay(factories=factories),
        ))
        result = reducer.apply(state, Action.take(TileSource.FACTORY, "blue", 3, factory_index=0))

        assert not result.success
        assert "red" in result.error

    def test_not_an_action(self, reducer, classic_state):
        result = reducer.apply(classic_state, {"action_type": "take"})
        assert not result.success


class TestDeterminism:
    """Same state + same action = same result, timestamps aside."""

    def test_apply_is_deterministic(self, classic_state):
        action = Action.take(
            TileSource.FACTORY, classic_state.display.factories[0][0], FLOOR, factory_index=0,
        )
        a = Reducer(clock=lambda: 1.0).apply(classic_state, action)
        b = Reducer(clock=lambda: 2.0).apply(classic_state, action)

        assert a.new_state != b.new_state
        assert a.new_state.without_timestamps() == b.new_state.without_timestamps()
        assert a.events == b.events


class TestRoundEnd:
    """Tests for round-end processing."""

    @pytest.fixture
    def last_pick(self, classic_state, rebalance):
        """One blue tile left in the display; player 0 to move."""
        display = FactoryDisplay(
            factories=(("blue",),) + ((),) * 4,
            center_has_first_player=False,
        )
        player1 = classic_state.players[1]._copy_with(
            has_first_player=True, floor_line=(FIRST_PLAYER_MARKER,),
        )
        state = classic_state._copy_with(display=display).with_player_at(1, player1)
        return rebalance(state)

    def test_round_over_when_display_empty(self, reducer, last_pick):
        result = reducer.apply(last_pick, Action.take(TileSource.FACTORY, "blue", 0, factory_index=0))

        assert result.new_state.phase is GamePhase.WALL_TILING
        assert result.new_state.is_round_over
        assert result.round_over
        assert EventType.NEXT_TURN not in event_types(result.events)

    def test_process_round_end(self, reducer, last_pick):
        """Full lines go to the wall, the marker holder opens the next round."""
        state = reducer.apply(last_pick, Action.take(TileSource.FACTORY, "blue", 0, factory_index=0)).new_state
        result = reducer.process_round_end(state)

        new = result.new_state
        assert not result.game_over
        assert new.phase is GamePhase.FACTORY_OFFER
        assert new.round_number == 2
        assert new.current_player_idx == 1
        assert new.players[0].wall[0][0] == "blue"
        assert new.players[0].pattern_lines[0] == ()
        assert new.players[0].score == 1
        # the marker costs one point, floored at zero
        assert new.players[1].score == 0
        assert new.players[1].floor_line == ()
        assert not any(p.has_first_player for p in new.players)
        assert new.display.center_has_first_player
        assert [len(f) for f in new.display.factories] == [4] * 5

        types = event_types(result.events)
        assert EventType.TILE_SCORED in types
        assert EventType.FLOOR_PENALTY in types
        assert types[-1] is EventType.ROUND_START
        assert_conservation(new)

    def test_round_end_refill_is_seeded(self, last_pick):
        state = Reducer().apply(last_pick, Action.take(TileSource.FACTORY, "blue", 0, factory_index=0)).new_state
        a = Reducer().process_round_end(state).new_state
        b = Reducer().process_round_end(state).new_state
        assert a.display == b.display

    def test_not_over_yet(self, reducer, classic_state):
        result = reducer.process_round_end(classic_state)
        assert result.new_state is classic_state
        assert event_types(result.events) == [EventType.INVALID_MOVE]
        assert not result.game_over


class TestGameOver:
    """A complete wall row ends the game after wall-tiling."""

    @pytest.fixture
    def final_pick(self, classic_state, rebalance):
        wall = Wall.empty()
        for color in ("blue", "yellow", "red", "black"):
            wall = Wall.place_tile(wall, 0, color).wall
        player0 = classic_state.players[0]._copy_with(wall=wall).with_pattern_line(0, ("white",))
        display = FactoryDisplay(factories=(("red",),) + ((),) * 4, center_has_first_player=False)
        state = classic_state._copy_with(display=display).with_player_at(0, player0)
        return rebalance(state)

    def test_game_over(self, reducer, final_pick):
        state = reducer.apply(final_pick, Action.take(TileSource.FACTORY, "red", FLOOR, factory_index=0)).new_state
        result = reducer.process_round_end(state)

        assert result.game_over
        final = result.new_state
        assert final.is_game_over
        # 5 for the row run, -1 floor, +2 row bonus
        assert final.players[0].score == 6
        assert final.players[0].end_game_bonus == 2
        assert event_types(result.events)[-1] is EventType.GAME_OVER

        winner = determine_winner(final)
        assert winner.winners == (0,)
        assert not winner.is_tie

    def test_no_moves_after_game_over(self, reducer, final_pick):
        state = reducer.apply(final_pick, Action.take(TileSource.FACTORY, "red", FLOOR, factory_index=0)).new_state
        final = reducer.process_round_end(state).new_state

        result = reducer.apply(final, Action(action_type=ActionType.TAKE, source=TileSource.CENTER, color="red", target_row=FLOOR))
        assert not result.success
        assert result.error == "Game is over"
