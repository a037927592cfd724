"""
Tests for the Summer variant.

Tests:
- Setup: wild colour, bonus supply, starting score
- Drafting with wild tiles and the first-player penalty
- Placement, decorations and passing
- Round end, excess hand tiles and the final round
"""

import pytest

from ..engine_core.action import Action, EventType, TileSource
from ..engine_core.factory import FactoryDisplay
from ..engine_core.rules import get_legal_moves, validate_move
from ..engine_core.star_board import CENTER_STAR, StarBoard
from ..engine_core.state import GamePhase


def event_types(events):
    return [e.event_type for e in events]


EMPTY_DISPLAY = FactoryDisplay(factories=((),) * 5, center_has_first_player=False)


@pytest.fixture
def placement_state(summer_state, rebalance):
    """Placement phase, nobody holds the marker, empty hands."""
    return rebalance(summer_state._copy_with(phase=GamePhase.PLACEMENT, display=EMPTY_DISPLAY))


def with_hand(state, index, hand, **changes):
    return state.with_player_at(index, state.players[index]._copy_with(hand=tuple(hand), **changes))


class TestSummerSetup:
    """Tests for a fresh Summer game."""

    def test_setup(self, summer_state):
        state = summer_state
        assert state.wild_color == "purple"
        assert len(state.bonus_supply) == 10
        assert [p.score for p in state.players] == [5, 5]
        assert all(p.star_board is not None for p in state.players)
        assert state.supply.remaining == 132 - 20 - 10

    def test_only_drafts_are_legal(self, summer_state):
        moves = get_legal_moves(summer_state)
        assert moves
        assert all(m.action_type.value == "draft" for m in moves)
        assert all(m.color != "purple" for m in moves)


class TestSummerDraft:
    """Tests for drafting."""

    def test_center_only_wild(self, reducer, summer_state, rebalance):
        """Two wild tiles in the center: draft one, marker and penalty follow."""
        display = FactoryDisplay(
            factories=(("red", "blue", "blue", "green"),) + ((),) * 4,
            center=("purple", "purple"),
        )
        state = rebalance(summer_state._copy_with(display=display))

        assert Action.draft(TileSource.CENTER, "purple") in get_legal_moves(state)
        result = reducer.apply(state, Action.draft(TileSource.CENTER, "purple"))

        assert result.success
        new = result.new_state
        assert new.display.center == ("purple",)
        assert new.players[0].hand == ("purple",)
        assert new.players[0].has_first_player
        assert new.players[0].score == 4
        assert new.current_player_idx == 1
        assert event_types(result.events) == [
            EventType.FIRST_PLAYER_TAKEN,
            EventType.FIRST_PLAYER_PENALTY,
            EventType.TILES_DRAFTED,
            EventType.NEXT_TURN,
        ]

    def test_factory_pick_brings_one_wild(self, reducer, summer_state, rebalance):
        display = FactoryDisplay(factories=(("red", "purple", "purple", "green"),) + ((),) * 4)
        state = rebalance(summer_state._copy_with(display=display))
        result = reducer.apply(state, Action.draft(TileSource.FACTORY, "red", factory_index=0))

        assert result.new_state.players[0].hand == ("red", "purple")
        assert result.new_state.display.center == ("purple", "green")

    def test_wild_rejected_from_mixed_factory(self, reducer, summer_state, rebalance):
        display = FactoryDisplay(factories=(("red", "purple", "purple", "green"),) + ((),) * 4)
        state = rebalance(summer_state._copy_with(display=display))
        result = reducer.apply(state, Action.draft(TileSource.FACTORY, "purple", factory_index=0))
        assert not result.success

    def test_marker_holder_starts_placement(self, reducer, summer_state, rebalance):
        display = FactoryDisplay(factories=(("red",),) + ((),) * 4, center_has_first_player=False)
        state = summer_state._copy_with(display=display)
        state = state.with_player_at(1, state.players[1]._copy_with(has_first_player=True))
        state = rebalance(state)

        result = reducer.apply(state, Action.draft(TileSource.FACTORY, "red", factory_index=0))

        assert result.new_state.phase is GamePhase.PLACEMENT
        assert result.new_state.current_player_idx == 1
        assert EventType.PLACEMENT_PHASE_START in event_types(result.events)


class TestSummerPlacement:
    """Tests for star placements and passing."""

    def test_place_with_wild(self, reducer, placement_state, rebalance):
        """Position 3 paid with 2 red and 1 wild; one red stays on the board."""
        state = rebalance(with_hand(placement_state, 0, ["red", "red", "purple"]))
        action = Action.place("red", 3, "red", tiles_used=2, wild_tiles_used=1)
        assert action in get_legal_moves(state)

        result = reducer.apply(state, action)

        assert result.success
        new = result.new_state
        player = new.players[0]
        assert player.hand == ()
        assert player.star_board.get("red", 3) == "red"
        assert player.score == 6
        assert sorted(new.supply.discard[-2:]) == ["purple", "red"]
        assert new.current_player_idx == 1

    def test_pass_always_legal(self, placement_state):
        assert get_legal_moves(placement_state) == [Action.pass_turn()]

    def test_decoration_bonus(self, reducer, placement_state, rebalance):
        """Completing a window draws 3 tiles from the bonus supply into the hand."""
        board = StarBoard.empty().with_tile("yellow", 5, "yellow")
        state = rebalance(with_hand(placement_state, 0, ["yellow"] * 6, star_board=board))
        supply_before = state.bonus_supply

        result = reducer.apply(state, Action.place("yellow", 6, "yellow", tiles_used=6))

        player = result.new_state.players[0]
        assert player.hand == supply_before[:3]
        assert result.new_state.bonus_supply == supply_before[3:]
        assert player.score == 5 + 2
        assert EventType.DECORATION_BONUS in event_types(result.events)

    @pytest.mark.parametrize("action,reason", [
        (Action.place("red", 2, "blue", tiles_used=2), "Only red"),
        (Action.place(CENTER_STAR, 1, "purple", tiles_used=1), "wild"),
        (Action.place("red", 3, "red", tiles_used=2), "costs exactly"),
        (Action.place("red", 2, "red", tiles_used=0, wild_tiles_used=2), "At least one"),
        (Action.place("blue", 1, "blue", tiles_used=1), "Not enough"),
        (Action.draft(TileSource.CENTER, "red"), "Only placing"),
    ])
    def test_invalid_placements(self, placement_state, rebalance, action, reason):
        state = rebalance(with_hand(placement_state, 0, ["red", "red", "purple"]))
        result = validate_move(state, action)
        assert not result.valid
        assert reason in result.error

    def test_center_star_colors(self, placement_state, rebalance):
        board = StarBoard.empty().with_tile(CENTER_STAR, 1, "red")
        state = rebalance(with_hand(placement_state, 0, ["red", "red", "blue", "blue"], star_board=board))
        center_moves = [m for m in get_legal_moves(state) if m.star == CENTER_STAR]

        assert center_moves
        assert {m.color for m in center_moves} == {"blue"}

    def test_everyone_passes(self, reducer, placement_state):
        first = reducer.apply(placement_state, Action.pass_turn())
        assert first.new_state.current_player_idx == 1
        assert first.new_state.players[0].has_passed

        second = reducer.apply(first.new_state, Action.pass_turn())
        assert second.new_state.phase is GamePhase.ROUND_END
        assert second.round_over

    def test_passed_player_is_skipped(self, reducer, placement_state, rebalance):
        state = rebalance(with_hand(placement_state, 1, ["red"]))
        state = reducer.apply(state, Action.pass_turn()).new_state
        state = reducer.apply(state, Action.place("red", 1, "red", tiles_used=1)).new_state
        assert state.current_player_idx == 1
        assert state.phase is GamePhase.PLACEMENT


class TestSummerRoundEnd:
    """Tests for Summer round-end processing."""

    @pytest.fixture
    def round_end(self, placement_state, rebalance):
        state = with_hand(placement_state, 0, ["red"] * 6, has_first_player=True)
        state = state._copy_with(phase=GamePhase.ROUND_END, bonus_supply=state.bonus_supply[:7])
        return rebalance(state)

    def test_excess_tiles_and_next_round(self, reducer, round_end):
        result = reducer.process_round_end(round_end)
        new = result.new_state

        assert not result.game_over
        assert new.players[0].hand == ("red",) * 4
        assert new.players[0].score == 3
        assert new.round_number == 2
        assert new.wild_color == "green"
        assert new.current_player_idx == 0
        assert len(new.bonus_supply) == 10
        assert new.phase is GamePhase.FACTORY_OFFER
        assert not any(p.has_passed for p in new.players)
        assert EventType.EXCESS_TILES_DISCARDED in event_types(result.events)

    def test_final_round_applies_bonuses(self, reducer, round_end, rebalance):
        board = StarBoard.empty()
        for position in range(1, 7):
            board = board.with_tile("purple", position, "purple")
        state = round_end._copy_with(round_number=6)
        state = rebalance(state.with_player_at(1, state.players[1]._copy_with(star_board=board)))

        result = reducer.process_round_end(state)

        assert result.game_over
        final = result.new_state
        assert final.is_game_over
        assert final.players[1].score == 5 + 20
        assert final.players[1].end_game_bonus == 20
        assert event_types(result.events)[-1] is EventType.GAME_OVER
