"""
Summer Variant - Star-board rules.

Each round has a drafting phase (tiles go to the player's hand, one wild
colour per round) followed by a placement phase where players buy star
positions with hand tiles until everyone has passed. The game lasts a
fixed number of rounds.
"""

from __future__ import annotations
from collections import Counter
import logging

from ..action import (
    Action, ActionType, Event, EventType, RoundEndResult, TileSource, ValidationResult,
)
from ..config import SUMMER, SummerConfig
from ..end_game import EndGameDetector
from ..factory import PickResult
from ..scoring import ScoringEngine
from ..star_board import CENTER_STAR, POSITIONS, STARS, StarBoard, payment_for
from ..state import GameState, GamePhase, PlayerState, PlayerType, Variant
from ..turn_manager import TurnManager
from .base import GameVariant

logger = logging.getLogger(__name__)


class SummerVariant(GameVariant):
    variant = Variant.SUMMER
    display_name = "Summer"
    description = "Draft with a rotating wild colour and buy positions on seven stars."

    @property
    def config(self) -> SummerConfig:
        return SUMMER

    def new_player(self, index: int, name: str, player_type: PlayerType) -> PlayerState:
        player = super().new_player(index, name, player_type)
        return player._copy_with(star_board=StarBoard.empty())

    # ------------------------------------------------------------------
    # Legal moves
    # ------------------------------------------------------------------

    def legal_moves(self, state: GameState) -> list[Action]:
        if state.phase is GamePhase.FACTORY_OFFER:
            return self._draft_moves(state)
        if state.phase is GamePhase.PLACEMENT:
            return self._placement_moves(state)
        return []

    def _draft_moves(self, state: GameState) -> list[Action]:
        display = state.display
        wild = state.wild_color
        moves = []
        for i, factory in enumerate(display.factories):
            for color in dict.fromkeys(factory):
                if display.pick_from_factory_wild(i, color, wild) is not None:
                    moves.append(Action.draft(TileSource.FACTORY, color, i))
        for color in dict.fromkeys(display.center):
            if display.pick_from_center_wild(color, wild) is not None:
                moves.append(Action.draft(TileSource.CENTER, color))
        return moves

    def _placement_moves(self, state: GameState) -> list[Action]:
        player = state.current_player
        board = player.star_board
        wild = state.wild_color
        moves = [Action.pass_turn()]
        for star in STARS:
            if star == CENTER_STAR:
                used = board.used_colors(CENTER_STAR)
                colors = [c for c in self.config.colors if c != wild and c not in used]
            else:
                colors = [star]
            for position in POSITIONS:
                if board.is_filled(star, position):
                    continue
                for color in colors:
                    payment = payment_for(player.hand, color, position, wild)
                    if payment is not None:
                        moves.append(Action.place(star, position, color, *payment))
        return moves

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_move(self, state: GameState, action: Action) -> ValidationResult:
        if state.phase is GamePhase.GAME_OVER:
            return ValidationResult.fail("Game is over")

        if state.phase is GamePhase.FACTORY_OFFER:
            if action.action_type is not ActionType.DRAFT:
                return ValidationResult.fail(f"Only drafting is allowed during {state.phase.value}")
            if self._pick(state, action) is None:
                return ValidationResult.fail(f"Cannot draft {action.color} from the selected source")
            return ValidationResult.ok()

        if state.phase is GamePhase.PLACEMENT:
            if action.action_type is ActionType.PASS:
                return ValidationResult.ok()
            if action.action_type is ActionType.PLACE:
                return self._validate_place(state, action)
            return ValidationResult.fail(f"Only placing or passing is allowed during {state.phase.value}")

        return ValidationResult.fail(f"No actions allowed during {state.phase.value}")

    def _pick(self, state: GameState, action: Action) -> PickResult | None:
        if action.source is TileSource.FACTORY:
            return state.display.pick_from_factory_wild(action.factory_index, action.color, state.wild_color)
        if action.source is TileSource.CENTER:
            return state.display.pick_from_center_wild(action.color, state.wild_color)
        return None

    def _validate_place(self, state: GameState, action: Action) -> ValidationResult:
        player = state.current_player
        board = player.star_board
        wild = state.wild_color
        star, position, color = action.star, action.position, action.color

        if star not in STARS:
            return ValidationResult.fail(f"Unknown star: {star}")
        if isinstance(position, bool) or position not in POSITIONS:
            return ValidationResult.fail(f"Invalid position: {position}")
        if board.is_filled(star, position):
            return ValidationResult.fail(f"Position {position} on {star} is already filled")
        if color not in self.config.colors:
            return ValidationResult.fail(f"Unknown colour: {color}")

        if star == CENTER_STAR:
            if color == wild:
                return ValidationResult.fail("The wild colour cannot be placed on the center star")
            if color in board.used_colors(CENTER_STAR):
                return ValidationResult.fail(f"{color} is already on the center star")
        elif color != star:
            return ValidationResult.fail(f"Only {star} tiles can be placed on the {star} star")

        if action.tiles_used < 1 or action.wild_tiles_used < 0:
            return ValidationResult.fail("At least one tile of the placed colour is required")
        if action.tiles_used + action.wild_tiles_used != position:
            return ValidationResult.fail(f"Position {position} costs exactly {position} tiles")

        counts = Counter(player.hand)
        if color == wild:
            if counts[color] < position:
                return ValidationResult.fail(f"Not enough {color} tiles in hand")
        elif counts[color] < action.tiles_used:
            return ValidationResult.fail(f"Not enough {color} tiles in hand")
        elif counts[wild] < action.wild_tiles_used:
            return ValidationResult.fail("Not enough wild tiles in hand")
        return ValidationResult.ok()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def apply_action(self, state: GameState, action: Action) -> tuple[GameState, list[Event]]:
        if action.action_type is ActionType.DRAFT:
            return self._apply_draft(state, action)
        if action.action_type is ActionType.PLACE:
            return self._apply_place(state, action)
        return self._apply_pass(state)

    def _apply_draft(self, state: GameState, action: Action) -> tuple[GameState, list[Event]]:
        idx = state.current_player_idx
        player = state.current_player
        pick = self._pick(state, action)
        events: list[Event] = []

        player = player._copy_with(hand=player.hand + pick.taken)
        if pick.took_first_player:
            new_score = max(self.config.min_score, player.score - len(pick.taken))
            events.append(Event(EventType.FIRST_PLAYER_TAKEN, player_index=idx))
            events.append(Event(
                EventType.FIRST_PLAYER_PENALTY,
                player_index=idx,
                details={"penalty": player.score - new_score},
            ))
            player = player._copy_with(has_first_player=True, score=new_score)

        events.append(Event(
            EventType.TILES_DRAFTED,
            player_index=idx,
            details={
                "source": action.source.value,
                "factory_index": action.factory_index,
                "color": action.color,
                "count": len(pick.taken),
                "wild_taken": pick.wild_taken,
            },
        ))

        state = state._copy_with(display=pick.display).with_player_at(idx, player)

        if state.display.all_empty():
            holder = TurnManager.first_player_holder(state)
            start = holder if holder is not None else idx
            state = state._copy_with(phase=GamePhase.PLACEMENT, current_player_idx=start)
            events.append(Event(EventType.PLACEMENT_PHASE_START, player_index=start))
        else:
            state = state._copy_with(current_player_idx=TurnManager.next_player(state))
        events.append(Event(EventType.NEXT_TURN, player_index=state.current_player_idx))
        return state, events

    def _apply_place(self, state: GameState, action: Action) -> tuple[GameState, list[Event]]:
        idx = state.current_player_idx
        player = state.current_player
        wild = state.wild_color

        spent = [action.color] * action.tiles_used + [wild] * action.wild_tiles_used
        hand = list(player.hand)
        for tile in spent:
            hand.remove(tile)
        # one tile of the placed colour stays on the board, the rest are discarded
        spent.remove(action.color)

        placement = player.star_board.place(
            action.star, action.position, action.color, action.tiles_used, action.wild_tiles_used,
        )

        events: list[Event] = [Event(
            EventType.TILE_PLACED_STAR,
            player_index=idx,
            details={
                "star": action.star,
                "position": action.position,
                "color": action.color,
                "points": placement.score,
                "tiles_used": action.tiles_used,
                "wild_tiles_used": action.wild_tiles_used,
            },
        )]

        bonus_supply = state.bonus_supply
        for decoration in placement.decorations:
            bonus, bonus_supply = bonus_supply[:decoration.bonus_tiles], bonus_supply[decoration.bonus_tiles:]
            hand.extend(bonus)
            events.append(Event(
                EventType.DECORATION_BONUS,
                player_index=idx,
                details={"kind": decoration.kind, "id": decoration.decoration_id, "tiles": list(bonus)},
            ))

        player = player._copy_with(
            hand=tuple(hand),
            star_board=placement.board,
            score=player.score + placement.score,
        )
        state = state._copy_with(
            supply=state.supply.with_discarded(spent),
            bonus_supply=bonus_supply,
        ).with_player_at(idx, player)

        state = state._copy_with(current_player_idx=TurnManager.next_active_player(state))
        events.append(Event(EventType.NEXT_TURN, player_index=state.current_player_idx))
        return state, events

    def _apply_pass(self, state: GameState) -> tuple[GameState, list[Event]]:
        idx = state.current_player_idx
        state = state.with_player_at(idx, state.current_player._copy_with(has_passed=True))
        events = [Event(EventType.PLAYER_PASSED, player_index=idx)]

        nxt = TurnManager.next_active_player(state)
        if nxt is None:
            state = state._copy_with(phase=GamePhase.ROUND_END)
            events.append(Event(EventType.ROUND_OVER, details={"round": state.round_number}))
        else:
            state = state._copy_with(current_player_idx=nxt)
            events.append(Event(EventType.NEXT_TURN, player_index=nxt))
        return state, events

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def is_round_over(self, state: GameState) -> bool:
        return state.phase is GamePhase.ROUND_END

    def is_game_over(self, state: GameState) -> bool:
        return state.phase is GamePhase.GAME_OVER

    def run_scoring_phase(self, state: GameState) -> RoundEndResult:
        events: list[Event] = []
        supply = state.supply
        players: list[PlayerState] = []
        for i, player in enumerate(state.players):
            result = ScoringEngine.discard_excess_tiles(player, self.config)
            if result.discard:
                events.append(Event(
                    EventType.EXCESS_TILES_DISCARDED,
                    player_index=i,
                    details={"count": len(result.discard), "penalty": result.penalty},
                ))
                supply = supply.with_discarded(result.discard)
            players.append(result.player)
        state = state._copy_with(players=tuple(players), supply=supply)

        if EndGameDetector.should_end_summer(state):
            state, end_events = EndGameDetector.apply_summer_end_game(state)
            return RoundEndResult(new_state=state, events=events + end_events, game_over=True)

        holder = TurnManager.first_player_holder(state)
        first = holder if holder is not None else state.current_player_idx
        state, start_events = TurnManager.start_round(state, state.round_number + 1, first)
        logger.debug("Game %s: round %d starts with player %d", state.game_id, state.round_number, first)
        return RoundEndResult(new_state=state, events=events + start_events)
