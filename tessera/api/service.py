"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Plays AI seats after every human move
4. Formats responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    ActionRequest,
    CreateGameRequest,
    # Responses
    ErrorResponse,
    GameResponse,
    GameStateResponse,
    LegalMovesResponse,
    VariantListResponse,
    WinnerResponse,
    # Shared
    ActionInfo,
    EventInfo,
    PlayerInfo,
    RankingInfo,
    VariantInfo,
    # Enums
    ErrorCode,
)
from ..bots.dispatcher import AIPlayer
from ..engine_core.action import FLOOR, Action, ActionType, Event, TileSource
from ..engine_core.rules import determine_winner, get_legal_moves
from ..engine_core.state import GameState
from ..engine_core.variants import list_variants
from ..session import GameLoop, Session, SessionManager, TurnResult

logger = logging.getLogger(__name__)


def action_from_request(request: ActionRequest) -> Action:
    """
    Build an engine Action from a request.

    Raises ValueError for unknown action types or sources.
    """
    action_type = ActionType(request.action_type)
    source = TileSource(request.source) if request.source else None
    target_row = request.target_row
    if isinstance(target_row, str) and target_row != FLOOR:
        target_row = int(target_row)
    return Action(
        action_type=action_type,
        source=source,
        factory_index=request.factory_index,
        color=request.color,
        target_row=target_row,
        star=request.star,
        position=request.position,
        tiles_used=request.tiles_used,
        wild_tiles_used=request.wild_tiles_used,
    )


def action_to_info(action: Action) -> ActionInfo:
    return ActionInfo(
        action_type=action.action_type.value,
        source=action.source.value if action.source else None,
        factory_index=action.factory_index,
        color=action.color,
        target_row=action.target_row,
        star=action.star,
        position=action.position,
        tiles_used=action.tiles_used,
        wild_tiles_used=action.wild_tiles_used,
        description=action.describe(),
    )


def event_to_info(event: Event) -> EventInfo:
    return EventInfo(
        event_type=event.event_type.value,
        player_index=event.player_index,
        details=dict(event.details),
    )


def state_to_response(state: GameState) -> GameStateResponse:
    players = [
        PlayerInfo(
            player_id=p.player_id,
            name=p.name,
            player_type=p.player_type.value,
            score=p.score,
            is_current_turn=i == state.current_player_idx and not state.is_game_over,
            has_first_player=p.has_first_player,
            pattern_lines=[list(line) for line in p.pattern_lines],
            wall=[list(row) for row in p.wall],
            floor_line=list(p.floor_line),
            star_board=(
                {star: list(slots) for star, slots in p.star_board.rings.items()}
                if p.star_board is not None else None
            ),
            hand=list(p.hand),
            has_passed=p.has_passed,
            end_game_bonus=p.end_game_bonus,
        )
        for i, p in enumerate(state.players)
    ]
    return GameStateResponse(
        game_id=state.game_id,
        variant=state.variant.value,
        phase=state.phase.value,
        round_number=state.round_number,
        current_player_index=state.current_player_idx,
        players=players,
        factories=[list(f) for f in state.display.factories],
        center=list(state.display.center),
        center_has_first_player=state.display.center_has_first_player,
        wild_color=state.wild_color,
        bonus_supply=list(state.bonus_supply),
        bag_count=len(state.supply.bag),
        discard_count=len(state.supply.discard),
        turn_count=len(state.turn_log),
        is_game_over=state.is_game_over,
    )


@dataclass
class GameService:
    """
    Main API service.

    Usage:
        service = GameService()
        response = service.create_game(CreateGameRequest(...))
        response = service.apply_action(response.game_id, ActionRequest(...))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    ai: AIPlayer = field(default_factory=AIPlayer)

    # Play AI seats automatically after creation and human moves
    auto_play_ai: bool = True

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_game(self, request: CreateGameRequest) -> GameResponse | ErrorResponse:
        try:
            session = self.session_manager.create_session(
                request.variant,
                [{"name": p.name, "type": p.type.value} for p in request.players],
                seed=request.seed,
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

        loop = self._loop(session)
        if self.auto_play_ai:
            return self._turn_to_response(session, loop.run_ai_turns())
        return self._turn_to_response(session, TurnResult(success=True, loop_state=loop.state))

    def get_game_state(self, game_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        return state_to_response(session.game_state)

    def get_legal_moves(self, game_id: str) -> LegalMovesResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        moves = get_legal_moves(session.game_state)
        return LegalMovesResponse(
            game_id=game_id,
            current_player_index=session.game_state.current_player_idx,
            moves=[action_to_info(m) for m in moves],
            count=len(moves),
        )

    def apply_action(self, game_id: str, request: ActionRequest) -> GameResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        if not session.is_human_turn():
            return ErrorResponse(
                error="It is not a human player's turn",
                error_code=ErrorCode.NOT_HUMAN_TURN,
            )
        try:
            action = action_from_request(request)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

        result = self._loop(session).submit_action(action, run_ai=self.auto_play_ai)
        if not result.success:
            return ErrorResponse(
                error=result.errors[0] if result.errors else "Invalid move",
                error_code=ErrorCode.INVALID_MOVE,
                details={"events": [event_to_info(e).model_dump() for e in result.events]},
            )
        return self._turn_to_response(session, result)

    def run_ai(self, game_id: str) -> GameResponse | ErrorResponse:
        """Play AI seats until a human is to move or the game ends."""
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        return self._turn_to_response(session, self._loop(session).run_ai_turns())

    def get_winner(self, game_id: str) -> WinnerResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        result = determine_winner(session.game_state)
        return WinnerResponse(
            game_id=game_id,
            is_game_over=session.game_state.is_game_over,
            winners=list(result.winners),
            is_tie=result.is_tie,
            rankings=[
                RankingInfo(
                    player_index=r.player_index,
                    name=r.name,
                    score=r.score,
                    complete_rows=r.complete_rows,
                    end_game_bonus=r.end_game_bonus,
                )
                for r in result.rankings
            ],
        )

    def end_game(self, game_id: str, reason: str = "user_ended") -> bool:
        self._game_loops.pop(game_id, None)
        return self.session_manager.end_session(game_id, reason) is not None

    def list_games(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def list_variants(self) -> VariantListResponse:
        return VariantListResponse(variants=[VariantInfo(**v) for v in list_variants()])

    # =========================================================================
    # Helpers
    # =========================================================================

    def _loop(self, session: Session) -> GameLoop:
        if session.session_id not in self._game_loops:
            self._game_loops[session.session_id] = GameLoop(
                session,
                reducer=self.session_manager.reducer,
                ai=self.ai,
            )
        return self._game_loops[session.session_id]

    def _turn_to_response(self, session: Session, result: TurnResult) -> GameResponse:
        return GameResponse(
            success=result.success,
            game_id=session.session_id,
            state=state_to_response(session.game_state),
            events=[event_to_info(e) for e in result.events],
            ai_actions=result.ai_actions,
            errors=result.errors,
            winners=result.winners,
        )

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )
