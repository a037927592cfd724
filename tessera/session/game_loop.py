"""
Game Loop - Threads a session's state through the engine.

The loop:
1. A human action comes in and is applied by the reducer
2. If the round is over, round-end processing runs immediately
3. AI seats move until a human is to act or the game ends
4. The caller gets the events of everything that happened

play_match() runs the same loop headless with AI on every seat.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Iterable

from ..bots.dispatcher import AIPlayer
from ..engine_core.action import Action, Event
from ..engine_core.reducer import Reducer
from ..engine_core.rules import WinnerResult, determine_winner
from ..engine_core.state import GameState, PlayerType, Variant
from .manager import Session, SessionManager

logger = logging.getLogger(__name__)


MAX_AI_ACTIONS = 5000


class LoopState(Enum):
    """State of the game loop."""
    WAITING_HUMAN_ACTION = "waiting_human_action"
    RUNNING_AI = "running_ai"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing a turn.

    Contains every event produced, including AI moves and round ends.
    """
    success: bool
    loop_state: LoopState

    events: list[Event] = field(default_factory=list)

    # AI actions taken, as "name: description"
    ai_actions: list[str] = field(default_factory=list)

    errors: list[str] = field(default_factory=list)

    # Game over info
    winners: list[int] = field(default_factory=list)


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)
        result = loop.submit_action(action)
        if not result.success:
            show(result.errors)
    """

    def __init__(
        self,
        session: Session,
        reducer: Reducer | None = None,
        ai: AIPlayer | None = None,
        max_ai_actions: int = MAX_AI_ACTIONS,
    ):
        self.session = session
        self.reducer = reducer or Reducer()
        self.ai = ai or AIPlayer()
        self.max_ai_actions = max_ai_actions

    @property
    def state(self) -> LoopState:
        game = self.session.game_state
        if game.is_game_over:
            return LoopState.GAME_OVER
        if game.current_player.is_human:
            return LoopState.WAITING_HUMAN_ACTION
        return LoopState.RUNNING_AI

    def submit_action(self, action: Action, run_ai: bool = True) -> TurnResult:
        """Apply a human action, then let AI seats respond."""
        if not self.session.game_state.current_player.is_human:
            return TurnResult(
                success=False,
                loop_state=self.state,
                errors=["It is not a human player's turn"],
            )

        ok, events, error = self._step(action)
        if not ok:
            return TurnResult(
                success=False,
                loop_state=self.state,
                events=events,
                errors=[error],
            )

        result = self.run_ai_turns() if run_ai else TurnResult(success=True, loop_state=self.state)
        result.events[:0] = events
        return result

    def run_ai_turns(self) -> TurnResult:
        """Run AI turns until a human is to move or the game ends."""
        events: list[Event] = []
        ai_actions: list[str] = []

        for _ in range(self.max_ai_actions):
            if self.state is not LoopState.RUNNING_AI:
                break
            player = self.session.game_state.current_player
            move = self.ai.select_move(self.session.game_state)
            if move is None:
                logger.warning("AI %s has no legal move in phase %s", player.name, self.session.game_state.phase.value)
                break
            ok, step_events, _ = self._step(move)
            if not ok:
                # legal moves are always accepted; a rejection means the engine and bots disagree
                return TurnResult(
                    success=False,
                    loop_state=self.state,
                    events=events,
                    ai_actions=ai_actions,
                    errors=[f"AI move rejected: {move.describe()}"],
                )
            events.extend(step_events)
            ai_actions.append(f"{player.name}: {move.describe()}")

        return self._result(events, ai_actions)

    async def run_ai_turns_async(self) -> TurnResult:
        """Like run_ai_turns, but each AI move waits out its thinking delay."""
        events: list[Event] = []
        ai_actions: list[str] = []

        for _ in range(self.max_ai_actions):
            if self.state is not LoopState.RUNNING_AI:
                break
            player = self.session.game_state.current_player
            move = await self.ai.execute_ai_turn(self.session.game_state)
            if move is None:
                break
            ok, step_events, error = self._step(move)
            if not ok:
                logger.error("AI move rejected: %s", error)
                break
            events.extend(step_events)
            ai_actions.append(f"{player.name}: {move.describe()}")

        return self._result(events, ai_actions)

    def _step(self, action: Action) -> tuple[bool, list[Event], str | None]:
        """Apply one action and any round end it triggers."""
        result = self.reducer.apply(self.session.game_state, action)
        if not result.success:
            return False, result.events, result.error

        events = list(result.events)
        self.session.record(result.new_state, result.events)
        if self.session.game_state.is_round_over:
            round_end = self.reducer.process_round_end(self.session.game_state)
            self.session.record(round_end.new_state, round_end.events)
            events.extend(round_end.events)
        return True, events, None

    def _result(self, events: list[Event], ai_actions: list[str]) -> TurnResult:
        winners: list[int] = []
        if self.session.game_state.is_game_over:
            winners = list(determine_winner(self.session.game_state).winners)
        return TurnResult(
            success=True,
            loop_state=self.state,
            events=events,
            ai_actions=ai_actions,
            winners=winners,
        )


@dataclass
class MatchResult:
    """Outcome of a headless match."""
    final_state: GameState
    winner: WinnerResult
    actions: int
    completed: bool = True


def play_match(
    variant: Variant | str = Variant.CLASSIC,
    player_types: Iterable[PlayerType | str] = (PlayerType.AI_EASY, PlayerType.AI_EASY),
    seed: int | None = None,
    ai: AIPlayer | None = None,
    reducer: Reducer | None = None,
    max_actions: int = MAX_AI_ACTIONS,
) -> MatchResult:
    """
    Play a full match with AI on every seat.

    Raises ValueError if any seat is human.
    """
    player_types = [PlayerType(t) if isinstance(t, str) else t for t in player_types]
    if any(not t.is_ai for t in player_types):
        raise ValueError("play_match needs AI players on every seat")

    reducer = reducer or Reducer()
    manager = SessionManager(reducer=reducer)
    session = manager.create_session(
        variant,
        [{"name": f"{t.value} #{i + 1}", "type": t} for i, t in enumerate(player_types)],
        seed=seed,
    )
    loop = GameLoop(session, reducer=reducer, ai=ai or AIPlayer(seed=seed), max_ai_actions=max_actions)
    result = loop.run_ai_turns()

    final_state = session.game_state
    completed = final_state.is_game_over
    if not completed:
        logger.warning("Match %s stopped after %d actions without finishing", session.session_id, len(final_state.turn_log))
    return MatchResult(
        final_state=final_state,
        winner=determine_winner(final_state),
        actions=len(final_state.turn_log),
        completed=completed and result.success,
    )
