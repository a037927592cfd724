"""
Tests for API layer.

Tests:
- API service methods
- Session lifecycle via API
- Error handling
- HTTP endpoints through the FastAPI test client
"""

import pytest

from ..api.schemas import (
    ActionRequest,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameResponse,
    PlayerConfig,
)
from ..api.service import GameService, action_from_request
from ..bots.dispatcher import AIPlayer
from ..engine_core.action import FLOOR, ActionType, TileSource


async def no_sleep(_delay):
    return None


def human_vs_bot(seed=3, variant="classic"):
    return CreateGameRequest(
        variant=variant,
        players=[PlayerConfig(name="Ann"), PlayerConfig(name="Bot", type="ai-easy")],
        seed=seed,
    )


class TestActionTranslation:
    """Tests for request-to-engine translation."""

    def test_take(self):
        action = action_from_request(ActionRequest(
            action_type="take", source="factory", factory_index=2, color="red", target_row="3",
        ))
        assert action.action_type is ActionType.TAKE
        assert action.source is TileSource.FACTORY
        assert action.target_row == 3

    def test_floor_target(self):
        action = action_from_request(ActionRequest(
            action_type="take", source="center", color="red", target_row="floor",
        ))
        assert action.target_row == FLOOR

    @pytest.mark.parametrize("request_data", [
        {"action_type": "steal"},
        {"action_type": "take", "source": "bag", "color": "red", "target_row": 0},
    ])
    def test_unknown_values(self, request_data):
        with pytest.raises(ValueError):
            action_from_request(ActionRequest(**request_data))


class TestGameService:
    """Tests for GameService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return GameService(ai=AIPlayer(seed=1, sleep=no_sleep))

    def test_create_game(self, service):
        response = service.create_game(human_vs_bot())

        assert isinstance(response, GameResponse)
        assert response.success
        assert response.state.variant == "classic"
        assert len(response.state.players) == 2
        assert response.state.players[0].is_current_turn
        assert len(response.state.factories) == 5

    def test_ai_first_seat_moves_on_create(self, service):
        request = CreateGameRequest(
            players=[PlayerConfig(name="Bot", type="ai-medium"), PlayerConfig(name="Ann")],
            seed=4,
        )
        response = service.create_game(request)

        assert len(response.ai_actions) == 1
        assert response.state.current_player_index == 1

    def test_unknown_variant(self, service):
        response = service.create_game(human_vs_bot(variant="winter"))
        assert isinstance(response, ErrorResponse)
        assert response.error_code is ErrorCode.VALIDATION_ERROR

    def test_legal_moves_then_action(self, service):
        game_id = service.create_game(human_vs_bot()).game_id
        moves = service.get_legal_moves(game_id)
        assert moves.count == len(moves.moves) > 0

        move = moves.moves[0]
        response = service.apply_action(game_id, ActionRequest(**move.model_dump(exclude={"description"})))

        assert isinstance(response, GameResponse)
        assert response.events[0].event_type == "TILES_PICKED"
        assert response.ai_actions
        assert response.state.turn_count >= 2

    def test_invalid_move(self, service):
        game_id = service.create_game(human_vs_bot()).game_id
        before = service.get_game_state(game_id)
        response = service.apply_action(game_id, ActionRequest(
            action_type="take", source="factory", factory_index=0, color="green", target_row=0,
        ))

        assert isinstance(response, ErrorResponse)
        assert response.error_code is ErrorCode.INVALID_MOVE
        assert response.details["events"][0]["event_type"] == "INVALID_MOVE"
        assert service.get_game_state(game_id) == before

    def test_not_found(self, service):
        for response in (
            service.get_game_state("missing"),
            service.get_legal_moves("missing"),
            service.get_winner("missing"),
            service.run_ai("missing"),
        ):
            assert isinstance(response, ErrorResponse)
            assert response.error_code is ErrorCode.GAME_NOT_FOUND

    def test_end_and_list(self, service):
        game_id = service.create_game(human_vs_bot()).game_id
        assert service.list_games() == [game_id]
        assert service.end_game(game_id)
        assert service.list_games() == []
        assert not service.end_game(game_id)

    def test_winner_standings(self, service):
        game_id = service.create_game(human_vs_bot()).game_id
        winner = service.get_winner(game_id)
        assert not winner.is_game_over
        assert winner.is_tie
        assert len(winner.rankings) == 2

    def test_variants(self, service):
        ids = [v.id for v in service.list_variants().variants]
        assert ids == ["classic", "summer"]


class TestHTTP:
    """Tests for the FastAPI endpoints."""

    @pytest.fixture
    def client(self):
        from fastapi.testclient import TestClient
        from ..api.app import create_app

        app = create_app(GameService(ai=AIPlayer(seed=1, sleep=no_sleep)))
        return TestClient(app)

    @pytest.fixture
    def game_id(self, client):
        response = client.post("/api/v1/games", json={
            "variant": "summer",
            "players": [{"name": "Ann"}, {"name": "Bot", "type": "ai-easy"}],
            "seed": 5,
        })
        assert response.status_code == 200
        return response.json()["game_id"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_variants(self, client):
        response = client.get("/api/v1/variants")
        assert [v["id"] for v in response.json()["variants"]] == ["classic", "summer"]

    def test_state_and_moves(self, client, game_id):
        state = client.get(f"/api/v1/games/{game_id}").json()
        assert state["variant"] == "summer"
        assert state["wild_color"] == "purple"

        moves = client.get(f"/api/v1/games/{game_id}/moves").json()
        assert moves["count"] > 0
        assert all(m["action_type"] == "draft" for m in moves["moves"])

    def test_submit_action(self, client, game_id):
        move = client.get(f"/api/v1/games/{game_id}/moves").json()["moves"][0]
        move.pop("description")
        response = client.post(f"/api/v1/games/{game_id}/actions", json=move)

        assert response.status_code == 200
        assert response.json()["success"]

    def test_invalid_move_is_400(self, client, game_id):
        response = client.post(f"/api/v1/games/{game_id}/actions", json={"action_type": "pass"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_MOVE"

    def test_missing_game_is_404(self, client):
        response = client.get("/api/v1/games/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "GAME_NOT_FOUND"

    def test_delete(self, client, game_id):
        assert client.delete(f"/api/v1/games/{game_id}").json()["success"]
        assert client.get(f"/api/v1/games/{game_id}").status_code == 404
