"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /api/v1/variants                List rule variants
    POST   /api/v1/games                   Create a game
    GET    /api/v1/games                   List active games
    GET    /api/v1/games/{id}              Get game state
    DELETE /api/v1/games/{id}              End a game
    GET    /api/v1/games/{id}/moves        Legal moves for the player to act
    POST   /api/v1/games/{id}/actions      Submit a human action
    POST   /api/v1/games/{id}/ai           Play pending AI turns
    GET    /api/v1/games/{id}/winner       Standings
    GET    /health                         Health check

After a human action, AI seats move automatically and their events are
included in the response, followed by any round-end processing.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging
import os

from .. import __version__

# Environment configuration
TESSERA_ENV = os.getenv("TESSERA_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
TESSERA_AI_TIME_LIMIT_MS = int(os.getenv("TESSERA_AI_TIME_LIMIT_MS", "2000"))
TESSERA_LOG_LEVEL = os.getenv("TESSERA_LOG_LEVEL", "INFO")


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..bots.dispatcher import AIPlayer
    from .service import GameService
    from .schemas import (
        # Request models
        ActionRequest,
        CreateGameRequest,
        # Response models
        EndGameResponse,
        ErrorResponse,
        GameListResponse,
        GameResponse,
        GameStateResponse,
        HealthResponse,
        LegalMovesResponse,
        VariantListResponse,
        WinnerResponse,
        # Enums
        ErrorCode,
    )

    logging.getLogger("tessera").setLevel(TESSERA_LOG_LEVEL.upper())

    app = FastAPI(
        title="Tessera Engine API",
        description="""
Tile-drafting game engine with Classic and Summer rule variants and AI opponents.

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist or has been ended |
| `INVALID_MOVE` | Action failed validation; the game is unchanged |
| `NOT_HUMAN_TURN` | An AI seat is to move |
| `VALIDATION_ERROR` | Malformed request |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or GameService(ai=AIPlayer(time_limit_ms=TESSERA_AI_TIME_LIMIT_MS))

    # =========================================================================
    # Error helpers
    # =========================================================================

    status_for_code = {
        ErrorCode.GAME_NOT_FOUND: 404,
        ErrorCode.INVALID_MOVE: 400,
        ErrorCode.NOT_HUMAN_TURN: 409,
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_for_code.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(result):
        if isinstance(result, ErrorResponse):
            return make_error_response(result)
        return result

    # =========================================================================
    # Variants
    # =========================================================================

    @app.get(
        "/api/v1/variants",
        response_model=VariantListResponse,
        tags=["Variants"],
        summary="List rule variants",
    )
    async def list_variants() -> VariantListResponse:
        return api_service.list_variants()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid variant or players"}},
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(body: CreateGameRequest) -> Union[GameResponse, JSONResponse]:
        """
        Create a new game.

        If the first seat is an AI, its turns are played before the
        response is returned.
        """
        return respond(api_service.create_game(body))

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List active games",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game_state(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(
        game_id: str,
        reason: Annotated[Optional[str], Query(description="Reason for ending")] = "user_ended",
    ) -> EndGameResponse:
        success = api_service.end_game(game_id, reason or "user_ended")
        return EndGameResponse(success=success, game_id=game_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games/{game_id}/moves",
        response_model=LegalMovesResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Legal moves for the player to act",
    )
    async def get_moves(game_id: str) -> Union[LegalMovesResponse, JSONResponse]:
        return respond(api_service.get_legal_moves(game_id))

    @app.post(
        "/api/v1/games/{game_id}/actions",
        response_model=GameResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid move"},
            404: {"model": ErrorResponse, "description": "Game not found"},
            409: {"model": ErrorResponse, "description": "Not a human turn"},
        },
        tags=["Game Loop"],
        summary="Submit an action",
    )
    async def submit_action(game_id: str, body: ActionRequest) -> Union[GameResponse, JSONResponse]:
        """
        Apply an action for the human player to act.

        Rejected actions leave the game unchanged.
        """
        return respond(api_service.apply_action(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/ai",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Play pending AI turns",
    )
    async def run_ai(game_id: str) -> Union[GameResponse, JSONResponse]:
        return respond(api_service.run_ai(game_id))

    @app.get(
        "/api/v1/games/{game_id}/winner",
        response_model=WinnerResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Current standings",
    )
    async def get_winner(game_id: str) -> Union[WinnerResponse, JSONResponse]:
        return respond(api_service.get_winner(game_id))

    # =========================================================================
    # System
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(version=__version__, environment=TESSERA_ENV)

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Tessera Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn tessera.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
