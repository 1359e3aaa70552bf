"""
FastAPI Application - REST API for playing matches.

Endpoints:
    GET    /api/v1/health                   Health check
    GET    /api/v1/cards/{version}          Static card tables
    POST   /api/v1/matches                  Create match
    GET    /api/v1/matches                  List matches
    GET    /api/v1/matches/{id}             Get match and public state
    DELETE /api/v1/matches/{id}             End match
    GET    /api/v1/matches/{id}/actions     Legal moves for the current player
    POST   /api/v1/matches/{id}/moves       Submit a move
    GET    /api/v1/matches/{id}/log         Full event log

All responses are JSON with explicit Pydantic schemas. Secret decks are
never included in any response.
"""

from typing import Annotated, Union
import os

from fastapi import FastAPI, Path
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__

# Environment configuration
MACHIKORO_ENV = os.getenv("MACHIKORO_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# HTTP status per error code
ERROR_STATUS = {
    "MATCH_NOT_FOUND": 404,
    "INVALID_SETUP": 400,
    "UNKNOWN_CARD": 400,
    "VALIDATION_ERROR": 400,
    "INTERNAL_ERROR": 500,
}
REJECTION_STATUS = 409


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional MatchService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from .service import MatchService
    from .schemas import (
        # Request models
        CreateMatchRequest,
        MoveRequest,
        # Response models
        MatchResponse,
        MatchListResponse,
        LegalActionsResponse,
        MoveResponse,
        LogResponse,
        EndMatchResponse,
        CardListResponse,
        ErrorResponse,
        HealthResponse,
    )
    from ..session import MatchManager

    app = FastAPI(
        title="Machi Koro Engine API",
        description="""
Deterministic rules engine for Machi Koro and Machi Koro 2.

## Playing a match

1. `POST /matches` with setup data (optionally a seed)
2. `GET /matches/{id}/actions` lists the current player's legal moves
3. `POST /matches/{id}/moves` applies one; the response carries the
   move's events and the new public state

## Error Codes

| Code | Status | Description |
|------|--------|-------------|
| `MATCH_NOT_FOUND` | 404 | Match does not exist |
| `INVALID_SETUP` | 400 | Setup data rejected |
| `UNKNOWN_CARD` | 400 | No such establishment or landmark |
| `GAME_OVER` | 409 | The match has a winner |
| `WRONG_PHASE` | 409 | Move not allowed in this phase |
| `INVALID_ACTION` | 409 | Move not legal right now |
| `NOT_YOUR_TURN` | 409 | Another player is active |
| `DEBUG_DISABLED` | 409 | Debug moves are off in production |
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

    api_service = service or MatchService(
        manager=MatchManager(allow_debug=MACHIKORO_ENV != "production")
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        status_code = ERROR_STATUS.get(error.error_code.value, REJECTION_STATUS)
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    # =========================================================================
    # Meta Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Meta"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            service="machikoro",
            version=__version__,
            environment=MACHIKORO_ENV,
        )

    @app.get(
        "/api/v1/cards/{version}",
        response_model=CardListResponse,
        tags=["Meta"],
        summary="List the cards of a ruleset version",
    )
    async def list_cards(
        version: Annotated[int, Path(description="1 or 2", ge=1, le=2)],
    ) -> CardListResponse:
        return api_service.list_cards(version)

    # =========================================================================
    # Match Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/matches",
        response_model=MatchResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid setup data"}},
        tags=["Matches"],
        summary="Create a new match",
    )
    async def create_match(request: CreateMatchRequest) -> Union[MatchResponse, JSONResponse]:
        """Create a match. The first player starts in the Roll phase."""
        response = api_service.create_match(request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/matches",
        response_model=MatchListResponse,
        tags=["Matches"],
        summary="List matches",
    )
    async def list_matches() -> MatchListResponse:
        return api_service.list_matches()

    @app.get(
        "/api/v1/matches/{match_id}",
        response_model=MatchResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Get a match and its public state",
    )
    async def get_match(match_id: str) -> Union[MatchResponse, JSONResponse]:
        response = api_service.get_match(match_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/matches/{match_id}",
        response_model=EndMatchResponse,
        tags=["Matches"],
        summary="End a match",
    )
    async def end_match(match_id: str) -> EndMatchResponse:
        """End a match and release it."""
        return api_service.end_match(match_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/matches/{match_id}/actions",
        response_model=LegalActionsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="List legal moves",
    )
    async def get_actions(match_id: str) -> Union[LegalActionsResponse, JSONResponse]:
        response = api_service.legal_actions(match_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/matches/{match_id}/moves",
        response_model=MoveResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown card"},
            404: {"model": ErrorResponse, "description": "Match not found"},
            409: {"model": ErrorResponse, "description": "Move rejected"},
        },
        tags=["Game Loop"],
        summary="Submit a move",
    )
    async def submit_move(match_id: str, request: MoveRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Apply a move for the current player.

        A rejected move changes nothing and returns 409 with the reason.
        """
        response = api_service.submit_move(match_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/matches/{match_id}/log",
        response_model=LogResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get the event log",
    )
    async def get_log(match_id: str) -> Union[LogResponse, JSONResponse]:
        response = api_service.get_log(match_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    return app


# For running directly: uvicorn machikoro.api.app:app
app = create_app()
