"""
Pydantic Schemas for API - request/response models for OpenAPI.

These models define the contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- MATCH_NOT_FOUND: Match does not exist or has been ended
- INVALID_SETUP: Setup data rejected by validation
- UNKNOWN_CARD: Move names an establishment or landmark that does not exist
- GAME_OVER / WRONG_PHASE / INVALID_ACTION / NOT_YOUR_TURN / DEBUG_DISABLED:
  the engine rejected the move
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..rules.types import Expansion, SupplyVariant


# =============================================================================
# Enums
# =============================================================================

class MatchStatus(str, Enum):
    """Match status values."""
    ACTIVE = "active"
    FINISHED = "finished"
    ABANDONED = "abandoned"


class MoveType(str, Enum):
    """Named moves."""
    ROLL_ONE = "roll_one"
    ROLL_TWO = "roll_two"
    KEEP_ROLL = "keep_roll"
    ADD_TWO = "add_two"
    BUY_ESTABLISHMENT = "buy_establishment"
    BUY_LANDMARK = "buy_landmark"
    RESOLVE_TV = "resolve_tv"
    RESOLVE_OFFICE_PHASE1 = "resolve_office_phase1"
    RESOLVE_OFFICE_PHASE2 = "resolve_office_phase2"
    SKIP_OFFICE = "skip_office"
    END_TURN = "end_turn"
    DEBUG_ROLL = "debug_roll"


class ErrorCode(str, Enum):
    """Structured error codes."""
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    INVALID_SETUP = "INVALID_SETUP"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    GAME_OVER = "GAME_OVER"
    WRONG_PHASE = "WRONG_PHASE"
    INVALID_ACTION = "INVALID_ACTION"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    DEBUG_DISABLED = "DEBUG_DISABLED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ActionInfo(BaseModel):
    """A move, as listed by the legal-actions endpoint and in histories."""
    action_type: MoveType
    establishment_id: Optional[int] = None
    landmark_id: Optional[int] = None
    opponent: Optional[int] = None
    roll: Optional[int] = None


class EventInfo(BaseModel):
    """A structured game event."""
    event_type: str = Field(description="roll_one, roll_two, roll_modified, earn, take, buy, "
                                        "office_trade, shared_roll_used, end_game")
    player: Optional[int] = None
    from_player: Optional[int] = None
    to_player: Optional[int] = Field(None, description="None when the bank is paid")
    opponent: Optional[int] = None
    amount: Optional[int] = None
    name: Optional[str] = None
    roll: Optional[int] = None
    dice: Optional[list[int]] = None
    player_est: Optional[str] = None
    opponent_est: Optional[str] = None
    winner: Optional[int] = None


class MatchSummary(BaseModel):
    """Short match description for listings."""
    match_id: str
    status: MatchStatus
    version: int
    num_players: int
    turn_number: int
    current_player: int
    winner: Optional[int] = None


class CardInfo(BaseModel):
    """Static card information for display."""
    id: int
    name: str
    kind: str = Field(description="establishment or landmark")
    cost: list[int]
    description: str = ""
    color: Optional[str] = None
    rolls: Optional[list[int]] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateMatchRequest(BaseModel):
    """Setup data for a new match."""
    version: int = Field(1, ge=1, le=2, description="1 = Machi Koro, 2 = Machi Koro 2")
    expansions: list[Expansion] = Field(default_factory=lambda: [Expansion.BASE])
    supply_variant: SupplyVariant = SupplyVariant.TOTAL
    start_coins: int = Field(3, description="Starting coins per player")
    randomize_turn_order: bool = False
    num_players: int = Field(2, description="2 to 5")
    seed: Optional[int] = Field(None, description="Seed for dice and shuffles")


class MoveRequest(BaseModel):
    """A move for the current player."""
    action_type: MoveType
    establishment_id: Optional[int] = None
    landmark_id: Optional[int] = None
    opponent: Optional[int] = None
    roll: Optional[int] = Field(None, description="debug_roll only")
    player: Optional[int] = Field(None, description="If given, must be the current player")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class MatchResponse(BaseModel):
    """A match with its public state."""
    match_id: str
    status: MatchStatus
    seed: int
    summary: MatchSummary
    state: dict[str, Any] = Field(description="Public game state (no secret decks)")


class MatchListResponse(BaseModel):
    """Response listing matches."""
    matches: list[MatchSummary]
    count: int


class LegalActionsResponse(BaseModel):
    """Every move the current player can make right now."""
    match_id: str
    current_player: int
    phase: str
    actions: list[ActionInfo]


class MoveResponse(BaseModel):
    """Result of an accepted move."""
    match_id: str
    events: list[EventInfo]
    state: dict[str, Any]


class LogResponse(BaseModel):
    """The full event log of a match."""
    match_id: str
    events: list[EventInfo]
    count: int


class EndMatchResponse(BaseModel):
    """Response after ending a match."""
    success: bool
    match_id: str


class CardListResponse(BaseModel):
    """Static cards of one ruleset version."""
    version: int
    establishments: list[CardInfo]
    landmarks: list[CardInfo]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
