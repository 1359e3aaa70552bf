"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages matches
3. Maps engine rejections and fatal setup errors to ErrorResponse
4. Formats responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateMatchRequest,
    MoveRequest,
    # Responses
    MatchResponse,
    MatchListResponse,
    LegalActionsResponse,
    MoveResponse,
    LogResponse,
    EndMatchResponse,
    CardListResponse,
    ErrorResponse,
    # Shared
    ActionInfo,
    EventInfo,
    MatchSummary,
    CardInfo,
    # Enums
    ErrorCode,
    MatchStatus,
)
from ..engine_core import Action, ActionPayload, ActionType, Event, legal_actions, public_view
from ..rules import (
    ConfigurationError,
    SetupConfig,
    UnknownCardError,
    Version,
    all_establishments,
    all_landmarks,
)
from ..session import Match, MatchManager


@dataclass
class MatchService:
    """
    Main API service.

    Usage:
        service = MatchService()

        match = service.create_match(CreateMatchRequest(num_players=3))
        service.legal_actions(match.match_id)
        service.submit_move(match.match_id, MoveRequest(action_type="roll_one"))
    """
    manager: MatchManager = field(default_factory=MatchManager)

    def create_match(self, request: CreateMatchRequest) -> MatchResponse | ErrorResponse:
        """Create a new match from setup data."""
        config = SetupConfig(
            version=Version(request.version),
            expansions=tuple(request.expansions),
            supply_variant=request.supply_variant,
            start_coins=request.start_coins,
            randomize_turn_order=request.randomize_turn_order,
            num_players=request.num_players,
        )
        try:
            match = self.manager.create_match(config, seed=request.seed)
        except ConfigurationError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_SETUP,
                details={"errors": e.errors},
            )
        return self._match_to_response(match)

    def get_match(self, match_id: str) -> MatchResponse | ErrorResponse:
        match = self.manager.get_match(match_id)
        if match is None:
            return self._not_found(match_id)
        return self._match_to_response(match)

    def list_matches(self) -> MatchListResponse:
        summaries = [self._summary(match) for match in self.manager.list_matches()]
        return MatchListResponse(matches=summaries, count=len(summaries))

    def end_match(self, match_id: str) -> EndMatchResponse:
        match = self.manager.end_match(match_id)
        return EndMatchResponse(success=match is not None, match_id=match_id)

    def legal_actions(self, match_id: str) -> LegalActionsResponse | ErrorResponse:
        match = self.manager.get_match(match_id)
        if match is None:
            return self._not_found(match_id)
        state = match.state
        return LegalActionsResponse(
            match_id=match_id,
            current_player=state.current_player,
            phase=state.phase.value,
            actions=[ActionInfo(**action.to_dict()) for action in legal_actions(state)],
        )

    def submit_move(self, match_id: str, request: MoveRequest) -> MoveResponse | ErrorResponse:
        """Apply a move. Rejections come back as ErrorResponse with the engine's code."""
        match = self.manager.get_match(match_id)
        if match is None:
            return self._not_found(match_id)

        action = Action(
            action_type=ActionType(request.action_type.value),
            payload=ActionPayload(
                establishment_id=request.establishment_id,
                landmark_id=request.landmark_id,
                opponent=request.opponent,
                roll=request.roll,
            ),
        )
        try:
            result = match.submit(action, player=request.player)
        except UnknownCardError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.UNKNOWN_CARD)

        if not result.success:
            return ErrorResponse(
                error=result.error or "Move rejected",
                error_code=ErrorCode(result.error_code or ErrorCode.INVALID_ACTION.value),
            )
        return MoveResponse(
            match_id=match_id,
            events=[self._event_info(event) for event in result.events],
            state=public_view(match.state),
        )

    def get_log(self, match_id: str) -> LogResponse | ErrorResponse:
        match = self.manager.get_match(match_id)
        if match is None:
            return self._not_found(match_id)
        events = [self._event_info(event) for event in match.log]
        return LogResponse(match_id=match_id, events=events, count=len(events))

    def list_cards(self, version: int) -> CardListResponse:
        ver = Version(version)
        return CardListResponse(
            version=int(ver),
            establishments=[
                CardInfo(
                    id=est.id,
                    name=est.name,
                    kind="establishment",
                    cost=[est.cost],
                    description=est.description,
                    color=est.color.value,
                    rolls=list(est.rolls),
                )
                for est in all_establishments(ver)
            ],
            landmarks=[
                CardInfo(
                    id=land.id,
                    name=land.name,
                    kind="landmark",
                    cost=list(land.cost),
                    description=land.description,
                )
                for land in all_landmarks(ver)
            ],
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _not_found(self, match_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Match {match_id} not found",
            error_code=ErrorCode.MATCH_NOT_FOUND,
        )

    def _summary(self, match: Match) -> MatchSummary:
        state = match.state
        return MatchSummary(
            match_id=match.match_id,
            status=MatchStatus(match.status.value),
            version=int(state.version),
            num_players=state.num_players,
            turn_number=state.turn_number,
            current_player=state.current_player,
            winner=state.winner,
        )

    def _match_to_response(self, match: Match) -> MatchResponse:
        return MatchResponse(
            match_id=match.match_id,
            status=MatchStatus(match.status.value),
            seed=match.seed,
            summary=self._summary(match),
            state=public_view(match.state),
        )

    def _event_info(self, event: Event) -> EventInfo:
        return EventInfo(**event.to_dict())
