"""
Action System - Actions, payloads, and results.

Actions represent the named moves of the game:
1. Roll moves (roll one or two dice, keep, add two with Harbor)
2. Buy moves (establishment, landmark)
3. Sub-phase moves (TV, Office trade, skip Office)
4. End turn, and a debug-only forced roll

All state changes flow through actions. The acting player is always the
current player; actions carry no player id.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .events import Event


class ActionType(Enum):
    """Types of actions in the system."""
    # Roll phase
    ROLL_ONE = "roll_one"
    ROLL_TWO = "roll_two"
    KEEP_ROLL = "keep_roll"
    ADD_TWO = "add_two"

    # Buy phase
    BUY_ESTABLISHMENT = "buy_establishment"
    BUY_LANDMARK = "buy_landmark"

    # Sub-phases
    RESOLVE_TV = "resolve_tv"
    RESOLVE_OFFICE_PHASE1 = "resolve_office_phase1"
    RESOLVE_OFFICE_PHASE2 = "resolve_office_phase2"
    SKIP_OFFICE = "skip_office"

    END_TURN = "end_turn"

    # Testing only
    DEBUG_ROLL = "debug_roll"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the reducer.
    """
    establishment_id: int | None = None
    landmark_id: int | None = None
    opponent: int | None = None
    roll: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    def to_dict(self) -> dict[str, Any]:
        return {"action_type": self.action_type.value, **self.payload.to_dict()}

    @classmethod
    def roll_one(cls) -> Action:
        """Factory for rolling one die."""
        return cls(action_type=ActionType.ROLL_ONE)

    @classmethod
    def roll_two(cls) -> Action:
        """Factory for rolling two dice."""
        return cls(action_type=ActionType.ROLL_TWO)

    @classmethod
    def keep_roll(cls) -> Action:
        """Factory for committing the current roll unchanged."""
        return cls(action_type=ActionType.KEEP_ROLL)

    @classmethod
    def add_two(cls) -> Action:
        """Factory for the Harbor roll modification."""
        return cls(action_type=ActionType.ADD_TWO)

    @classmethod
    def buy_establishment(cls, establishment_id: int) -> Action:
        return cls(
            action_type=ActionType.BUY_ESTABLISHMENT,
            payload=ActionPayload(establishment_id=establishment_id),
        )

    @classmethod
    def buy_landmark(cls, landmark_id: int) -> Action:
        return cls(
            action_type=ActionType.BUY_LANDMARK,
            payload=ActionPayload(landmark_id=landmark_id),
        )

    @classmethod
    def resolve_tv(cls, opponent: int) -> Action:
        """Factory for picking the TV Station target."""
        return cls(
            action_type=ActionType.RESOLVE_TV,
            payload=ActionPayload(opponent=opponent),
        )

    @classmethod
    def resolve_office_phase1(cls, establishment_id: int) -> Action:
        """Factory for staging one of your own establishments for a trade."""
        return cls(
            action_type=ActionType.RESOLVE_OFFICE_PHASE1,
            payload=ActionPayload(establishment_id=establishment_id),
        )

    @classmethod
    def resolve_office_phase2(cls, opponent: int, establishment_id: int) -> Action:
        """Factory for picking the opponent's establishment to trade for."""
        return cls(
            action_type=ActionType.RESOLVE_OFFICE_PHASE2,
            payload=ActionPayload(opponent=opponent, establishment_id=establishment_id),
        )

    @classmethod
    def skip_office(cls) -> Action:
        return cls(action_type=ActionType.SKIP_OFFICE)

    @classmethod
    def end_turn(cls) -> Action:
        return cls(action_type=ActionType.END_TURN)

    @classmethod
    def debug_roll(cls, roll: int) -> Action:
        """Factory for a forced roll. Rejected unless debug moves are enabled."""
        return cls(
            action_type=ActionType.DEBUG_ROLL,
            payload=ActionPayload(roll=roll),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        """Inverse of to_dict."""
        return cls(
            action_type=ActionType(data["action_type"]),
            payload=ActionPayload(
                establishment_id=data.get("establishment_id"),
                landmark_id=data.get("landmark_id"),
                opponent=data.get("opponent"),
                roll=data.get("roll"),
            ),
        )


class ErrorCode:
    """Rejection codes carried by a failed ActionResult."""
    GAME_OVER = "GAME_OVER"
    WRONG_PHASE = "WRONG_PHASE"
    INVALID_ACTION = "INVALID_ACTION"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    DEBUG_DISABLED = "DEBUG_DISABLED"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Events the move produced (if succeeded)
    - Errors (if failed)
    """
    success: bool
    new_state: Any | None = None  # GameState
    events: list[Event] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, events: list[Event] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, events=events or [])
