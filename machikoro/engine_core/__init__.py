"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Sets up a GameState from validated setup data
2. Manages the supply and landmarks
3. Generates legal actions
4. Applies actions via the reducer
5. Resolves roll effects pass by pass
"""

from .state import (
    GameState,
    GamePhase,
    TurnPhase,
    TurnFlags,
    EstablishmentData,
    LandmarkData,
    SecretDecks,
)
from .events import Event, EventLog, EventType
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode
from .random_service import RandomService, FixedDice
from .reducer import Reducer, apply_action, begin_turn, has_won
from .action_generator import ActionGenerator, legal_actions
from .effect_resolver import EffectResolver
from .setup import setup_game
from .view import public_view

__all__ = [
    "GameState",
    "GamePhase",
    "TurnPhase",
    "TurnFlags",
    "EstablishmentData",
    "LandmarkData",
    "SecretDecks",
    "Event",
    "EventLog",
    "EventType",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "RandomService",
    "FixedDice",
    "Reducer",
    "apply_action",
    "begin_turn",
    "has_won",
    "ActionGenerator",
    "legal_actions",
    "EffectResolver",
    "setup_game",
    "public_view",
]
