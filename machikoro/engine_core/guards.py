"""
Guard predicates - is a move legal right now?

Every guard is a pure function of the state and the move's arguments;
the acting player is always the current player. The reducer runs the
guard before touching anything, and presentation layers can call the
same functions to show which moves are legal.
"""

from __future__ import annotations

from ..rules.landmarks import HARBOR, RADIO_TOWER, TRAIN_STATION
from ..rules.types import Establishment, Landmark, Version
from . import landmark_registry as lands
from . import supply
from .state import GameState, TurnPhase

# Harbor lets the roller add 2 to a total at or above this value
HARBOR_MIN_ROLL = 10


def _in_phase(state: GameState, *phases: TurnPhase) -> bool:
    return not state.is_game_over and state.phase in phases


def is_player(state: GameState, player: object) -> bool:
    return (
        isinstance(player, int)
        and not isinstance(player, bool)
        and 0 <= player < state.num_players
    )


def can_roll(state: GameState, n: int) -> bool:
    """
    True if the current player can roll `n` dice.

    Version 1: one die always, two with Train Station; a second roll
    with Radio Tower.
    Version 2: one or two dice, one roll per turn.
    """
    if not _in_phase(state, TurnPhase.ROLL):
        return False
    player = state.current_player
    if state.version == Version.MK1:
        return (
            (n == 1 or (n == 2 and lands.owns(state, player, TRAIN_STATION)))
            and (
                state.num_rolls == 0
                or (state.num_rolls == 1 and lands.owns(state, player, RADIO_TOWER))
            )
        )
    return n in (1, 2) and state.num_rolls == 0


def can_commit_roll(state: GameState) -> bool:
    """True if the dice have been rolled and the outcome can be evaluated."""
    return _in_phase(state, TurnPhase.ROLL) and state.num_rolls > 0


def can_add_two(state: GameState) -> bool:
    """True if the current player can activate Harbor."""
    return (
        state.version == Version.MK1
        and can_commit_roll(state)
        and lands.owns(state, state.current_player, HARBOR)
        and state.roll is not None
        and state.roll >= HARBOR_MIN_ROLL
    )


def no_further_roll_actions(state: GameState) -> bool:
    """True if the roll cannot be modified any further and commits itself."""
    return not (can_add_two(state) or can_roll(state, 1) or can_roll(state, 2))


def can_buy_establishment(state: GameState, est: Establishment) -> bool:
    return (
        _in_phase(state, TurnPhase.BUY)
        and supply.can_buy(state, state.current_player, est)
    )


def can_buy_landmark(state: GameState, land: Landmark) -> bool:
    return (
        _in_phase(state, TurnPhase.BUY)
        and lands.can_buy(state, state.current_player, land)
    )


def can_do_tv(state: GameState, opponent: int) -> bool:
    """True if the current player can take coins from `opponent` with TV Station."""
    return (
        _in_phase(state, TurnPhase.TV)
        and is_player(state, opponent)
        and opponent != state.current_player
    )


def can_do_office_phase1(state: GameState, est: Establishment) -> bool:
    """
    True if the current player can stage `est` to give away.

    Version 1 does not allow trading Purple establishments.
    """
    return (
        _in_phase(state, TurnPhase.OFFICE_PHASE1)
        and supply.count_owned(state, state.current_player, est) > 0
        and (state.version != Version.MK1 or not est.is_purple)
    )


def can_do_office_phase2(state: GameState, opponent: int, est: Establishment) -> bool:
    """True if the current player can take `est` from `opponent`."""
    return (
        _in_phase(state, TurnPhase.OFFICE_PHASE2)
        and is_player(state, opponent)
        and opponent != state.current_player
        and supply.count_owned(state, opponent, est) > 0
        and (state.version != Version.MK1 or not est.is_purple)
    )


def can_skip_office(state: GameState) -> bool:
    """Only version 2 lets the player skip the Office trade."""
    return (
        state.version == Version.MK2
        and _in_phase(state, TurnPhase.OFFICE_PHASE1, TurnPhase.OFFICE_PHASE2)
    )


def can_end_turn(state: GameState) -> bool:
    return _in_phase(state, TurnPhase.BUY, TurnPhase.END)
