"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- (state, action) -> new_state; the input state is never modified
- Validates before applying: a rejected move mutates nothing, logs
  nothing and consumes no randomness
- Returns ActionResult with success/failure and the move's events
- Delegates money movement to EffectResolver
- Fatal errors (unknown card ids, broken state) propagate
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from ..rules.errors import InvariantError
from ..rules.establishments import get_establishment
from ..rules.landmarks import (
    CITY_HALL,
    CITY_HALL2,
    LAUNCH_PAD2,
    MK2_LANDMARKS_TO_WIN,
    get_landmark,
)
from ..rules.types import Version
from . import guards
from . import landmark_registry as lands
from . import supply
from .action import Action, ActionResult, ActionType, ErrorCode
from .effect_resolver import EffectResolver
from .events import EventLog
from .random_service import RandomService
from .state import GamePhase, GameState, TurnFlags, TurnPhase


# Phases in which each action can possibly be legal
ACTION_PHASES: dict[ActionType, frozenset[TurnPhase]] = {
    ActionType.ROLL_ONE: frozenset({TurnPhase.ROLL}),
    ActionType.ROLL_TWO: frozenset({TurnPhase.ROLL}),
    ActionType.KEEP_ROLL: frozenset({TurnPhase.ROLL}),
    ActionType.ADD_TWO: frozenset({TurnPhase.ROLL}),
    ActionType.DEBUG_ROLL: frozenset({TurnPhase.ROLL}),
    ActionType.BUY_ESTABLISHMENT: frozenset({TurnPhase.BUY}),
    ActionType.BUY_LANDMARK: frozenset({TurnPhase.BUY}),
    ActionType.RESOLVE_TV: frozenset({TurnPhase.TV}),
    ActionType.RESOLVE_OFFICE_PHASE1: frozenset({TurnPhase.OFFICE_PHASE1}),
    ActionType.RESOLVE_OFFICE_PHASE2: frozenset({TurnPhase.OFFICE_PHASE2}),
    ActionType.SKIP_OFFICE: frozenset({TurnPhase.OFFICE_PHASE1, TurnPhase.OFFICE_PHASE2}),
    ActionType.END_TURN: frozenset({TurnPhase.BUY, TurnPhase.END}),
}


def has_won(state: GameState, player: int) -> bool:
    """
    Victory check, run after a landmark purchase.

    Version 1: the player owns every landmark in use.
    Version 2: the player owns Launch Pad or has built 3 landmarks.
    """
    if state.version == Version.MK1:
        return all(lands.owns(state, player, land) for land in lands.get_all_in_use(state))
    return (
        lands.owns(state, player, LAUNCH_PAD2)
        or lands.count_built(state, player) >= MK2_LANDMARKS_TO_WIN
    )


def begin_turn(state: GameState) -> None:
    """Turn-start hook: replenish the supply, then reset the turn."""
    lands.replenish(state)
    supply.replenish(state)
    state.phase = TurnPhase.ROLL
    state.roll = None
    state.num_rolls = 0
    state.flags = TurnFlags()


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the match's randomness service; all game state
    is in GameState.
    """
    random: RandomService
    allow_debug: bool = False

    def apply(self, state: GameState, action: Action, player: int | None = None) -> ActionResult:
        """
        Apply an action to the game state.

        If `player` is given, the action is rejected unless it is that
        player's turn. Returns ActionResult with new state and events,
        or a rejection.
        """
        rejection = self._validate_action(state, action, player)
        if rejection:
            error, error_code = rejection
            return ActionResult.failure(error, error_code=error_code)

        handler = self._get_handler(action.action_type)
        new_state = state.clone()
        resolver = EffectResolver(new_state, self.random, EventLog())
        handler(new_state, action, resolver)
        return ActionResult.success_with_state(new_state, events=list(resolver.log))

    def _validate_action(
        self, state: GameState, action: Action, player: int | None
    ) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (error message, error code) if invalid, None if valid.
        """
        if state.is_game_over:
            return "Game is over - no actions allowed", ErrorCode.GAME_OVER

        if player is not None and player != state.current_player:
            return f"Not player {player}'s turn", ErrorCode.NOT_YOUR_TURN

        action_type = action.action_type
        if action_type == ActionType.DEBUG_ROLL and not self.allow_debug:
            return "Debug moves are disabled", ErrorCode.DEBUG_DISABLED

        if state.phase not in ACTION_PHASES[action_type]:
            return (
                f"Cannot {action_type.value} during the {state.phase.value} phase",
                ErrorCode.WRONG_PHASE,
            )

        if not self._is_legal(state, action):
            return f"Illegal {action_type.value}: {action.payload.to_dict()}", ErrorCode.INVALID_ACTION

        return None

    def _is_legal(self, state: GameState, action: Action) -> bool:
        """Run the action's guard predicate."""
        payload = action.payload
        action_type = action.action_type

        if action_type == ActionType.ROLL_ONE:
            return guards.can_roll(state, 1)
        if action_type == ActionType.ROLL_TWO:
            return guards.can_roll(state, 2)
        if action_type == ActionType.DEBUG_ROLL:
            roll = payload.roll
            return (
                isinstance(roll, int) and not isinstance(roll, bool) and roll >= 1
                and guards.can_roll(state, 1)
            )
        if action_type == ActionType.KEEP_ROLL:
            return guards.can_commit_roll(state)
        if action_type == ActionType.ADD_TWO:
            return guards.can_add_two(state)
        if action_type == ActionType.BUY_ESTABLISHMENT:
            est = get_establishment(state.version, payload.establishment_id)
            return guards.can_buy_establishment(state, est)
        if action_type == ActionType.BUY_LANDMARK:
            land = get_landmark(state.version, payload.landmark_id)
            return guards.can_buy_landmark(state, land)
        if action_type == ActionType.RESOLVE_TV:
            return guards.can_do_tv(state, payload.opponent)
        if action_type == ActionType.RESOLVE_OFFICE_PHASE1:
            est = get_establishment(state.version, payload.establishment_id)
            return guards.can_do_office_phase1(state, est)
        if action_type == ActionType.RESOLVE_OFFICE_PHASE2:
            if not guards.is_player(state, payload.opponent):
                return False
            est = get_establishment(state.version, payload.establishment_id)
            return guards.can_do_office_phase2(state, payload.opponent, est)
        if action_type == ActionType.SKIP_OFFICE:
            return guards.can_skip_office(state)
        if action_type == ActionType.END_TURN:
            return guards.can_end_turn(state)
        return False

    def _get_handler(
        self, action_type: ActionType
    ) -> Callable[[GameState, Action, EffectResolver], None]:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.ROLL_ONE: self._handle_roll_one,
            ActionType.ROLL_TWO: self._handle_roll_two,
            ActionType.DEBUG_ROLL: self._handle_debug_roll,
            ActionType.KEEP_ROLL: self._handle_keep_roll,
            ActionType.ADD_TWO: self._handle_add_two,
            ActionType.BUY_ESTABLISHMENT: self._handle_buy_establishment,
            ActionType.BUY_LANDMARK: self._handle_buy_landmark,
            ActionType.RESOLVE_TV: self._handle_tv,
            ActionType.RESOLVE_OFFICE_PHASE1: self._handle_office_phase1,
            ActionType.RESOLVE_OFFICE_PHASE2: self._handle_office_phase2,
            ActionType.SKIP_OFFICE: self._handle_skip_office,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers[action_type]

    # ========================================================================
    # Roll phase
    # ========================================================================

    def _handle_roll_one(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        roll = self.random.die()
        self._record_roll(state, roll, (roll,))
        resolver.log.roll_one(roll)
        self._maybe_commit(state, resolver)

    def _handle_roll_two(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        dice = self.random.dice(2)
        self._record_roll(state, sum(dice), dice)
        resolver.log.roll_two(dice)
        self._maybe_commit(state, resolver)

    def _handle_debug_roll(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        """Forced total. Counts as a one-die roll, so it never rolls doubles."""
        roll = action.payload.roll
        self._record_roll(state, roll, ())
        resolver.log.roll_one(roll)
        self._maybe_commit(state, resolver)

    def _handle_keep_roll(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        self._commit_roll(state, resolver)

    def _handle_add_two(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        state.roll += 2
        resolver.log.roll_modified(state.roll)
        self._commit_roll(state, resolver)

    def _record_roll(self, state: GameState, roll: int, dice: tuple[int, ...]) -> None:
        state.roll = roll
        state.num_rolls += 1
        state.flags.dice = tuple(dice)

    def _maybe_commit(self, state: GameState, resolver: EffectResolver) -> None:
        """Skip the confirmation step when the roll cannot be changed anymore."""
        if guards.no_further_roll_actions(state):
            self._commit_roll(state, resolver)

    def _commit_roll(self, state: GameState, resolver: EffectResolver) -> None:
        resolver.resolve_roll()
        self._switch_phase(state, resolver)

    def _switch_phase(self, state: GameState, resolver: EffectResolver) -> None:
        """
        Branch after the roll is resolved, and again after TV or Office.

        Pending TV runs first, then pending Office; otherwise City Hall
        tops up a broke player and the Buy phase starts.
        """
        flags = state.flags
        if flags.do_tv > 0:
            flags.do_tv -= 1
            state.phase = TurnPhase.TV
        elif flags.do_office > 0:
            flags.do_office -= 1
            state.phase = TurnPhase.OFFICE_PHASE1
        else:
            player = state.current_player
            city_hall = CITY_HALL if state.version == Version.MK1 else CITY_HALL2
            if state.money[player] == 0 and lands.owns(state, player, city_hall):
                resolver.earn(player, city_hall.coins, city_hall.name)
            state.phase = TurnPhase.BUY

    # ========================================================================
    # Buy phase
    # ========================================================================

    def _handle_buy_establishment(
        self, state: GameState, action: Action, resolver: EffectResolver
    ) -> None:
        player = state.current_player
        est = get_establishment(state.version, action.payload.establishment_id)
        if not supply.buy(state, player, est):
            raise InvariantError(f"Validated purchase of {est.name!r} failed")
        state.flags.just_bought_est = est.id
        resolver.log.buy(player, est.name)
        state.phase = TurnPhase.END

    def _handle_buy_landmark(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        player = state.current_player
        land = get_landmark(state.version, action.payload.landmark_id)
        if not lands.buy(state, player, land):
            raise InvariantError(f"Validated purchase of {land.name!r} failed")
        state.flags.just_bought_land = land.id
        resolver.log.buy(player, land.name)
        resolver.resolve_landmark_built(player, land)
        state.phase = TurnPhase.END
        if has_won(state, player):
            self._end_game(state, resolver, player)

    # ========================================================================
    # Sub-phases
    # ========================================================================

    def _handle_tv(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        resolver.resolve_tv(action.payload.opponent)
        self._switch_phase(state, resolver)

    def _handle_office_phase1(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        state.flags.office_give_est = action.payload.establishment_id
        state.phase = TurnPhase.OFFICE_PHASE2

    def _handle_office_phase2(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        player = state.current_player
        opponent = action.payload.opponent
        if state.flags.office_give_est is None:
            raise InvariantError("No establishment staged before the second Office phase")
        give = get_establishment(state.version, state.flags.office_give_est)
        take = get_establishment(state.version, action.payload.establishment_id)

        supply.transfer(state, player, opponent, give)
        supply.transfer(state, opponent, player, take)
        resolver.log.office_trade(player, opponent, give.name, take.name)

        state.flags.office_give_est = None
        self._switch_phase(state, resolver)

    def _handle_skip_office(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        state.flags.office_give_est = None
        state.flags.do_office = 0
        self._switch_phase(state, resolver)

    # ========================================================================
    # End of turn / game
    # ========================================================================

    def _handle_end_turn(self, state: GameState, action: Action, resolver: EffectResolver) -> None:
        player = state.current_player
        resolver.resolve_end_turn(player, built_nothing=state.phase == TurnPhase.BUY)

        if not state.flags.second_turn:
            state.turn_order_pos = (state.turn_order_pos + 1) % state.num_players
        state.turn_number += 1
        begin_turn(state)

    def _end_game(self, state: GameState, resolver: EffectResolver, winner: int) -> None:
        resolver.log.end_game(winner)
        state.game_phase = GamePhase.GAME_OVER
        state.winner = winner


def apply_action(
    state: GameState,
    action: Action,
    random: RandomService,
    allow_debug: bool = False,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(random=random, allow_debug=allow_debug)
    return reducer.apply(state, action)
