"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. The API to show available moves
2. Simulations to pick a random legal move
3. Tests (every generated action must be accepted by the reducer)

Design: Generates Action objects, not just action types, using the same
guard predicates the reducer checks. Debug rolls are never generated.
"""

from __future__ import annotations
from dataclasses import dataclass

from . import guards
from . import landmark_registry as lands
from . import supply
from .action import Action
from .state import GameState, TurnPhase


@dataclass
class ActionGenerator:
    """Generates legal actions for the current player."""

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if state.is_game_over:
            return []

        phase = state.phase
        if phase == TurnPhase.ROLL:
            return self._generate_roll_actions(state)
        if phase == TurnPhase.TV:
            return self._generate_tv_actions(state)
        if phase == TurnPhase.OFFICE_PHASE1:
            return self._generate_office_phase1_actions(state)
        if phase == TurnPhase.OFFICE_PHASE2:
            return self._generate_office_phase2_actions(state)
        if phase == TurnPhase.BUY:
            return self._generate_buy_actions(state) + [Action.end_turn()]
        return [Action.end_turn()] if guards.can_end_turn(state) else []

    def _generate_roll_actions(self, state: GameState) -> list[Action]:
        actions = []
        if guards.can_roll(state, 1):
            actions.append(Action.roll_one())
        if guards.can_roll(state, 2):
            actions.append(Action.roll_two())
        if guards.can_commit_roll(state):
            actions.append(Action.keep_roll())
        if guards.can_add_two(state):
            actions.append(Action.add_two())
        return actions

    def _generate_buy_actions(self, state: GameState) -> list[Action]:
        actions = [
            Action.buy_establishment(est.id)
            for est in supply.get_all_available(state)
            if guards.can_buy_establishment(state, est)
        ]
        actions.extend(
            Action.buy_landmark(land.id)
            for land in lands.get_all_in_use(state)
            if guards.can_buy_landmark(state, land)
        )
        return actions

    def _generate_tv_actions(self, state: GameState) -> list[Action]:
        return [
            Action.resolve_tv(opponent)
            for opponent in state.previous_players()
            if guards.can_do_tv(state, opponent)
        ]

    def _generate_office_phase1_actions(self, state: GameState) -> list[Action]:
        actions = [
            Action.resolve_office_phase1(est.id)
            for est in supply.get_all_owned(state, state.current_player)
            if guards.can_do_office_phase1(state, est)
        ]
        if guards.can_skip_office(state):
            actions.append(Action.skip_office())
        return actions

    def _generate_office_phase2_actions(self, state: GameState) -> list[Action]:
        actions = [
            Action.resolve_office_phase2(opponent, est.id)
            for opponent in state.previous_players()
            for est in supply.get_all_owned(state, opponent)
            if guards.can_do_office_phase2(state, opponent, est)
        ]
        if guards.can_skip_office(state):
            actions.append(Action.skip_office())
        return actions


def legal_actions(state: GameState) -> list[Action]:
    """Convenience function to get legal actions."""
    return ActionGenerator().generate(state)
