"""
Effect Resolver - money movement for a committed roll.

This module handles:
- The take and earn primitives (every coin movement goes through them)
- The four establishment passes, in the fixed order Red, Green, Blue, Purple
- The turn-wide shared roll used by Tuna Boat
- Version 2 landmark effects (roll bonuses, build-time one-shots)
- Turn-end bonuses (Airport)

Within a pass establishments are processed in ascending id order. The
resolver mutates the state it was built with and appends to its log; the
reducer hands it a clone, so a rejected move never reaches it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..rules.establishments import all_establishments
from ..rules.landmarks import (
    AIRPORT,
    AIRPORT2,
    AMUSEMENT_PARK,
    AMUSEMENT_PARK2,
    CHARTERHOUSE2,
    EXHIBIT_HALL2,
    FARMERS_MARKET2,
    FORGE2,
    FRENCH_RESTAURANT2,
    HARBOR,
    MUSEUM2,
    PARK2,
    PUBLISHER2,
    RADIO_TOWER2,
    SHOPPING_MALL,
    SHOPPING_MALL2,
    SODA_BOTTLING_PLANT2,
    TECH_STARTUP2,
    TEMPLE2,
    TV_STATION2,
)
from ..rules.types import EstColor, EstType, Establishment, Landmark, PurpleEffect, Version
from . import landmark_registry as lands
from . import supply
from .events import EventLog
from .random_service import RandomService
from .state import GameState

logger = logging.getLogger(__name__)

# Version 2 landmarks that add coins to one combo type, for everyone,
# once anyone owns them.
MK2_TYPE_BONUSES: tuple[tuple[Landmark, EstType], ...] = (
    (FARMERS_MARKET2, EstType.WHEAT),
    (SHOPPING_MALL2, EstType.SHOP),
    (FORGE2, EstType.GEAR),
    (SODA_BOTTLING_PLANT2, EstType.CUP),
)

# Roll that pays out Tech Startup
TECH_STARTUP_ROLL = 12


def is_doubles(dice: tuple[int, ...]) -> bool:
    return len(dice) == 2 and dice[0] == dice[1]


@dataclass
class EffectResolver:
    """
    Resolves card effects against one state.

    Usage:
        resolver = EffectResolver(state, random, log)
        resolver.resolve_roll()
    """
    state: GameState
    random: RandomService
    log: EventLog = field(default_factory=EventLog)

    # Players credited during the current roll resolution
    _received: set[int] = field(default_factory=set)

    # ========================================================================
    # Primitives
    # ========================================================================

    def earn(self, player: int, amount: int, name: str) -> None:
        """The bank pays `amount` to `player`. Logged only if positive."""
        if amount <= 0:
            return
        self.state.money[player] += amount
        self._received.add(player)
        self.log.earn(player, amount, name)

    def take(self, from_player: int, to_player: int | None, amount: int, name: str) -> int:
        """
        Move up to `amount` coins from one player to another.

        The debit is clamped to the source's balance. A `to_player` of
        None pays the bank. Returns the amount actually moved, which is
        logged only if positive.
        """
        actual = min(amount, self.state.money[from_player])
        if actual <= 0:
            return 0
        self.state.money[from_player] -= actual
        if to_player is not None:
            self.state.money[to_player] += actual
            self._received.add(to_player)
        self.log.take(from_player, to_player, actual, name)
        return actual

    def shared_roll(self) -> int:
        """The turn-wide roll of two dice, rolled at most once per turn."""
        flags = self.state.flags
        if flags.tuna_roll is None:
            flags.tuna_roll = sum(self.random.dice(2))
            self.log.shared_roll_used(flags.tuna_roll)
        return flags.tuna_roll

    # ========================================================================
    # Roll resolution
    # ========================================================================

    def resolve_roll(self) -> None:
        """Run every effect triggered by the committed roll."""
        state = self.state
        roll = state.roll
        if roll is None:
            return
        self._received = set()
        active = [
            est for est in all_establishments(state.version)
            if state.est_data.in_use[est.id] and est.activates_on(roll)
        ]
        logger.debug(
            "Resolving roll %d for player %d: %s",
            roll, state.current_player, [est.name for est in active],
        )

        self._red_pass([est for est in active if est.color == EstColor.RED])
        self._green_pass([est for est in active if est.color == EstColor.GREEN])
        self._blue_pass([est for est in active if est.color == EstColor.BLUE])
        self._purple_pass([est for est in active if est.color == EstColor.PURPLE])
        self._after_passes()

    def earnings_bonus(self, player: int, est: Establishment) -> int:
        """
        Extra coins per copy from landmarks.

        Version 1: the owner's Shopping Mall adds 1 to Cup and Shop cards.
        Version 2: four landmarks each add 1 to one combo type, for every
        player, once anyone owns them.
        """
        if est.est_type is None:
            return 0
        state = self.state
        if state.version == Version.MK1:
            if est.est_type in (EstType.CUP, EstType.SHOP) and lands.owns(state, player, SHOPPING_MALL):
                return SHOPPING_MALL.coins
            return 0
        return sum(
            land.coins for land, est_type in MK2_TYPE_BONUSES
            if est_type == est.est_type and lands.is_owned(state, land)
        )

    def _harbor_ok(self, player: int, est: Establishment) -> bool:
        return not est.requires_harbor or lands.owns(self.state, player, HARBOR)

    def _red_pass(self, ests: list[Establishment]) -> None:
        """Opponents, backward from the roller, take from the roller."""
        state = self.state
        roller = state.current_player
        for opponent in state.previous_players():
            for est in ests:
                if not self._harbor_ok(opponent, est):
                    continue
                count = state.est_data.owned[opponent][est.id]
                if count == 0:
                    continue
                amount = (est.earn + self.earnings_bonus(opponent, est)) * count
                self.take(roller, opponent, amount, est.name)

    def _green_pass(self, ests: list[Establishment]) -> None:
        """The roller's Green establishments pay from the bank."""
        state = self.state
        roller = state.current_player
        for est in ests:
            count = state.est_data.owned[roller][est.id]
            if count == 0:
                continue
            earnings = est.earn + self.earnings_bonus(roller, est)
            multiplier = 1
            if est.combo is not None:
                if est.combo.est_type is not None:
                    multiplier = supply.count_owned_by_type(state, roller, est.combo.est_type)
                else:
                    multiplier = state.est_data.owned[roller][est.combo.establishment_id]
            self.earn(roller, earnings * multiplier * count, est.name)

    def _blue_pass(self, ests: list[Establishment]) -> None:
        """Everyone's Blue establishments pay from the bank, forward from the roller."""
        state = self.state
        for player in state.next_players():
            for est in ests:
                if not self._harbor_ok(player, est):
                    continue
                count = state.est_data.owned[player][est.id]
                if count == 0:
                    continue
                earnings = self.shared_roll() if est.uses_shared_roll else est.earn
                earnings += self.earnings_bonus(player, est)
                self.earn(player, earnings * count, est.name)

    def _purple_pass(self, ests: list[Establishment]) -> None:
        """The roller's Purple establishments, each with its own effect."""
        state = self.state
        roller = state.current_player
        for est in ests:
            count = state.est_data.owned[roller][est.id]
            if count == 0:
                continue
            effect = est.purple_effect
            if effect == PurpleEffect.STADIUM:
                for opponent in state.previous_players():
                    self.take(opponent, roller, est.earn * count, est.name)
            elif effect == PurpleEffect.TV_STATION:
                state.flags.do_tv = count
            elif effect == PurpleEffect.OFFICE:
                state.flags.do_office = count
            elif effect == PurpleEffect.PUBLISHER:
                for opponent in state.previous_players():
                    n_cups = supply.count_owned_by_type(state, opponent, EstType.CUP)
                    n_shops = supply.count_owned_by_type(state, opponent, EstType.SHOP)
                    self.take(opponent, roller, est.earn * (n_cups + n_shops) * count, est.name)
            elif effect == PurpleEffect.TAX_OFFICE:
                for opponent in state.previous_players():
                    # every copy activates in version 2
                    for _ in range(count):
                        coins = state.money[opponent]
                        if coins < est.earn:
                            break
                        self.take(opponent, roller, coins // 2, est.name)

    def _after_passes(self) -> None:
        """Landmark effects keyed on the roll itself."""
        state = self.state
        roller = state.current_player
        dice = state.flags.dice
        doubles = is_doubles(dice)

        if state.version == Version.MK1:
            if doubles and lands.owns(state, roller, AMUSEMENT_PARK):
                state.flags.second_turn = True
            return

        if state.roll == TECH_STARTUP_ROLL and lands.is_owned(state, TECH_STARTUP2):
            self.earn(roller, TECH_STARTUP2.coins, TECH_STARTUP2.name)
        if doubles and lands.is_owned(state, TEMPLE2):
            for opponent in state.previous_players():
                self.take(opponent, roller, TEMPLE2.coins, TEMPLE2.name)
        if len(dice) == 2 and roller not in self._received and lands.is_owned(state, CHARTERHOUSE2):
            self.earn(roller, CHARTERHOUSE2.coins, CHARTERHOUSE2.name)
        if doubles and lands.is_owned(state, AMUSEMENT_PARK2):
            state.flags.second_turn = True

    # ========================================================================
    # Other effects
    # ========================================================================

    def resolve_tv(self, opponent: int) -> None:
        """TV Station: take a fixed amount from the chosen opponent."""
        tv_station = next(
            est for est in all_establishments(self.state.version)
            if est.purple_effect == PurpleEffect.TV_STATION
        )
        self.take(opponent, self.state.current_player, tv_station.earn, tv_station.name)

    def resolve_landmark_built(self, player: int, land: Landmark) -> None:
        """One-shot effects of building a version 2 landmark."""
        state = self.state
        if state.version != Version.MK2:
            return

        if land.id == FRENCH_RESTAURANT2.id:
            for opponent in state.previous_players():
                self.take(opponent, player, land.coins, land.name)
        elif land.id == PUBLISHER2.id:
            for opponent in state.previous_players():
                shops = supply.count_owned_by_type(state, opponent, EstType.SHOP)
                self.take(opponent, player, land.coins * shops, land.name)
        elif land.id == TV_STATION2.id:
            for opponent in state.previous_players():
                cups = supply.count_owned_by_type(state, opponent, EstType.CUP)
                self.take(opponent, player, land.coins * cups, land.name)
        elif land.id == EXHIBIT_HALL2.id:
            for opponent in state.previous_players():
                coins = state.money[opponent]
                if coins >= land.coins:
                    self.take(opponent, player, coins // 2, land.name)
        elif land.id == MUSEUM2.id:
            for opponent in state.previous_players():
                built = lands.count_built(state, opponent)
                self.take(opponent, player, land.coins * built, land.name)
        elif land.id == PARK2.id:
            self._redistribute(land.name)
        elif land.id == RADIO_TOWER2.id:
            state.flags.second_turn = True

    def _redistribute(self, name: str) -> None:
        """Pool every player's coins and split them evenly, the bank rounding up."""
        state = self.state
        order = state.next_players()
        total = sum(state.money)
        share = -(-total // state.num_players)
        for player in order:
            self.take(player, None, state.money[player], name)
        for player in order:
            self.earn(player, share, name)

    def resolve_end_turn(self, player: int, built_nothing: bool) -> None:
        """Airport: a bonus for ending the turn without building."""
        state = self.state
        if not built_nothing:
            return
        if state.version == Version.MK1:
            if lands.owns(state, player, AIRPORT):
                self.earn(player, AIRPORT.coins, AIRPORT.name)
        elif lands.is_owned(state, AIRPORT2):
            self.earn(player, AIRPORT2.coins, AIRPORT2.name)
