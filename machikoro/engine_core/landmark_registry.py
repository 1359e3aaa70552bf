"""
Landmark Registry - landmark ownership, availability and cost.

Version 1: every in-use landmark is always available and each player may
build each one once.
Version 2: landmarks are drawn from a shuffled deck until 5 distinct ones
are available (all of them under the Total policy); each can be built by
only one player, and the cost depends on how many the buyer has built.
"""

from __future__ import annotations
import logging

from ..rules.errors import VersionMismatchError
from ..rules.landmarks import (
    LAUNCH_PAD2,
    LOAN_OFFICE2,
    MK2_LANDMARK_SUPPLY_LIMIT,
    OBSERVATORY2,
    STARTING_LANDMARKS,
    all_landmarks,
    landmarks_in_use,
)
from ..rules.types import Expansion, Landmark, SupplyVariant, Version
from .state import GameState, LandmarkData

logger = logging.getLogger(__name__)


def check_version(state: GameState, land: Landmark) -> None:
    """Raise VersionMismatchError if the card belongs to the other ruleset."""
    if land.version != state.version:
        raise VersionMismatchError(
            f"Landmark {land.name!r} is version {int(land.version)}, "
            f"game is version {int(state.version)}"
        )


# ============================================================================
# Setup
# ============================================================================

def initialize(
    version: Version,
    expansions: tuple[Expansion, ...],
    num_players: int,
) -> tuple[LandmarkData, list[int]]:
    """Build landmark flags and the unshuffled version 2 deck."""
    n = len(all_landmarks(version))
    data = LandmarkData(
        in_use=[False] * n,
        available=[False] * n,
        owned=[[False] * n for _ in range(num_players)],
    )

    in_use = landmarks_in_use(version, expansions)
    for land in in_use:
        data.in_use[land.id] = True
        if version == Version.MK1:
            data.available[land.id] = True

    starting = [land_id for land_id in STARTING_LANDMARKS[version] if data.in_use[land_id]]
    for land_id in starting:
        for player in range(num_players):
            data.owned[player][land_id] = True

    deck: list[int] = []
    if version == Version.MK2:
        deck = [land.id for land in in_use if land.id not in starting]

    return data, deck


def replenish(state: GameState) -> None:
    """Draw version 2 landmarks into the supply. Does nothing in version 1."""
    if state.version == Version.MK1:
        return

    deck = state.secret.land_deck
    available = state.land_data.available
    drawn: list[int] = []
    if state.supply_variant == SupplyVariant.TOTAL:
        while deck:
            land_id = deck.pop()
            available[land_id] = True
            drawn.append(land_id)
    else:
        while deck and sum(available) < MK2_LANDMARK_SUPPLY_LIMIT:
            land_id = deck.pop()
            available[land_id] = True
            drawn.append(land_id)

    if drawn:
        logger.debug("Replenished landmarks %s", drawn)


# ============================================================================
# Queries
# ============================================================================

def owns(state: GameState, player: int, land: Landmark) -> bool:
    check_version(state, land)
    return state.land_data.owned[player][land.id]


def is_owned(state: GameState, land: Landmark) -> bool:
    """True if any player owns the landmark."""
    check_version(state, land)
    return any(owned[land.id] for owned in state.land_data.owned)


def is_available(state: GameState, land: Landmark) -> bool:
    check_version(state, land)
    return state.land_data.available[land.id]


def get_all_in_use(state: GameState) -> list[Landmark]:
    return [land for land in all_landmarks(state.version) if state.land_data.in_use[land.id]]


def get_all_available(state: GameState) -> list[Landmark]:
    return [land for land in all_landmarks(state.version) if state.land_data.available[land.id]]


def get_all_owned(state: GameState, player: int) -> list[Landmark]:
    owned = state.land_data.owned[player]
    return [land for land in all_landmarks(state.version) if owned[land.id]]


def count_built(state: GameState, player: int) -> int:
    """Landmarks the player owns, not counting starting landmarks."""
    starting = STARTING_LANDMARKS[state.version]
    return sum(1 for land in get_all_owned(state, player) if land.id not in starting)


def cost_array(state: GameState, land: Landmark, player: int | None) -> list[int]:
    """
    The landmark's cost table after modifiers.

    - Launch Pad costs 5 less for everyone once anyone owns Observatory
    - The Loan Office owner pays 2 less for every landmark
    """
    check_version(state, land)
    costs = list(land.cost)
    if state.version != Version.MK2:
        return costs

    if land.id == LAUNCH_PAD2.id and is_owned(state, OBSERVATORY2):
        costs = [cost - OBSERVATORY2.coins for cost in costs]
    if player is not None and owns(state, player, LOAN_OFFICE2):
        costs = [cost - LOAN_OFFICE2.coins for cost in costs]
    return costs


def cost_of(state: GameState, land: Landmark, player: int) -> int:
    """What the player would pay for the landmark right now."""
    costs = cost_array(state, land, player)
    if state.version == Version.MK1:
        return costs[0]
    built = count_built(state, player)
    return costs[min(built, len(costs) - 1)]


# ============================================================================
# Mutations
# ============================================================================

def can_buy(state: GameState, player: int, land: Landmark) -> bool:
    """
    True if the player may buy the landmark right now, ignoring phase.

    Loan Office may only be built while the buyer is the only player
    without a built landmark.
    """
    check_version(state, land)
    if not (
        state.land_data.in_use[land.id]
        and state.land_data.available[land.id]
        and not state.land_data.owned[player][land.id]
        and state.money[player] >= cost_of(state, land, player)
    ):
        return False
    if state.version == Version.MK2 and land.id == LOAN_OFFICE2.id:
        return count_built(state, player) == 0 and all(
            count_built(state, other) > 0
            for other in range(state.num_players)
            if other != player
        )
    return True


def buy(state: GameState, player: int, land: Landmark) -> bool:
    """
    Pay for a landmark and mark it owned.

    The cost is taken before ownership changes, since ownership affects
    the cost. Returns False, leaving the state untouched, if `can_buy`
    fails.
    """
    if not can_buy(state, player, land):
        return False
    state.money[player] -= cost_of(state, land, player)
    state.land_data.owned[player][land.id] = True
    if state.version == Version.MK2:
        state.land_data.available[land.id] = False
    return True
