"""
Supply Manager - establishment decks, availability and ownership.

Three replenishment policies, fixed for the whole match:
- Total: the whole deck goes into the supply at once
- Variable: one deck, drawn until 10 distinct establishments are available
- Hybrid: separate decks per activation band, each drawn to its own target
  (version 1: lower 5 / upper 5 / purple 2; version 2: lower 5 / upper 5)

Decks are drawn from the end of their list.
"""

from __future__ import annotations
import logging
from typing import Callable

from ..rules.errors import InvariantError, VersionMismatchError
from ..rules.establishments import (
    STARTING_ESTABLISHMENTS,
    all_establishments,
    establishments_in_use,
    initial_supply,
)
from ..rules.types import (
    EstColor,
    EstType,
    Establishment,
    Expansion,
    SupplyVariant,
    Version,
)
from .state import EstablishmentData, GameState

logger = logging.getLogger(__name__)

VARIABLE_SUPPLY_LIMIT = 10
HYBRID_SUPPLY_LIMIT_LOWER = 5
HYBRID_SUPPLY_LIMIT_UPPER = 5
HYBRID_SUPPLY_LIMIT_MAJOR = 2


DeckFilter = Callable[[Establishment], bool]


def _deck_filters(variant: SupplyVariant, version: Version) -> list[DeckFilter]:
    """One membership test per deck. Every in-use establishment passes exactly one."""
    if variant != SupplyVariant.HYBRID:
        return [lambda est: True]
    if version == Version.MK1:
        return [
            lambda est: est.is_lower and not est.is_purple,
            lambda est: est.is_upper and not est.is_purple,
            lambda est: est.is_purple,
        ]
    return [
        lambda est: est.is_lower,
        lambda est: est.is_upper,
    ]


def _deck_limits(variant: SupplyVariant, version: Version) -> list[int | None]:
    """Distinct-available target per deck. None means draw everything."""
    if variant == SupplyVariant.TOTAL:
        return [None]
    if variant == SupplyVariant.VARIABLE:
        return [VARIABLE_SUPPLY_LIMIT]
    limits = [HYBRID_SUPPLY_LIMIT_LOWER, HYBRID_SUPPLY_LIMIT_UPPER, HYBRID_SUPPLY_LIMIT_MAJOR]
    return limits[:len(_deck_filters(variant, version))]


def check_version(state: GameState, est: Establishment) -> None:
    """Raise VersionMismatchError if the card belongs to the other ruleset."""
    if est.version != state.version:
        raise VersionMismatchError(
            f"Establishment {est.name!r} is version {int(est.version)}, "
            f"game is version {int(state.version)}"
        )


# ============================================================================
# Setup
# ============================================================================

def initialize(
    version: Version,
    expansions: tuple[Expansion, ...],
    supply_variant: SupplyVariant,
    num_players: int,
) -> tuple[EstablishmentData, list[list[int]]]:
    """
    Build establishment counts and the unshuffled decks.

    Every player receives the ruleset's starting establishments, on top
    of the supply. The caller shuffles the decks.
    """
    n = len(all_establishments(version))
    data = EstablishmentData(
        in_use=[False] * n,
        total=[0] * n,
        remaining=[0] * n,
        available=[0] * n,
        owned=[[0] * n for _ in range(num_players)],
    )

    in_use = establishments_in_use(version, expansions)
    for est in in_use:
        data.in_use[est.id] = True
        data.remaining[est.id] = initial_supply(est, num_players)

    for est_id in STARTING_ESTABLISHMENTS[version]:
        for player in range(num_players):
            data.owned[player][est_id] += 1

    for est in in_use:
        data.total[est.id] = data.remaining[est.id] + sum(
            owned[est.id] for owned in data.owned
        )

    filters = _deck_filters(supply_variant, version)
    decks: list[list[int]] = [[] for _ in filters]
    for est in in_use:
        index = next(i for i, accept in enumerate(filters) if accept(est))
        decks[index].extend([est.id] * data.remaining[est.id])

    return data, decks


def replenish(state: GameState) -> None:
    """Draw from the secret decks into the supply, per the match's policy."""
    version = state.version
    filters = _deck_filters(state.supply_variant, version)
    limits = _deck_limits(state.supply_variant, version)
    ests = all_establishments(version)
    drawn: list[int] = []

    for deck, accept, limit in zip(state.secret.est_decks, filters, limits):
        while deck and (
            limit is None
            or sum(1 for est in ests if accept(est) and state.est_data.available[est.id] > 0) < limit
        ):
            est_id = deck.pop()
            state.est_data.available[est_id] += 1
            drawn.append(est_id)

    if drawn:
        logger.debug("Replenished establishments %s (%s)", drawn, state.supply_variant.value)


# ============================================================================
# Queries
# ============================================================================

def count_available(state: GameState, est: Establishment) -> int:
    check_version(state, est)
    return state.est_data.available[est.id]


def count_remaining(state: GameState, est: Establishment) -> int:
    """Copies not owned by anyone (in a deck or available)."""
    check_version(state, est)
    return state.est_data.remaining[est.id]


def count_in_deck(state: GameState, est: Establishment) -> int:
    check_version(state, est)
    return state.est_data.remaining[est.id] - state.est_data.available[est.id]


def count_owned(state: GameState, player: int, est: Establishment) -> int:
    check_version(state, est)
    return state.est_data.owned[player][est.id]


def count_owned_by_type(state: GameState, player: int, est_type: EstType) -> int:
    """Total copies of all establishments of a combo type the player owns."""
    owned = state.est_data.owned[player]
    return sum(owned[est.id] for est in all_establishments(state.version) if est.est_type == est_type)


def count_owned_by_color(state: GameState, player: int, color: EstColor) -> int:
    owned = state.est_data.owned[player]
    return sum(owned[est.id] for est in all_establishments(state.version) if est.color == color)


def get_all_in_use(state: GameState) -> list[Establishment]:
    return [est for est in all_establishments(state.version) if state.est_data.in_use[est.id]]


def get_all_available(state: GameState) -> list[Establishment]:
    return [est for est in all_establishments(state.version) if state.est_data.available[est.id] > 0]


def get_all_owned(state: GameState, player: int) -> list[Establishment]:
    owned = state.est_data.owned[player]
    return [est for est in all_establishments(state.version) if owned[est.id] > 0]


# ============================================================================
# Mutations
# ============================================================================

def can_buy(state: GameState, player: int, est: Establishment) -> bool:
    """
    True if the player may buy the establishment right now, ignoring phase.

    In version 1 a player may own at most one copy of each Purple
    establishment.
    """
    check_version(state, est)
    return (
        state.est_data.available[est.id] > 0
        and state.money[player] >= est.cost
        and (
            state.version != Version.MK1
            or not est.is_purple
            or state.est_data.owned[player][est.id] == 0
        )
    )


def buy(state: GameState, player: int, est: Establishment) -> bool:
    """
    Pay for an establishment and move one copy from the supply to the player.

    Returns False, leaving the state untouched, if `can_buy` fails.
    """
    if not can_buy(state, player, est):
        return False
    state.money[player] -= est.cost
    state.est_data.remaining[est.id] -= 1
    state.est_data.available[est.id] -= 1
    state.est_data.owned[player][est.id] += 1
    return True


def transfer(state: GameState, from_player: int, to_player: int, est: Establishment) -> None:
    """Move one owned copy between players. Supply counts are not touched."""
    check_version(state, est)
    owned = state.est_data.owned
    if owned[from_player][est.id] <= 0:
        raise InvariantError(f"Player {from_player} does not own {est.name!r}")
    owned[from_player][est.id] -= 1
    owned[to_player][est.id] += 1
