"""
Tests for the landmark registry.

Tests:
- Starting landmarks and availability
- Version 2 cost tables and modifiers
- Loan Office restriction
- Version 2 landmark replenishment
"""

import pytest

from ..engine_core import landmark_registry as lands
from ..engine_core.random_service import RandomService
from ..engine_core.setup import setup_game
from ..rules import Expansion, SetupConfig, SupplyVariant, Version, VersionMismatchError
from ..rules.landmarks import (
    AIRPORT,
    CITY_HALL,
    CITY_HALL2,
    FARMERS_MARKET2,
    LAUNCH_PAD2,
    LOAN_OFFICE2,
    MK2_LANDMARK_SUPPLY_LIMIT,
    MOVING_COMPANY2,
    OBSERVATORY2,
    TECH_STARTUP2,
    TRAIN_STATION,
)


def make_state(version=Version.MK1, expansions=(Expansion.BASE,), variant=SupplyVariant.TOTAL, seed=1):
    config = SetupConfig(version=version, expansions=expansions, supply_variant=variant)
    return setup_game(config, RandomService(seed))


class TestMK1Landmarks:
    """Tests for version 1 landmarks."""

    def test_all_in_use_available(self):
        state = make_state()
        assert [land.name for land in lands.get_all_available(state)] == [
            "Train Station", "Shopping Mall", "Amusement Park", "Radio Tower",
        ]

    def test_no_city_hall_without_harbor(self):
        state = make_state()
        assert not lands.owns(state, 0, CITY_HALL)

    def test_city_hall_owned_with_harbor(self):
        state = make_state(expansions=(Expansion.BASE, Expansion.HARBOR))
        assert lands.owns(state, 0, CITY_HALL)
        assert lands.owns(state, 1, CITY_HALL)
        assert lands.count_built(state, 0) == 0

    def test_fixed_cost(self):
        state = make_state()
        assert lands.cost_of(state, TRAIN_STATION, 0) == 4

    def test_buy(self):
        state = make_state()
        state.money[0] = 4
        assert lands.buy(state, 0, TRAIN_STATION)
        assert state.money[0] == 0
        assert lands.owns(state, 0, TRAIN_STATION)
        # still available to the other player
        state.money[1] = 4
        assert lands.can_buy(state, 1, TRAIN_STATION)

    def test_cannot_buy_twice(self):
        state = make_state()
        state.money[0] = 100
        assert lands.buy(state, 0, TRAIN_STATION)
        assert not lands.buy(state, 0, TRAIN_STATION)
        assert state.money[0] == 96

    def test_unused_landmark_not_buyable(self):
        state = make_state()
        state.money[0] = 100
        assert not lands.can_buy(state, 0, AIRPORT)

    def test_version_mismatch_is_fatal(self):
        state = make_state()
        with pytest.raises(VersionMismatchError):
            lands.owns(state, 0, LAUNCH_PAD2)


class TestMK2Costs:
    """Tests for version 2 cost tables and modifiers."""

    def test_cost_depends_on_built_count(self):
        state = make_state(Version.MK2)
        assert lands.cost_of(state, FARMERS_MARKET2, 0) == 10
        state.land_data.owned[0][TECH_STARTUP2.id] = True
        assert lands.cost_of(state, FARMERS_MARKET2, 0) == 14

    def test_city_hall_is_not_built(self):
        state = make_state(Version.MK2)
        assert lands.owns(state, 0, CITY_HALL2)
        assert lands.count_built(state, 0) == 0

    def test_observatory_discounts_launch_pad_for_everyone(self):
        state = make_state(Version.MK2)
        assert lands.cost_of(state, LAUNCH_PAD2, 0) == 45
        state.land_data.owned[1][OBSERVATORY2.id] = True
        assert lands.cost_of(state, LAUNCH_PAD2, 0) == 40
        assert lands.cost_array(state, LAUNCH_PAD2, None) == [40, 33, 20]

    def test_loan_office_discount_is_owner_only(self):
        state = make_state(Version.MK2)
        state.land_data.owned[0][LOAN_OFFICE2.id] = True
        assert lands.cost_of(state, TECH_STARTUP2, 0) == 14 - 2
        assert lands.cost_of(state, TECH_STARTUP2, 1) == 10

    def test_buy_removes_from_supply(self):
        state = make_state(Version.MK2)
        state.money[0] = 10
        assert lands.buy(state, 0, FARMERS_MARKET2)
        assert state.money[0] == 0
        assert not lands.is_available(state, FARMERS_MARKET2)
        state.money[1] = 100
        assert not lands.can_buy(state, 1, FARMERS_MARKET2)


class TestLoanOffice:
    """Loan Office needs the buyer to be the only player without landmarks."""

    def test_rejected_when_nobody_has_built(self):
        state = make_state(Version.MK2)
        state.money[0] = 100
        assert not lands.can_buy(state, 0, LOAN_OFFICE2)

    def test_allowed_when_only_buyer_has_none(self):
        state = make_state(Version.MK2)
        state.money[0] = 100
        state.land_data.owned[1][FARMERS_MARKET2.id] = True
        assert lands.can_buy(state, 0, LOAN_OFFICE2)

    def test_rejected_once_buyer_has_built(self):
        state = make_state(Version.MK2)
        state.money[0] = 100
        state.land_data.owned[0][TECH_STARTUP2.id] = True
        state.land_data.owned[1][FARMERS_MARKET2.id] = True
        assert not lands.can_buy(state, 0, LOAN_OFFICE2)


class TestMK2Replenishment:
    """Tests for the version 2 landmark deck."""

    def test_total_shows_every_landmark(self):
        state = make_state(Version.MK2)
        available = lands.get_all_available(state)
        assert len(available) == 19
        assert CITY_HALL2 not in available
        assert MOVING_COMPANY2 not in available

    def test_variable_shows_five(self):
        state = make_state(Version.MK2, variant=SupplyVariant.VARIABLE)
        assert len(lands.get_all_available(state)) == MK2_LANDMARK_SUPPLY_LIMIT
        assert len(state.secret.land_deck) == 19 - MK2_LANDMARK_SUPPLY_LIMIT

    def test_refills_after_purchase(self):
        state = make_state(Version.MK2, variant=SupplyVariant.HYBRID)
        land = next(land for land in lands.get_all_available(state) if land.id != LOAN_OFFICE2.id)
        state.money[0] = 100
        assert lands.buy(state, 0, land)
        assert len(lands.get_all_available(state)) == MK2_LANDMARK_SUPPLY_LIMIT - 1
        lands.replenish(state)
        assert len(lands.get_all_available(state)) == MK2_LANDMARK_SUPPLY_LIMIT
