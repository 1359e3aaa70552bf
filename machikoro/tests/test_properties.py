"""
Property tests over random play.

Each test plays seeded random legal moves and checks an invariant after
every move:
- Money changes only through bank events
- Supply counts are conserved
- No player holds two copies of a version 1 Purple establishment
- Moves outside their phases are always rejected
- Every turn reaches its end
- Replaying the moves against the seed rebuilds the same match
"""

import random

import pytest

from ..engine_core import landmark_registry as lands
from ..engine_core.action import ActionType, ErrorCode
from ..engine_core.action_generator import legal_actions
from ..engine_core.events import EventType
from ..engine_core.random_service import RandomService
from ..engine_core.reducer import ACTION_PHASES, Reducer
from ..rules import (
    Expansion,
    SetupConfig,
    SupplyVariant,
    Version,
    all_establishments,
    get_establishment,
    get_landmark,
)
from ..session import new_match, replay
from .test_reducer import SAMPLE_ACTIONS

MOVES = 400

CONFIGS = [
    SetupConfig(),
    SetupConfig(expansions=(Expansion.BASE, Expansion.HARBOR), supply_variant=SupplyVariant.VARIABLE, num_players=3),
    SetupConfig(expansions=(Expansion.BASE, Expansion.HARBOR), supply_variant=SupplyVariant.HYBRID, num_players=4),
    SetupConfig(version=Version.MK2, num_players=3),
    SetupConfig(version=Version.MK2, supply_variant=SupplyVariant.HYBRID, num_players=5, start_coins=5),
]


def random_play(config, seed, moves=MOVES):
    """Yield (state before, action, result) for each random legal move."""
    match = new_match(config, seed=seed)
    chooser = random.Random(seed)
    for _ in range(moves):
        actions = legal_actions(match.state)
        if not actions:
            return
        before = match.state
        action = chooser.choice(actions)
        result = match.submit(action)
        assert result.success, result.error
        yield before, action, result


def purchase_cost(state, action):
    """Coins the current player pays the bank for a purchase move."""
    if action.action_type == ActionType.BUY_ESTABLISHMENT:
        return get_establishment(state.version, action.payload.establishment_id).cost
    if action.action_type == ActionType.BUY_LANDMARK:
        land = get_landmark(state.version, action.payload.landmark_id)
        return lands.cost_of(state, land, state.current_player)
    return 0


def bank_delta(events):
    """Net coins paid out by the bank."""
    delta = 0
    for event in events:
        if event.event_type == EventType.EARN:
            delta += event.amount
        elif event.event_type == EventType.TAKE and event.to_player is None:
            delta -= event.amount
    return delta


@pytest.fixture(params=range(len(CONFIGS)), ids=lambda i: f"config{i}")
def config(request):
    return CONFIGS[request.param]


class TestInvariants:
    """Invariants checked after every move."""

    def test_money_moves_only_through_bank_events(self, config):
        for before, action, result in random_play(config, seed=11):
            after = result.new_state
            expected = sum(before.money) + bank_delta(result.events) - purchase_cost(before, action)
            assert sum(after.money) == expected
            assert min(after.money) >= 0

    def test_supply_conserved(self, config):
        for _, _, result in random_play(config, seed=12):
            state = result.new_state
            data = state.est_data
            for est in all_establishments(state.version):
                owned = sum(data.owned[p][est.id] for p in range(state.num_players))
                in_decks = sum(deck.count(est.id) for deck in state.secret.est_decks)
                assert data.remaining[est.id] + owned == data.total[est.id]
                assert data.remaining[est.id] - data.available[est.id] == in_decks

    def test_purple_unique_in_mk1(self):
        config = CONFIGS[1]
        purple = [est for est in all_establishments(Version.MK1) if est.is_purple]
        for _, _, result in random_play(config, seed=13, moves=800):
            owned = result.new_state.est_data.owned
            assert all(owned[p][est.id] <= 1 for p in range(config.num_players) for est in purple)

    def test_moves_outside_phase_rejected(self, config):
        reducer = Reducer(random=RandomService(0), allow_debug=True)
        for before, _, _ in random_play(config, seed=14, moves=150):
            for action_type, action in SAMPLE_ACTIONS.items():
                if before.is_game_over or before.phase in ACTION_PHASES[action_type]:
                    continue
                result = reducer.apply(before, action)
                assert result.error_code == ErrorCode.WRONG_PHASE

    def test_every_turn_ends(self, config):
        moves_this_turn = 0
        turn = 1
        for _, _, result in random_play(config, seed=15):
            state = result.new_state
            if state.turn_number != turn:
                turn = state.turn_number
                moves_this_turn = 0
            else:
                moves_this_turn += 1
            assert moves_this_turn < 20


class TestDeterminism:
    """Same seed and moves, same match."""

    def test_replay_rebuilds_match(self, config):
        match = new_match(config, seed=21)
        chooser = random.Random(21)
        for _ in range(200):
            actions = legal_actions(match.state)
            if not actions:
                break
            match.submit(chooser.choice(actions))

        copy = replay(config, 21, match.history)
        assert copy.state == match.state
        assert copy.log == match.log
        assert [e.to_dict() for e in copy.log] == [e.to_dict() for e in match.log]

    def test_same_seed_same_setup(self, config):
        assert new_match(config, seed=5).state == new_match(config, seed=5).state
