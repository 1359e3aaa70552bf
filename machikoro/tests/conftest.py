"""
Pytest fixtures for Machikoro tests.
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.events import Event
from ..engine_core.random_service import FixedDice
from ..engine_core.reducer import Reducer
from ..engine_core.setup import setup_game
from ..engine_core.state import GameState
from ..rules.types import Establishment, Expansion, Version
from ..rules.validation import SetupConfig


def clear_holdings(state: GameState) -> GameState:
    """Remove every owned establishment, shrinking totals to match."""
    data = state.est_data
    for owned in data.owned:
        for est_id, count in enumerate(owned):
            data.total[est_id] -= count
            owned[est_id] = 0
    return state


def give(state: GameState, player: int, est: Establishment, count: int = 1) -> GameState:
    """Hand a player extra copies from outside the supply, growing the total."""
    state.est_data.owned[player][est.id] += count
    state.est_data.total[est.id] += count
    state.est_data.in_use[est.id] = True
    return state


def play(reducer: Reducer, state: GameState, *actions: Action) -> tuple[GameState, list[Event]]:
    """Apply moves in order, failing the test on any rejection."""
    events: list[Event] = []
    for action in actions:
        result = reducer.apply(state, action)
        assert result.success, f"{action.to_dict()} rejected: {result.error}"
        state = result.new_state
        events.extend(result.events)
    return state, events


@pytest.fixture
def mk1_config() -> SetupConfig:
    """Two players, base set only, total supply, 3 coins."""
    return SetupConfig()


@pytest.fixture
def harbor_config() -> SetupConfig:
    """Two players with the Harbor expansion."""
    return SetupConfig(expansions=(Expansion.BASE, Expansion.HARBOR))


@pytest.fixture
def mk2_config() -> SetupConfig:
    return SetupConfig(version=Version.MK2)


@pytest.fixture
def new_game():
    """
    Factory for a fresh game with preset dice.

    Returns (state, reducer); debug rolls are allowed.
    """
    def _new_game(config: SetupConfig | None = None, dice=(), seed: int = 0):
        random = FixedDice(dice, seed=seed)
        state = setup_game(config or SetupConfig(), random)
        return state, Reducer(random=random, allow_debug=True)
    return _new_game


@pytest.fixture
def mk1_game(new_game):
    """Base game, two players, nobody owns anything."""
    state, reducer = new_game()
    return clear_holdings(state), reducer


@pytest.fixture
def harbor_game(new_game, harbor_config):
    """Harbor game, two players, nobody owns any establishment."""
    state, reducer = new_game(harbor_config)
    return clear_holdings(state), reducer


@pytest.fixture
def mk2_game(new_game, mk2_config):
    state, reducer = new_game(mk2_config)
    return state, reducer
