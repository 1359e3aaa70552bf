"""
Game Setup - Creates initial game state.

This module handles:
- Validating the setup configuration
- Starting coins and turn order (optionally shuffled)
- Establishment and landmark data, starting cards included
- Shuffling the secret decks with the match's randomness service
- Running the first turn-start hook, which fills the supply
"""

from __future__ import annotations

from ..rules.validation import SetupConfig, validate_setup
from . import landmark_registry as lands
from . import supply
from .random_service import RandomService
from .reducer import begin_turn
from .state import GameState, SecretDecks


def setup_game(config: SetupConfig, random: RandomService) -> GameState:
    """
    Set up a new game.

    Args:
        config: Setup data; raises ConfigurationError if invalid
        random: The match's randomness service

    Returns:
        Initial GameState, first player in the Roll phase
    """
    validate_setup(config)
    n = config.num_players
    expansions = tuple(config.expansions)

    turn_order = list(range(n))
    if config.randomize_turn_order:
        turn_order = random.shuffle(turn_order)

    est_data, est_decks = supply.initialize(config.version, expansions, config.supply_variant, n)
    land_data, land_deck = lands.initialize(config.version, expansions, n)

    secret = SecretDecks(
        est_decks=[random.shuffle(deck) for deck in est_decks],
        land_deck=random.shuffle(land_deck),
    )

    state = GameState(
        version=config.version,
        expansions=expansions,
        supply_variant=config.supply_variant,
        turn_order=turn_order,
        money=[config.start_coins] * n,
        est_data=est_data,
        land_data=land_data,
        secret=secret,
    )
    begin_turn(state)
    return state
