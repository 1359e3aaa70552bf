"""
Public view - the game state as every player may see it.

There are no private hands in this game; only the secret decks are
hidden. Deck sizes per establishment can still be derived from
`remaining - available`, exactly as on the physical table.
"""

from __future__ import annotations
from typing import Any

from ..rules.establishments import all_establishments
from ..rules.landmarks import all_landmarks
from . import landmark_registry as lands
from .state import GameState


def public_view(state: GameState) -> dict[str, Any]:
    """Return a JSON-serialisable dict of everything but the secret decks."""
    est_data = state.est_data
    land_data = state.land_data
    flags = state.flags
    players = range(state.num_players)

    return {
        "version": int(state.version),
        "expansions": [exp.value for exp in state.expansions],
        "supply_variant": state.supply_variant.value,
        "game_phase": state.game_phase.value,
        "phase": state.phase.value,
        "turn_number": state.turn_number,
        "turn_order": list(state.turn_order),
        "current_player": state.current_player,
        "roll": state.roll,
        "num_rolls": state.num_rolls,
        "money": list(state.money),
        "winner": state.winner,
        "flags": {
            "do_tv": flags.do_tv,
            "do_office": flags.do_office,
            "office_give_est": flags.office_give_est,
            "second_turn": flags.second_turn,
            "tuna_roll": flags.tuna_roll,
            "dice": list(flags.dice),
            "just_bought_est": flags.just_bought_est,
            "just_bought_land": flags.just_bought_land,
        },
        "establishments": [
            {
                "id": est.id,
                "name": est.name,
                "in_use": est_data.in_use[est.id],
                "remaining": est_data.remaining[est.id],
                "available": est_data.available[est.id],
                "owned": [est_data.owned[p][est.id] for p in players],
            }
            for est in all_establishments(state.version)
        ],
        "landmarks": [
            {
                "id": land.id,
                "name": land.name,
                "in_use": land_data.in_use[land.id],
                "available": land_data.available[land.id],
                "owned": [land_data.owned[p][land.id] for p in players],
                "cost": [lands.cost_of(state, land, p) for p in players],
            }
            for land in all_landmarks(state.version)
        ],
    }
