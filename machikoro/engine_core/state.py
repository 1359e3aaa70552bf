"""
Game State - the single mutable aggregate a match is played on.

Design principles:
- Indexed by id: per-card counts are plain lists indexed by card id
- Explicit: no ambient state, every move receives and returns a GameState
- Serializable: plain dataclasses, lists and enums only
- Secret decks live in their own container so views can drop them
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum

from ..rules.types import Expansion, SupplyVariant, Version


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


class TurnPhase(str, Enum):
    """Phases of a single turn."""
    ROLL = "roll"
    TV = "tv"
    OFFICE_PHASE1 = "office_phase1"
    OFFICE_PHASE2 = "office_phase2"
    BUY = "buy"
    END = "end"


@dataclass
class TurnFlags:
    """
    Transient per-turn values, reset when a turn begins.

    `do_tv` and `do_office` count pending TV and Office sub-phases.
    """
    do_tv: int = 0
    do_office: int = 0
    office_give_est: int | None = None
    second_turn: bool = False
    tuna_roll: int | None = None
    dice: tuple[int, ...] = ()
    just_bought_est: int | None = None
    just_bought_land: int | None = None


@dataclass
class EstablishmentData:
    """
    Per-establishment runtime counts, indexed by establishment id.

    `remaining` counts copies not owned by anyone, i.e. copies still in
    a secret deck plus copies available to buy. So for every id:

        remaining + sum(owned[p]) == total
        remaining - available == copies in the secret decks
    """
    in_use: list[bool]
    total: list[int]
    remaining: list[int]
    available: list[int]
    owned: list[list[int]]  # owned[player][est_id]


@dataclass
class LandmarkData:
    """Per-landmark runtime flags, indexed by landmark id."""
    in_use: list[bool]
    available: list[bool]
    owned: list[list[bool]]  # owned[player][land_id]


@dataclass
class SecretDecks:
    """Shuffled draw decks. Never shown to players."""
    est_decks: list[list[int]] = field(default_factory=list)
    land_deck: list[int] = field(default_factory=list)


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    version: Version
    expansions: tuple[Expansion, ...]
    supply_variant: SupplyVariant
    turn_order: list[int]
    money: list[int]
    est_data: EstablishmentData
    land_data: LandmarkData
    secret: SecretDecks = field(default_factory=SecretDecks)

    # Turn
    game_phase: GamePhase = GamePhase.PLAYING
    phase: TurnPhase = TurnPhase.ROLL
    turn_number: int = 1
    turn_order_pos: int = 0
    roll: int | None = None
    num_rolls: int = 0
    flags: TurnFlags = field(default_factory=TurnFlags)

    winner: int | None = None

    @property
    def current_player(self) -> int:
        """Id of the player whose turn it is."""
        return self.turn_order[self.turn_order_pos]

    @property
    def num_players(self) -> int:
        return len(self.turn_order)

    @property
    def is_game_over(self) -> bool:
        return self.game_phase == GamePhase.GAME_OVER

    def next_players(self) -> list[int]:
        """
        Players from the current one forward around the table, inclusive.

        This is the Blue establishment order: i, i+1, ..., 0, 1, ..., i-1.
        """
        n = self.num_players
        return [self.turn_order[(self.turn_order_pos + i) % n] for i in range(n)]

    def previous_players(self) -> list[int]:
        """
        Opponents from the one before the current player backward.

        This is the Red establishment order: i-1, i-2, ..., i+1.
        """
        n = self.num_players
        return [self.turn_order[(self.turn_order_pos - i) % n] for i in range(1, n)]

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
