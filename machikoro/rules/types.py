"""
Card and configuration types shared by both rulesets.

Cards are immutable metadata. Runtime counts (supply, ownership) live in
GameState and are indexed by the card's integer id, which is only unique
within a ruleset version. Every card therefore carries its version tag.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum


class Version(IntEnum):
    """Ruleset version: Machi Koro 1 or Machi Koro 2."""
    MK1 = 1
    MK2 = 2


class Expansion(str, Enum):
    """Card sets. Version 1 may add Harbor; version 2 is base only."""
    BASE = "Base"
    HARBOR = "Harbor"


class SupplyVariant(str, Enum):
    """Supply replenishment policy, fixed for the whole match."""
    TOTAL = "Total"
    VARIABLE = "Variable"
    HYBRID = "Hybrid"


class EstColor(str, Enum):
    """Color class - fixes the resolution pass and who gets paid."""
    BLUE = "Blue"
    GREEN = "Green"
    RED = "Red"
    PURPLE = "Purple"


class EstType(str, Enum):
    """Combo type, used as a multiplier source by some Green cards."""
    ANIMAL = "Animal"
    CUP = "Cup"
    FRUIT = "Fruit"
    GEAR = "Gear"
    SHOP = "Shop"
    WHEAT = "Wheat"


class PurpleEffect(str, Enum):
    """The special effect of a Purple-class establishment."""
    STADIUM = "stadium"  # take a fixed amount from every opponent
    TV_STATION = "tv_station"  # request the TV sub-phase
    OFFICE = "office"  # request the Office sub-phase
    PUBLISHER = "publisher"  # take per opponent Cup + Shop establishment
    TAX_OFFICE = "tax_office"  # take half from opponents at/above threshold


@dataclass(frozen=True)
class ComboSource:
    """
    Multiplier source of a combo Green card.

    Exactly one of the two fields is set: either a combo type whose owned
    count is the multiplier, or the id of a specific establishment.
    """
    est_type: EstType | None = None
    establishment_id: int | None = None


@dataclass(frozen=True)
class Establishment:
    """
    Establishment metadata.

    `earn` is the base amount per activation. For a few cards it is a
    parameter instead (Tax Office: coin threshold; Tuna Boat: unused,
    the shared roll is paid out).
    """
    id: int
    version: Version
    expansion: Expansion
    name: str
    cost: int
    earn: int
    rolls: tuple[int, ...]
    color: EstColor
    est_type: EstType | None = None
    initial: int | None = None  # None means "one per player"
    combo: ComboSource | None = None
    purple_effect: PurpleEffect | None = None
    requires_harbor: bool = False
    uses_shared_roll: bool = False
    description: str = ""

    @property
    def is_purple(self) -> bool:
        return self.color == EstColor.PURPLE

    @property
    def is_lower(self) -> bool:
        """Activates on rolls up to 6 (hybrid supply lower band)."""
        return self.rolls[0] <= 6

    @property
    def is_upper(self) -> bool:
        """Activates on rolls of 7 or more (hybrid supply upper band)."""
        return self.rolls[0] > 6

    def activates_on(self, roll: int) -> bool:
        return roll in self.rolls


@dataclass(frozen=True)
class Landmark:
    """
    Landmark metadata.

    `cost` is a sequence: a single value in version 1, and one value per
    landmark already built by the buyer in version 2. `coins` is the
    landmark's numeric parameter (bonus, discount, payout), if any.
    """
    id: int
    version: Version
    expansion: Expansion
    name: str
    cost: tuple[int, ...]
    coins: int | None = None
    description: str = ""
