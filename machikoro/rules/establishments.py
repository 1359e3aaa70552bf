"""
Establishment Registry - static metadata for every establishment.

Ids are stable and dense per ruleset version (0..N-1), so runtime
counts can be kept in plain lists indexed by id. Display order is a
separate concern handled by the presentation layer.

Machi Koro 1 ids 0-14 are the base set, 15-24 the Harbor expansion.
"""

from __future__ import annotations

from .errors import UnknownCardError
from .types import (
    ComboSource,
    EstColor,
    EstType,
    Establishment,
    Expansion,
    PurpleEffect,
    Version,
)


# Supply for every non-Purple Machi Koro 1 establishment
MK1_SUPPLY = 6

# Tax Office triggers on opponents holding at least this many coins
TAX_OFFICE_THRESHOLD = 10


# ============================================================================
# Machi Koro 1 - Base
# ============================================================================

WHEAT_FIELD = Establishment(
    id=0, version=Version.MK1, expansion=Expansion.BASE,
    name="Wheat Field", cost=1, earn=1, rolls=(1,),
    color=EstColor.BLUE, est_type=EstType.WHEAT, initial=MK1_SUPPLY,
    description="Receive 1 coin from the bank.",
)

LIVESTOCK_FARM = Establishment(
    id=1, version=Version.MK1, expansion=Expansion.BASE,
    name="Livestock Farm", cost=1, earn=1, rolls=(2,),
    color=EstColor.BLUE, est_type=EstType.ANIMAL, initial=MK1_SUPPLY,
    description="Receive 1 coin from the bank.",
)

BAKERY = Establishment(
    id=2, version=Version.MK1, expansion=Expansion.BASE,
    name="Bakery", cost=1, earn=1, rolls=(2, 3),
    color=EstColor.GREEN, est_type=EstType.SHOP, initial=MK1_SUPPLY,
    description="Receive 1 coin from the bank.",
)

CAFE = Establishment(
    id=3, version=Version.MK1, expansion=Expansion.BASE,
    name="Cafe", cost=2, earn=1, rolls=(3,),
    color=EstColor.RED, est_type=EstType.CUP, initial=MK1_SUPPLY,
    description="Take 1 coin from the player who just rolled.",
)

CONVENIENCE_STORE = Establishment(
    id=4, version=Version.MK1, expansion=Expansion.BASE,
    name="Convenience Store", cost=2, earn=3, rolls=(4,),
    color=EstColor.GREEN, est_type=EstType.SHOP, initial=MK1_SUPPLY,
    description="Receive 3 coins from the bank.",
)

FOREST = Establishment(
    id=5, version=Version.MK1, expansion=Expansion.BASE,
    name="Forest", cost=3, earn=1, rolls=(5,),
    color=EstColor.BLUE, est_type=EstType.GEAR, initial=MK1_SUPPLY,
    description="Receive 1 coin from the bank.",
)

STADIUM = Establishment(
    id=6, version=Version.MK1, expansion=Expansion.BASE,
    name="Stadium", cost=6, earn=2, rolls=(6,),
    color=EstColor.PURPLE, purple_effect=PurpleEffect.STADIUM,
    description="Take 2 coins from each opponent.",
)

TV_STATION = Establishment(
    id=7, version=Version.MK1, expansion=Expansion.BASE,
    name="TV Station", cost=7, earn=5, rolls=(6,),
    color=EstColor.PURPLE, purple_effect=PurpleEffect.TV_STATION,
    description="Take 5 coins from an opponent of your choice.",
)

OFFICE = Establishment(
    id=8, version=Version.MK1, expansion=Expansion.BASE,
    name="Office", cost=8, earn=0, rolls=(6,),
    color=EstColor.PURPLE, purple_effect=PurpleEffect.OFFICE,
    description="Exchange a non-major establishment with an opponent.",
)

CHEESE_FACTORY = Establishment(
    id=9, version=Version.MK1, expansion=Expansion.BASE,
    name="Cheese Factory", cost=5, earn=3, rolls=(7,),
    color=EstColor.GREEN, initial=MK1_SUPPLY,
    combo=ComboSource(est_type=EstType.ANIMAL),
    description="Receive 3 coins from the bank for each Animal establishment you own.",
)

FURNITURE_FACTORY = Establishment(
    id=10, version=Version.MK1, expansion=Expansion.BASE,
    name="Furniture Factory", cost=3, earn=3, rolls=(8,),
    color=EstColor.GREEN, initial=MK1_SUPPLY,
    combo=ComboSource(est_type=EstType.GEAR),
    description="Receive 3 coins from the bank for each Gear establishment you own.",
)

MINE = Establishment(
    id=11, version=Version.MK1, expansion=Expansion.BASE,
    name="Mine", cost=6, earn=5, rolls=(9,),
    color=EstColor.BLUE, est_type=EstType.GEAR, initial=MK1_SUPPLY,
    description="Receive 5 coins from the bank.",
)

RESTAURANT = Establishment(
    id=12, version=Version.MK1, expansion=Expansion.BASE,
    name="Restaurant", cost=3, earn=2, rolls=(9, 10),
    color=EstColor.RED, est_type=EstType.CUP, initial=MK1_SUPPLY,
    description="Take 2 coins from the player who just rolled.",
)

APPLE_ORCHARD = Establishment(
    id=13, version=Version.MK1, expansion=Expansion.BASE,
    name="Apple Orchard", cost=3, earn=3, rolls=(10,),
    color=EstColor.BLUE, est_type=EstType.WHEAT, initial=MK1_SUPPLY,
    description="Receive 3 coins from the bank.",
)

PRODUCE_MARKET = Establishment(
    id=14, version=Version.MK1, expansion=Expansion.BASE,
    name="Produce Market", cost=2, earn=2, rolls=(11, 12),
    color=EstColor.GREEN, initial=MK1_SUPPLY,
    combo=ComboSource(est_type=EstType.WHEAT),
    description="Receive 2 coins from the bank for each Wheat establishment you own.",
)

# ============================================================================
# Machi Koro 1 - Harbor expansion
# ============================================================================

SUSHI_BAR = Establishment(
    id=15, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Sushi Bar", cost=2, earn=3, rolls=(1,),
    color=EstColor.RED, est_type=EstType.CUP, initial=MK1_SUPPLY,
    requires_harbor=True,
    description="If you have a Harbor, take 3 coins from the player who just rolled.",
)

FLOWER_ORCHARD = Establishment(
    id=16, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Flower Orchard", cost=2, earn=1, rolls=(4,),
    color=EstColor.BLUE, est_type=EstType.WHEAT, initial=MK1_SUPPLY,
    description="Receive 1 coin from the bank.",
)

FLOWER_SHOP = Establishment(
    id=17, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Flower Shop", cost=1, earn=1, rolls=(6,),
    color=EstColor.GREEN, est_type=EstType.SHOP, initial=MK1_SUPPLY,
    combo=ComboSource(establishment_id=FLOWER_ORCHARD.id),
    description="Receive 1 coin from the bank for each Flower Orchard you own.",
)

PIZZA_JOINT = Establishment(
    id=18, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Pizza Joint", cost=1, earn=1, rolls=(7,),
    color=EstColor.RED, est_type=EstType.CUP, initial=MK1_SUPPLY,
    description="Take 1 coin from the player who just rolled.",
)

PUBLISHER = Establishment(
    id=19, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Publisher", cost=5, earn=1, rolls=(7,),
    color=EstColor.PURPLE, purple_effect=PurpleEffect.PUBLISHER,
    description="Take 1 coin from each opponent for each Cup and Shop establishment they own.",
)

MACKEREL_BOAT = Establishment(
    id=20, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Mackerel Boat", cost=2, earn=3, rolls=(8,),
    color=EstColor.BLUE, initial=MK1_SUPPLY,
    requires_harbor=True,
    description="If you have a Harbor, receive 3 coins from the bank.",
)

HAMBURGER_STAND = Establishment(
    id=21, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Hamburger Stand", cost=1, earn=1, rolls=(8,),
    color=EstColor.RED, est_type=EstType.CUP, initial=MK1_SUPPLY,
    description="Take 1 coin from the player who just rolled.",
)

TAX_OFFICE = Establishment(
    id=22, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Tax Office", cost=4, earn=TAX_OFFICE_THRESHOLD, rolls=(8, 9),
    color=EstColor.PURPLE, purple_effect=PurpleEffect.TAX_OFFICE,
    description="From each opponent who has 10 or more coins, take half, rounded down.",
)

TUNA_BOAT = Establishment(
    id=23, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Tuna Boat", cost=5, earn=0, rolls=(12, 13, 14),
    color=EstColor.BLUE, initial=MK1_SUPPLY,
    requires_harbor=True, uses_shared_roll=True,
    description="If you have a Harbor, the current player rolls 2 dice. Receive that many coins.",
)

FOOD_WAREHOUSE = Establishment(
    id=24, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Food Warehouse", cost=2, earn=2, rolls=(12, 13),
    color=EstColor.GREEN, initial=MK1_SUPPLY,
    combo=ComboSource(est_type=EstType.CUP),
    description="Receive 2 coins from the bank for each Cup establishment you own.",
)

# ============================================================================
# Machi Koro 2
# ============================================================================

SUSHI_BAR2 = Establishment(
    id=0, version=Version.MK2, expansion=Expansion.BASE,
    name="Sushi Bar", cost=2, earn=3, rolls=(1,),
    color=EstColor.RED, est_type=EstType.CUP, initial=5,
    description="Take 3 coins from the player who just rolled.",
)

WHEAT_FIELD2 = Establishment(
    id=1, version=Version.MK2, expansion=Expansion.BASE,
    name="Wheat Field", cost=1, earn=1, rolls=(1, 2),
    color=EstColor.BLUE, est_type=EstType.WHEAT, initial=5,
    description="Receive 1 coin from the bank.",
)

VINEYARD2 = Establishment(
    id=2, version=Version.MK2, expansion=Expansion.BASE,
    name="Vineyard", cost=1, earn=2, rolls=(2,),
    color=EstColor.BLUE, est_type=EstType.FRUIT, initial=5,
    description="Receive 2 coins from the bank.",
)

BAKERY2 = Establishment(
    id=3, version=Version.MK2, expansion=Expansion.BASE,
    name="Bakery", cost=1, earn=2, rolls=(2, 3),
    color=EstColor.GREEN, est_type=EstType.SHOP, initial=5,
    description="Receive 2 coins from the bank.",
)

CAFE2 = Establishment(
    id=4, version=Version.MK2, expansion=Expansion.BASE,
    name="Cafe", cost=1, earn=2, rolls=(3,),
    color=EstColor.RED, est_type=EstType.CUP, initial=5,
    description="Take 2 coins from the player who just rolled.",
)

FLOWER_GARDEN2 = Establishment(
    id=5, version=Version.MK2, expansion=Expansion.BASE,
    name="Flower Garden", cost=2, earn=2, rolls=(4,),
    color=EstColor.BLUE, initial=5,
    description="Receive 2 coins from the bank.",
)

CONVENIENCE_STORE2 = Establishment(
    id=6, version=Version.MK2, expansion=Expansion.BASE,
    name="Convenience Store", cost=1, earn=3, rolls=(4,),
    color=EstColor.GREEN, est_type=EstType.SHOP, initial=5,
    description="Receive 3 coins from the bank.",
)

FOREST2 = Establishment(
    id=7, version=Version.MK2, expansion=Expansion.BASE,
    name="Forest", cost=3, earn=2, rolls=(5,),
    color=EstColor.BLUE, est_type=EstType.GEAR, initial=5,
    description="Receive 2 coins from the bank.",
)

FLOWER_SHOP2 = Establishment(
    id=8, version=Version.MK2, expansion=Expansion.BASE,
    name="Flower Shop", cost=1, earn=3, rolls=(6,),
    color=EstColor.GREEN, initial=3,
    combo=ComboSource(establishment_id=FLOWER_GARDEN2.id),
    description="Receive 3 coins from the bank for each Flower Garden you own.",
)

OFFICE2 = Establishment(
    id=9, version=Version.MK2, expansion=Expansion.BASE,
    name="Business Center", cost=3, earn=0, rolls=(6,),
    color=EstColor.PURPLE, initial=3, purple_effect=PurpleEffect.OFFICE,
    description="You may exchange an establishment with an opponent.",
)

CORN_FIELD2 = Establishment(
    id=10, version=Version.MK2, expansion=Expansion.BASE,
    name="Corn Field", cost=2, earn=3, rolls=(7,),
    color=EstColor.BLUE, est_type=EstType.WHEAT, initial=5,
    description="Receive 3 coins from the bank.",
)

STADIUM2 = Establishment(
    id=11, version=Version.MK2, expansion=Expansion.BASE,
    name="Stadium", cost=3, earn=3, rolls=(7,),
    color=EstColor.PURPLE, initial=3, purple_effect=PurpleEffect.STADIUM,
    description="Take 3 coins from each opponent.",
)

HAMBURGER_STAND2 = Establishment(
    id=12, version=Version.MK2, expansion=Expansion.BASE,
    name="Hamburger Stand", cost=1, earn=2, rolls=(8,),
    color=EstColor.RED, est_type=EstType.CUP, initial=5,
    description="Take 2 coins from the player who just rolled.",
)

FURNITURE_FACTORY2 = Establishment(
    id=13, version=Version.MK2, expansion=Expansion.BASE,
    name="Furniture Factory", cost=4, earn=4, rolls=(8,),
    color=EstColor.GREEN, initial=3,
    combo=ComboSource(est_type=EstType.GEAR),
    description="Receive 4 coins from the bank for each Gear establishment you own.",
)

TAX_OFFICE2 = Establishment(
    id=14, version=Version.MK2, expansion=Expansion.BASE,
    name="Shopping District", cost=3, earn=TAX_OFFICE_THRESHOLD, rolls=(8, 9),
    color=EstColor.PURPLE, initial=3, purple_effect=PurpleEffect.TAX_OFFICE,
    description="From each opponent who has 10 or more coins, take half, rounded down.",
)

FAMILY_RESTAURANT2 = Establishment(
    id=15, version=Version.MK2, expansion=Expansion.BASE,
    name="Family Restaurant", cost=2, earn=2, rolls=(9, 10),
    color=EstColor.RED, est_type=EstType.CUP, initial=5,
    description="Take 2 coins from the player who just rolled.",
)

WINERY2 = Establishment(
    id=16, version=Version.MK2, expansion=Expansion.BASE,
    name="Winery", cost=3, earn=3, rolls=(9,),
    color=EstColor.GREEN, initial=3,
    combo=ComboSource(est_type=EstType.FRUIT),
    description="Receive 3 coins from the bank for each Fruit establishment you own.",
)

APPLE_ORCHARD2 = Establishment(
    id=17, version=Version.MK2, expansion=Expansion.BASE,
    name="Apple Orchard", cost=1, earn=3, rolls=(10,),
    color=EstColor.BLUE, est_type=EstType.FRUIT, initial=5,
    description="Receive 3 coins from the bank.",
)

FOOD_WAREHOUSE2 = Establishment(
    id=18, version=Version.MK2, expansion=Expansion.BASE,
    name="Food Warehouse", cost=2, earn=2, rolls=(10, 11),
    color=EstColor.GREEN, initial=3,
    combo=ComboSource(est_type=EstType.CUP),
    description="Receive 2 coins from the bank for each Cup establishment you own.",
)

MINE2 = Establishment(
    id=19, version=Version.MK2, expansion=Expansion.BASE,
    name="Mine", cost=4, earn=6, rolls=(11, 12),
    color=EstColor.BLUE, est_type=EstType.GEAR, initial=5,
    description="Receive 6 coins from the bank.",
)


# ============================================================================
# Registry
# ============================================================================

ESTABLISHMENTS: tuple[Establishment, ...] = (
    WHEAT_FIELD, LIVESTOCK_FARM, BAKERY, CAFE, CONVENIENCE_STORE,
    FOREST, STADIUM, TV_STATION, OFFICE, CHEESE_FACTORY,
    FURNITURE_FACTORY, MINE, RESTAURANT, APPLE_ORCHARD, PRODUCE_MARKET,
    SUSHI_BAR, FLOWER_ORCHARD, FLOWER_SHOP, PIZZA_JOINT, PUBLISHER,
    MACKEREL_BOAT, HAMBURGER_STAND, TAX_OFFICE, TUNA_BOAT, FOOD_WAREHOUSE,
)

ESTABLISHMENTS2: tuple[Establishment, ...] = (
    SUSHI_BAR2, WHEAT_FIELD2, VINEYARD2, BAKERY2, CAFE2,
    FLOWER_GARDEN2, CONVENIENCE_STORE2, FOREST2, FLOWER_SHOP2, OFFICE2,
    CORN_FIELD2, STADIUM2, HAMBURGER_STAND2, FURNITURE_FACTORY2, TAX_OFFICE2,
    FAMILY_RESTAURANT2, WINERY2, APPLE_ORCHARD2, FOOD_WAREHOUSE2, MINE2,
)

# Every player starts with one of each of these
STARTING_ESTABLISHMENTS: dict[Version, tuple[int, ...]] = {
    Version.MK1: (WHEAT_FIELD.id, BAKERY.id),
    Version.MK2: (),
}


def all_establishments(version: Version) -> tuple[Establishment, ...]:
    """All establishments of a ruleset version, sorted by id."""
    if version == Version.MK1:
        return ESTABLISHMENTS
    elif version == Version.MK2:
        return ESTABLISHMENTS2
    raise UnknownCardError(f"No establishments for version {version!r}")


def get_establishment(version: Version, est_id: int) -> Establishment:
    """Look up an establishment by id. Raises UnknownCardError."""
    ests = all_establishments(version)
    if not isinstance(est_id, int) or isinstance(est_id, bool) or not 0 <= est_id < len(ests):
        raise UnknownCardError(f"Unknown establishment id {est_id!r} for version {int(version)}")
    return ests[est_id]


def establishments_in_use(
    version: Version, expansions: tuple[Expansion, ...] | list[Expansion]
) -> list[Establishment]:
    """Establishments used in a game with the given expansions."""
    return [est for est in all_establishments(version) if est.expansion in expansions]


def initial_supply(est: Establishment, num_players: int) -> int:
    """Number of copies put into the supply at setup."""
    return est.initial if est.initial is not None else num_players
