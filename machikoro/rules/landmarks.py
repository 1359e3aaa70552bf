"""
Landmark Registry - static metadata for every landmark.

Version 1 landmarks have a single cost. Version 2 landmarks have one
cost per number of landmarks the buyer has already built, and each can
be built by only one player.
"""

from __future__ import annotations

from .errors import UnknownCardError
from .types import Expansion, Landmark, Version


# Version 2 landmark supply target (distinct landmarks available)
MK2_LANDMARK_SUPPLY_LIMIT = 5

# Version 2: building this many landmarks wins the game
MK2_LANDMARKS_TO_WIN = 3


# ============================================================================
# Machi Koro 1
# ============================================================================

CITY_HALL = Landmark(
    id=0, version=Version.MK1, expansion=Expansion.HARBOR,
    name="City Hall", cost=(0,), coins=1,
    description="Immediately before buying establishments, if you have 0 coins, receive 1 coin from the bank.",
)

HARBOR = Landmark(
    id=1, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Harbor", cost=(2,),
    description="If the dice total is 10 or more, you may add 2 to the total.",
)

TRAIN_STATION = Landmark(
    id=2, version=Version.MK1, expansion=Expansion.BASE,
    name="Train Station", cost=(4,),
    description="You may roll 2 dice.",
)

SHOPPING_MALL = Landmark(
    id=3, version=Version.MK1, expansion=Expansion.BASE,
    name="Shopping Mall", cost=(10,), coins=1,
    description="Your Cup and Shop establishments earn +1 coin when activated.",
)

AMUSEMENT_PARK = Landmark(
    id=4, version=Version.MK1, expansion=Expansion.BASE,
    name="Amusement Park", cost=(16,),
    description="If you roll doubles, take another turn after this one.",
)

RADIO_TOWER = Landmark(
    id=5, version=Version.MK1, expansion=Expansion.BASE,
    name="Radio Tower", cost=(22,),
    description="Once per turn, you may roll again.",
)

AIRPORT = Landmark(
    id=6, version=Version.MK1, expansion=Expansion.HARBOR,
    name="Airport", cost=(30,), coins=10,
    description="If you build nothing on your turn, receive 10 coins from the bank.",
)

# ============================================================================
# Machi Koro 2
# ============================================================================

_LOW = (10, 14, 22)
_HIGH = (12, 16, 22)

CITY_HALL2 = Landmark(
    id=0, version=Version.MK2, expansion=Expansion.BASE,
    name="City Hall", cost=(0, 0, 0), coins=1,
    description="Immediately before buying establishments, if you have 0 coins, receive 1 coin from the bank.",
)

LOAN_OFFICE2 = Landmark(
    id=1, version=Version.MK2, expansion=Expansion.BASE,
    name="Loan Office", cost=(10, 10, 10), coins=2,
    description=(
        "You can only build this landmark when you are the only player with no landmarks. "
        "Reduce the build cost of all landmarks by 2 coins (builder only)."
    ),
)

FARMERS_MARKET2 = Landmark(
    id=2, version=Version.MK2, expansion=Expansion.BASE,
    name="Farmers Market", cost=_LOW, coins=1,
    description="Your Wheat establishments earn +1 coin when activated (all players).",
)

FRENCH_RESTAURANT2 = Landmark(
    id=3, version=Version.MK2, expansion=Expansion.BASE,
    name="French Restaurant", cost=_LOW, coins=2,
    description="Take 2 coins from each opponent (builder only; occurs once).",
)

MOVING_COMPANY2 = Landmark(
    id=4, version=Version.MK2, expansion=Expansion.BASE,
    name="Moving Company", cost=_LOW,
    description="If you roll doubles, give 1 establishment to the previous player (all players).",
)

OBSERVATORY2 = Landmark(
    id=5, version=Version.MK2, expansion=Expansion.BASE,
    name="Observatory", cost=_LOW, coins=5,
    description='Reduce the build cost of "Launch Pad" by 5 coins (all players).',
)

PUBLISHER2 = Landmark(
    id=6, version=Version.MK2, expansion=Expansion.BASE,
    name="Publisher", cost=_LOW, coins=1,
    description="Take 1 coin from each opponent for each Shop establishment they own (builder only; occurs once).",
)

SHOPPING_MALL2 = Landmark(
    id=7, version=Version.MK2, expansion=Expansion.BASE,
    name="Shopping Mall", cost=_LOW, coins=1,
    description="Your Shop establishments earn +1 coin when activated (all players).",
)

TECH_STARTUP2 = Landmark(
    id=8, version=Version.MK2, expansion=Expansion.BASE,
    name="Tech Startup", cost=_LOW, coins=8,
    description="If you roll 12, receive 8 coins from the bank (all players).",
)

AIRPORT2 = Landmark(
    id=9, version=Version.MK2, expansion=Expansion.BASE,
    name="Airport", cost=_HIGH, coins=5,
    description="If you build nothing on your turn, receive 5 coins from the bank (all players).",
)

AMUSEMENT_PARK2 = Landmark(
    id=10, version=Version.MK2, expansion=Expansion.BASE,
    name="Amusement Park", cost=_HIGH,
    description="If you roll doubles, take an extra turn (all players).",
)

CHARTERHOUSE2 = Landmark(
    id=11, version=Version.MK2, expansion=Expansion.BASE,
    name="Charterhouse", cost=_HIGH, coins=3,
    description="If you rolled 2 dice and received no coins, receive 3 coins from the bank (all players).",
)

EXHIBIT_HALL2 = Landmark(
    id=12, version=Version.MK2, expansion=Expansion.BASE,
    name="Exhibit Hall", cost=_HIGH, coins=10,  # coin threshold
    description="From each opponent who has 10 or more coins, take half, rounded down (builder only; occurs once).",
)

FORGE2 = Landmark(
    id=13, version=Version.MK2, expansion=Expansion.BASE,
    name="Forge", cost=_HIGH, coins=1,
    description="Your Gear establishments earn +1 coin when activated (all players).",
)

MUSEUM2 = Landmark(
    id=14, version=Version.MK2, expansion=Expansion.BASE,
    name="Museum", cost=_HIGH, coins=3,
    description="Take 3 coins from each opponent for each landmark they own (builder only; occurs once).",
)

PARK2 = Landmark(
    id=15, version=Version.MK2, expansion=Expansion.BASE,
    name="Park", cost=_HIGH,
    description=(
        "Redistribute all players' coins as evenly as possible, making up any "
        "difference with coins from the bank (occurs once)."
    ),
)

RADIO_TOWER2 = Landmark(
    id=16, version=Version.MK2, expansion=Expansion.BASE,
    name="Radio Tower", cost=_HIGH,
    description="Take another turn (builder only; occurs once).",
)

SODA_BOTTLING_PLANT2 = Landmark(
    id=17, version=Version.MK2, expansion=Expansion.BASE,
    name="Soda Bottling Plant", cost=_HIGH, coins=1,
    description="Your Cup establishments earn +1 coin when activated (all players).",
)

TEMPLE2 = Landmark(
    id=18, version=Version.MK2, expansion=Expansion.BASE,
    name="Temple", cost=_HIGH, coins=2,
    description="If you roll doubles, take 2 coins from each opponent (all players).",
)

TV_STATION2 = Landmark(
    id=19, version=Version.MK2, expansion=Expansion.BASE,
    name="TV Station", cost=_HIGH, coins=1,
    description="Take 1 coin from each opponent for each Cup establishment they own (builder only; occurs once).",
)

LAUNCH_PAD2 = Landmark(
    id=20, version=Version.MK2, expansion=Expansion.BASE,
    name="Launch Pad", cost=(45, 38, 25),
    description="You win the game! (builder only)",
)


# ============================================================================
# Registry
# ============================================================================

LANDMARKS: tuple[Landmark, ...] = (
    CITY_HALL, HARBOR, TRAIN_STATION, SHOPPING_MALL, AMUSEMENT_PARK,
    RADIO_TOWER, AIRPORT,
)

LANDMARKS2: tuple[Landmark, ...] = (
    CITY_HALL2, LOAN_OFFICE2, FARMERS_MARKET2, FRENCH_RESTAURANT2,
    MOVING_COMPANY2, OBSERVATORY2, PUBLISHER2, SHOPPING_MALL2,
    TECH_STARTUP2, AIRPORT2, AMUSEMENT_PARK2, CHARTERHOUSE2,
    EXHIBIT_HALL2, FORGE2, MUSEUM2, PARK2, RADIO_TOWER2,
    SODA_BOTTLING_PLANT2, TEMPLE2, TV_STATION2, LAUNCH_PAD2,
)

# Landmarks every player owns from the start. City Hall counts as a
# starting landmark in version 1 only when Harbor is in play, which
# follows from its expansion tag.
STARTING_LANDMARKS: dict[Version, tuple[int, ...]] = {
    Version.MK1: (CITY_HALL.id,),
    Version.MK2: (CITY_HALL2.id,),
}

# Defined but kept out of play: its effect needs a choice step the turn
# machine does not have.
EXCLUDED_LANDMARKS: dict[Version, tuple[int, ...]] = {
    Version.MK1: (),
    Version.MK2: (MOVING_COMPANY2.id,),
}


def all_landmarks(version: Version) -> tuple[Landmark, ...]:
    """All landmarks of a ruleset version, sorted by id."""
    if version == Version.MK1:
        return LANDMARKS
    elif version == Version.MK2:
        return LANDMARKS2
    raise UnknownCardError(f"No landmarks for version {version!r}")


def get_landmark(version: Version, land_id: int) -> Landmark:
    """Look up a landmark by id. Raises UnknownCardError."""
    lands = all_landmarks(version)
    if not isinstance(land_id, int) or isinstance(land_id, bool) or not 0 <= land_id < len(lands):
        raise UnknownCardError(f"Unknown landmark id {land_id!r} for version {int(version)}")
    return lands[land_id]


def landmarks_in_use(
    version: Version, expansions: tuple[Expansion, ...] | list[Expansion]
) -> list[Landmark]:
    """Landmarks used in a game with the given expansions."""
    excluded = EXCLUDED_LANDMARKS[version]
    return [
        land for land in all_landmarks(version)
        if land.expansion in expansions and land.id not in excluded
    ]


def is_starting_landmark(land: Landmark) -> bool:
    return land.id in STARTING_LANDMARKS[land.version]
