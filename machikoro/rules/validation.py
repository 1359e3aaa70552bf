"""
Setup Validation - checks game setup data and registry tables.

Validates that:
1. The expansion set matches the ruleset version (base always included)
2. The supply variant is known
3. Starting coins are a non-negative integer
4. Player count is between 2 and 5
5. Registry tables have dense, correctly tagged ids
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .errors import ConfigurationError
from .establishments import all_establishments
from .landmarks import all_landmarks
from .types import Expansion, SupplyVariant, Version


MIN_PLAYERS = 2
MAX_PLAYERS = 5


@dataclass
class SetupConfig:
    """Setup data for a new match."""
    version: Version = Version.MK1
    expansions: tuple[Expansion, ...] = (Expansion.BASE,)
    supply_variant: SupplyVariant = SupplyVariant.TOTAL
    start_coins: int = 3
    randomize_turn_order: bool = False
    num_players: int = 2


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str] = field(default_factory=list)


def check_setup(config: SetupConfig) -> ValidationResult:
    """
    Check a setup configuration without raising.

    Returns ValidationResult listing every problem found.
    """
    errors: list[str] = []

    if not isinstance(config.version, Version):
        errors.append(f"Unknown version: {config.version!r}")
    if not isinstance(config.supply_variant, SupplyVariant):
        errors.append(f"Unknown supply variant: {config.supply_variant!r}")

    expansions = list(config.expansions)
    for exp in expansions:
        if not isinstance(exp, Expansion):
            errors.append(f"Unknown expansion: {exp!r}")
    if Expansion.BASE not in expansions:
        errors.append("Expansions must include the base set")
    if len(set(expansions)) != len(expansions):
        errors.append("Expansions must not repeat")
    extra = [exp for exp in expansions if exp != Expansion.BASE]
    if config.version == Version.MK1 and len(extra) > 1:
        errors.append("Machi Koro 1 supports at most one expansion")
    if config.version == Version.MK2 and extra:
        errors.append("Machi Koro 2 does not support expansions")

    coins = config.start_coins
    if not isinstance(coins, int) or isinstance(coins, bool) or coins < 0:
        errors.append(f"Number of starting coins, {coins!r}, must be a non-negative integer")

    n = config.num_players
    if not isinstance(n, int) or isinstance(n, bool) or not MIN_PLAYERS <= n <= MAX_PLAYERS:
        errors.append(
            f"Number of players, {n!r}, must be an integer between {MIN_PLAYERS} and {MAX_PLAYERS}"
        )

    return ValidationResult(valid=not errors, errors=errors)


def validate_setup(config: SetupConfig) -> SetupConfig:
    """
    Validate a setup configuration.

    Raises ConfigurationError if anything is wrong, otherwise returns
    the config unchanged.
    """
    result = check_setup(config)
    if not result.valid:
        raise ConfigurationError(result.errors)
    return config


def validate_registry() -> ValidationResult:
    """Check registry tables: ids dense and version tags consistent."""
    errors: list[str] = []

    for version in Version:
        for kind, cards in (
            ("establishment", all_establishments(version)),
            ("landmark", all_landmarks(version)),
        ):
            for index, card in enumerate(cards):
                if card.id != index:
                    errors.append(f"{kind} {card.name!r} has id {card.id}, expected {index}")
                if card.version != version:
                    errors.append(f"{kind} {card.name!r} is tagged version {int(card.version)}")

        for est in all_establishments(version):
            if not est.rolls:
                errors.append(f"establishment {est.name!r} has no activation rolls")
            if est.combo is not None and (est.combo.est_type is None) == (est.combo.establishment_id is None):
                errors.append(f"establishment {est.name!r} must name exactly one combo source")
            if version == Version.MK2 and est.initial is None:
                errors.append(f"establishment {est.name!r} needs an explicit supply count")

        for land in all_landmarks(version):
            expected = 1 if version == Version.MK1 else 3
            if len(land.cost) != expected:
                errors.append(f"landmark {land.name!r} needs {expected} cost entries")

    return ValidationResult(valid=not errors, errors=errors)
