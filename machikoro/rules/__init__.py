"""
Card Registry - static establishment and landmark data for both rulesets.
"""

from .errors import (
    MachikoroError,
    ConfigurationError,
    UnknownCardError,
    VersionMismatchError,
    InvariantError,
)
from .types import (
    Version,
    Expansion,
    SupplyVariant,
    EstColor,
    EstType,
    PurpleEffect,
    ComboSource,
    Establishment,
    Landmark,
)
from .establishments import (
    all_establishments,
    get_establishment,
    establishments_in_use,
    initial_supply,
    STARTING_ESTABLISHMENTS,
)
from .landmarks import (
    all_landmarks,
    get_landmark,
    landmarks_in_use,
    is_starting_landmark,
    STARTING_LANDMARKS,
)
from .validation import (
    SetupConfig,
    ValidationResult,
    check_setup,
    validate_setup,
    validate_registry,
)

__all__ = [
    # Errors
    "MachikoroError",
    "ConfigurationError",
    "UnknownCardError",
    "VersionMismatchError",
    "InvariantError",
    # Types
    "Version",
    "Expansion",
    "SupplyVariant",
    "EstColor",
    "EstType",
    "PurpleEffect",
    "ComboSource",
    "Establishment",
    "Landmark",
    # Registry
    "all_establishments",
    "get_establishment",
    "establishments_in_use",
    "initial_supply",
    "STARTING_ESTABLISHMENTS",
    "all_landmarks",
    "get_landmark",
    "landmarks_in_use",
    "is_starting_landmark",
    "STARTING_LANDMARKS",
    # Validation
    "SetupConfig",
    "ValidationResult",
    "check_setup",
    "validate_setup",
    "validate_registry",
]
