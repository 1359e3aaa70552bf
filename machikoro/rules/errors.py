"""
Fatal error types.

These signal a defect in the calling code or corrupted data, never a
player's illegal move. Illegal moves are rejected through ActionResult.
"""


class MachikoroError(Exception):
    """Base class for all fatal engine errors."""


class ConfigurationError(MachikoroError):
    """Raised when setup data is invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid game setup: {'; '.join(errors)}")


class UnknownCardError(MachikoroError):
    """Raised when an establishment or landmark id does not exist."""


class VersionMismatchError(MachikoroError):
    """Raised when a card of one ruleset version is used in a game of the other."""


class InvariantError(MachikoroError):
    """Raised when internal game state is inconsistent."""
