"""
Match Manager - Creates and manages in-memory matches.

LIFECYCLE:
1. Caller creates a match from setup data (and optionally a seed)
2. Moves are submitted one at a time; each is applied atomically
3. Accepted moves are appended to the match history, their events to
   the match log
4. The match ends on victory, or when the caller ends it

Every match owns its own randomness service, so matches never share
mutable state. Replaying a match's history against its seed rebuilds
an identical state and log.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.events import Event
from ..engine_core.random_service import RandomService
from ..engine_core.reducer import Reducer
from ..engine_core.setup import setup_game
from ..engine_core.state import GameState
from ..rules.errors import InvariantError
from ..rules.validation import SetupConfig

logger = logging.getLogger(__name__)


class MatchStatus(Enum):
    """State of a match."""
    ACTIVE = "active"  # Game in progress
    FINISHED = "finished"  # Someone won
    ABANDONED = "abandoned"  # Ended before a winner


@dataclass
class Match:
    """
    One play-through of the game.

    Contains:
    - The setup data and seed it was created from
    - The randomness service and reducer bound to that seed
    - Current game state
    - Accumulated event log and move history
    """
    match_id: str
    config: SetupConfig
    seed: int
    random: RandomService
    reducer: Reducer
    state: GameState
    created_at: float = field(default_factory=time.time)
    status: MatchStatus = MatchStatus.ACTIVE
    log: list[Event] = field(default_factory=list)
    history: list[Action] = field(default_factory=list)

    def is_active(self) -> bool:
        return self.status == MatchStatus.ACTIVE

    def submit(self, action: Action, player: int | None = None) -> ActionResult:
        """
        Apply one move.

        On success the match's state, log and history are updated;
        on rejection nothing changes.
        """
        result = self.reducer.apply(self.state, action, player)
        if not result.success:
            logger.debug(
                "Match %s rejected %s: %s (%s)",
                self.match_id, action.action_type.value, result.error, result.error_code,
            )
            return result

        self.state = result.new_state
        self.log.extend(result.events)
        self.history.append(action)
        if self.state.is_game_over and self.status == MatchStatus.ACTIVE:
            self.status = MatchStatus.FINISHED
            logger.info("Match %s won by player %s", self.match_id, self.state.winner)
        return result


def _new_seed() -> int:
    return uuid.uuid4().int & 0xFFFFFFFF


def new_match(
    config: SetupConfig,
    seed: int | None = None,
    allow_debug: bool = False,
    match_id: str | None = None,
) -> Match:
    """Build a match without registering it anywhere."""
    seed = _new_seed() if seed is None else seed
    random = RandomService(seed)
    state = setup_game(config, random)
    return Match(
        match_id=match_id or str(uuid.uuid4()),
        config=config,
        seed=seed,
        random=random,
        reducer=Reducer(random=random, allow_debug=allow_debug),
        state=state,
    )


def replay(
    config: SetupConfig,
    seed: int,
    actions: list[Action],
    allow_debug: bool = False,
) -> Match:
    """
    Rebuild a match from scratch by re-applying its moves.

    The moves must all have been accepted originally; a rejection here
    means the history does not belong to this config and seed.
    """
    match = new_match(config, seed=seed, allow_debug=allow_debug, match_id="replay")
    for index, action in enumerate(actions):
        result = match.submit(action)
        if not result.success:
            raise InvariantError(
                f"Replay diverged at move {index} ({action.action_type.value}): {result.error}"
            )
    return match


class MatchManager:
    """
    Manages matches.

    Responsibilities:
    - Create matches from setup data
    - Track active matches
    - Clean up ended matches

    No persistence - matches are in-memory only.
    """

    def __init__(self, allow_debug: bool = False):
        self.allow_debug = allow_debug
        self._matches: dict[str, Match] = {}

    def create_match(self, config: SetupConfig, seed: int | None = None) -> Match:
        """
        Create a new match.

        Raises ConfigurationError if the setup data is invalid.
        """
        match = new_match(config, seed=seed, allow_debug=self.allow_debug)
        self._matches[match.match_id] = match
        logger.info(
            "Created match %s: version %d, %d players, %s supply, seed %d",
            match.match_id, int(config.version), config.num_players,
            config.supply_variant.value, match.seed,
        )
        return match

    def get_match(self, match_id: str) -> Match | None:
        """Get a match by ID."""
        return self._matches.get(match_id)

    def submit(self, match_id: str, action: Action, player: int | None = None) -> ActionResult | None:
        """Apply a move to a match. Returns None if the match does not exist."""
        match = self._matches.get(match_id)
        if match is None:
            return None
        return match.submit(action, player)

    def end_match(self, match_id: str) -> Match | None:
        """
        End a match and remove it.

        An unfinished match is marked abandoned.
        """
        match = self._matches.pop(match_id, None)
        if match is None:
            return None
        if match.status == MatchStatus.ACTIVE:
            match.status = MatchStatus.ABANDONED
        logger.info("Ended match %s (%s)", match_id, match.status.value)
        return match

    def list_matches(self) -> list[Match]:
        return list(self._matches.values())

    def cleanup_stale_matches(self, max_age_seconds: int = 3600) -> list[str]:
        """
        End matches older than max_age that are no longer active.

        Returns the removed match IDs.
        """
        current_time = time.time()
        to_remove = [
            match_id for match_id, match in self._matches.items()
            if current_time - match.created_at > max_age_seconds and not match.is_active()
        ]
        for match_id in to_remove:
            self.end_match(match_id)
        return to_remove
