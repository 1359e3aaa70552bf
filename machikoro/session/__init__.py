"""
Session Module - In-memory matches.

A match represents one play-through of the game:
- Created from validated setup data and a seed
- Holds the current game state, event log and move history
- Can be rebuilt exactly by replaying its history

Matches are not persisted.
"""

from .manager import Match, MatchManager, MatchStatus, new_match, replay

__all__ = [
    "Match",
    "MatchManager",
    "MatchStatus",
    "new_match",
    "replay",
]
