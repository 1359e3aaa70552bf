"""
Event Log - structured records of what a move did.

Every move produces its own EventLog, returned alongside the new state.
Events carry just enough data to render a sentence (player ids,
amounts, card names); turning them into text is left to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Iterator


class EventType(str, Enum):
    """Closed set of event kinds."""
    ROLL_ONE = "roll_one"
    ROLL_TWO = "roll_two"
    ROLL_MODIFIED = "roll_modified"
    EARN = "earn"
    TAKE = "take"
    BUY = "buy"
    OFFICE_TRADE = "office_trade"
    SHARED_ROLL_USED = "shared_roll_used"
    END_GAME = "end_game"


@dataclass(frozen=True)
class Event:
    """
    A single event record.

    Only the fields relevant to `event_type` are set:
    - ROLL_ONE / ROLL_MODIFIED / SHARED_ROLL_USED: roll
    - ROLL_TWO: dice, roll
    - EARN: player, amount, name
    - TAKE: from_player, to_player (None for the bank), amount, name
    - BUY: player, name
    - OFFICE_TRADE: player, opponent, player_est, opponent_est
    - END_GAME: winner
    """
    event_type: EventType
    player: int | None = None
    from_player: int | None = None
    to_player: int | None = None
    opponent: int | None = None
    amount: int | None = None
    name: str | None = None
    roll: int | None = None
    dice: tuple[int, ...] | None = None
    player_est: str | None = None
    opponent_est: str | None = None
    winner: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize, dropping unset fields."""
        data = {k: v for k, v in asdict(self).items() if v is not None}
        data["event_type"] = self.event_type.value
        if self.dice is not None:
            data["dice"] = list(self.dice)
        return data


@dataclass
class EventLog:
    """Ordered event buffer for one move."""
    events: list[Event] = field(default_factory=list)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def append(self, event: Event) -> None:
        self.events.append(event)

    def roll_one(self, roll: int) -> None:
        self.append(Event(EventType.ROLL_ONE, roll=roll))

    def roll_two(self, dice: tuple[int, int]) -> None:
        self.append(Event(EventType.ROLL_TWO, dice=tuple(dice), roll=sum(dice)))

    def roll_modified(self, roll: int) -> None:
        self.append(Event(EventType.ROLL_MODIFIED, roll=roll))

    def earn(self, player: int, amount: int, name: str) -> None:
        self.append(Event(EventType.EARN, player=player, amount=amount, name=name))

    def take(self, from_player: int, to_player: int | None, amount: int, name: str) -> None:
        self.append(Event(
            EventType.TAKE,
            from_player=from_player,
            to_player=to_player,
            amount=amount,
            name=name,
        ))

    def buy(self, player: int, name: str) -> None:
        self.append(Event(EventType.BUY, player=player, name=name))

    def office_trade(self, player: int, opponent: int, player_est: str, opponent_est: str) -> None:
        self.append(Event(
            EventType.OFFICE_TRADE,
            player=player,
            opponent=opponent,
            player_est=player_est,
            opponent_est=opponent_est,
        ))

    def shared_roll_used(self, roll: int) -> None:
        self.append(Event(EventType.SHARED_ROLL_USED, roll=roll))

    def end_game(self, winner: int) -> None:
        self.append(Event(EventType.END_GAME, winner=winner))

    def of_type(self, event_type: EventType) -> list[Event]:
        """Filter events by type."""
        return [e for e in self.events if e.event_type == event_type]

    def to_list(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self.events]
