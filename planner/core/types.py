"""Core data types for the planner timeline.

All data structures are frozen dataclasses with attribute access.
Provider fixtures and user-authored items share one shape (NormalizedItem)
so the timeline can treat them uniformly.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from enum import Enum


def new_item_id() -> str:
    """Generate an opaque item identifier."""
    return uuid.uuid4().hex


class ItemKind(str, Enum):
    """What an item on the timeline represents."""

    TASK = "task"
    HABIT = "habit"
    EVENT = "event"
    FIXTURE = "fixture"  # provider-sourced event

    @property
    def is_event(self) -> bool:
        return self in (ItemKind.EVENT, ItemKind.FIXTURE)

    @property
    def is_completable(self) -> bool:
        return self in (ItemKind.TASK, ItemKind.HABIT)


@dataclass(frozen=True)
class NormalizedItem:
    """A single timeline entry.

    `calendar_date` is the day bucket used for grouping. `start_time` is the
    precise instant when known; ordering falls back to local midnight of
    `calendar_date` when it is not (see effective_time).
    """

    title: str
    kind: ItemKind
    calendar_date: date
    start_time: datetime | None = None
    end_time: datetime | None = None
    completed: bool = False
    venue: str | None = None
    source_note: str | None = None  # "MLB Game", league name, ... display only
    notes: str | None = None

    # Names the item was built from (teams, competitors). Selection only.
    participants: tuple[str, ...] = ()

    id: str = field(default_factory=new_item_id)

    def __post_init__(self) -> None:
        if self.kind is ItemKind.FIXTURE and self.completed:
            raise ValueError("Fixtures cannot be completed")

    def effective_time(self, tz: tzinfo) -> datetime:
        """Instant used for ordering.

        Args:
            tz: Timezone used for date-only items and naive start times

        Returns:
            Timezone-aware datetime
        """
        if self.start_time is not None:
            if self.start_time.tzinfo is None:
                return self.start_time.replace(tzinfo=tz)
            return self.start_time
        return datetime.combine(self.calendar_date, time.min, tzinfo=tz)


@dataclass(frozen=True)
class FollowedTeam:
    """A team the user follows, unique by name within its sport."""

    name: str


@dataclass(frozen=True)
class FollowedSport:
    """A followed sport and the teams followed within it."""

    name: str
    teams: tuple[FollowedTeam, ...] = ()

    @property
    def team_names(self) -> list[str]:
        return [t.name for t in self.teams]

    def to_dict(self) -> dict:
        return {"name": self.name, "teams": [{"name": t.name} for t in self.teams]}

    @classmethod
    def from_dict(cls, data: dict) -> "FollowedSport":
        """Build from the persisted JSON shape.

        Raises:
            KeyError, TypeError: If the shape is not {name, teams: [{name}]}
        """
        return cls(
            name=str(data["name"]),
            teams=tuple(FollowedTeam(name=str(t["name"])) for t in data["teams"]),
        )


@dataclass(frozen=True)
class CacheEntry:
    """A cached provider response, keyed by the exact request URL."""

    key: str
    value: tuple[NormalizedItem, ...]
    inserted_at: datetime
