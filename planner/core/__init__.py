"""Core types and interfaces for the planner.

All data structures are dataclasses with attribute access.
Providers implement the ScheduleSource interface.
"""

from planner.core.errors import FetchError, NetworkError, ParseError, PersistenceError
from planner.core.interfaces import (
    CalendarMirror,
    FavoritesStore,
    HttpFetcher,
    ReminderScheduler,
    ScheduleSource,
)
from planner.core.types import (
    CacheEntry,
    FollowedSport,
    FollowedTeam,
    ItemKind,
    NormalizedItem,
    new_item_id,
)

__all__ = [
    # Types
    "CacheEntry",
    "FollowedSport",
    "FollowedTeam",
    "ItemKind",
    "NormalizedItem",
    "new_item_id",
    # Errors
    "FetchError",
    "NetworkError",
    "ParseError",
    "PersistenceError",
    # Interfaces
    "CalendarMirror",
    "FavoritesStore",
    "HttpFetcher",
    "ReminderScheduler",
    "ScheduleSource",
]
