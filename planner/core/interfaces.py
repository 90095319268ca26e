"""Interfaces for the collaborators the core depends on.

Structural protocols so tests and alternative backends can plug in
without inheriting from anything.
"""

from collections.abc import Mapping
from datetime import date
from typing import Protocol, runtime_checkable

from planner.core.types import FollowedSport, FollowedTeam, NormalizedItem


@runtime_checkable
class HttpFetcher(Protocol):
    """Minimal network client used by the source adapters."""

    async def fetch(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> tuple[bytes, int]:
        """Fetch a URL, returning (body, status_code).

        Raises:
            NetworkError: When no response could be obtained
        """
        ...


class ScheduleSource(Protocol):
    """A provider adapter producing normalized fixtures for one day."""

    name: str

    async def fetch(
        self,
        target_date: date,
        teams: list[FollowedTeam],
        sport: str | None = None,
    ) -> list[NormalizedItem]: ...

    async def try_fetch(
        self,
        target_date: date,
        teams: list[FollowedTeam],
        sport: str | None = None,
    ) -> list[NormalizedItem]: ...


class FavoritesStore(Protocol):
    """Durable storage for followed sports."""

    def load_favorites(self) -> list[FollowedSport]:
        """Load persisted favorites.

        Raises:
            PersistenceError: If the stored state is malformed
        """
        ...

    def save_favorites(self, sports: list[FollowedSport]) -> None: ...


class CalendarMirror(Protocol):
    """One-way sink mirroring user events to an external calendar."""

    def add_event(self, item: NormalizedItem) -> None: ...

    def update_event(self, item: NormalizedItem) -> None: ...

    def remove_event(self, item: NormalizedItem) -> None: ...


class ReminderScheduler(Protocol):
    """One-way sink scheduling local reminders for tasks."""

    def schedule(self, item: NormalizedItem) -> None: ...

    def cancel(self, item_id: str) -> None: ...
