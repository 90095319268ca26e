"""Base class for schedule source adapters.

An adapter knows one upstream schema. The shared flow is:

    build_urls(date, sport)  ->  cache lookup  ->  HTTP fetch  ->  JSON decode
        ->  parse() to NormalizedItems  ->  cache store  ->  select()

parse() produces every fixture in the response; select() narrows them to
the followed teams and the target day. Caching the unselected items keeps
one cache entry valid for any set of followed teams.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any

from planner.config import ProviderSettings
from planner.core.errors import FetchError, NetworkError, ParseError
from planner.core.interfaces import HttpFetcher
from planner.core.types import FollowedTeam, ItemKind, NormalizedItem
from planner.utilities.cache import ResponseCache
from planner.utilities.durations import default_end_time
from planner.utilities.matching import DEFAULT_MATCHER, TeamMatcher, is_relevant
from planner.utilities.tz import to_user_tz

logger = logging.getLogger(__name__)


class ScheduleAdapter(ABC):
    """Fetches one provider's fixtures for a day.

    Subclasses set `name`, `duration_key` and `default_sport`, and implement
    build_url() and parse().
    """

    name: str = "base"
    duration_key: str = "generic"
    default_sport: str = ""
    log_tag: str = "ADAPTER"

    def __init__(
        self,
        fetcher: HttpFetcher,
        cache: ResponseCache,
        settings: ProviderSettings,
        matcher: TeamMatcher = DEFAULT_MATCHER,
    ):
        self._fetcher = fetcher
        self._cache = cache
        self._settings = settings
        self._matcher = matcher

    @abstractmethod
    def build_url(self, target_date: date, sport: str) -> str:
        """Request URL for a day. Must be a pure function of its inputs."""

    def build_urls(self, target_date: date, sport: str) -> list[str]:
        """Every request needed to cover the target day.

        One URL by default. Sources whose schedule days differ from the
        user's local day return one URL per schedule day it overlaps.
        """
        return [self.build_url(target_date, sport)]

    @abstractmethod
    def parse(self, payload: Any, sport: str) -> list[NormalizedItem]:
        """Convert a decoded response into items.

        Raises:
            ParseError: If the payload does not have the expected shape
        """

    def request_headers(self) -> dict[str, str]:
        return self._settings.headers()

    async def fetch(
        self,
        target_date: date,
        teams: list[FollowedTeam],
        sport: str | None = None,
    ) -> list[NormalizedItem]:
        """Fetch fixtures for the followed teams on a day.

        Never raises FetchError: network and parse failures are logged and
        produce an empty list.
        """
        try:
            return await self.try_fetch(target_date, teams, sport)
        except FetchError as e:
            logger.warning("[%s] Fetch failed for %s: %s", self.log_tag, target_date, e)
            return []

    async def try_fetch(
        self,
        target_date: date,
        teams: list[FollowedTeam],
        sport: str | None = None,
    ) -> list[NormalizedItem]:
        """Like fetch(), but raise FetchError instead of returning [] on failure."""
        sport = sport or self.default_sport
        urls = self.build_urls(target_date, sport)

        def loader(url: str):
            async def load() -> list[NormalizedItem]:
                return await self._load(url, sport)

            return load

        responses = await asyncio.gather(
            *(self._cache.get_or_load(url, loader(url)) for url in urls)
        )
        items = [item for response in responses for item in response]
        selected = self.select(items, target_date, teams)
        logger.debug(
            "[%s] %d of %d fixtures selected for %s on %s",
            self.log_tag,
            len(selected),
            len(items),
            sport,
            target_date,
        )
        return selected

    async def _load(self, url: str, sport: str) -> list[NormalizedItem]:
        logger.info("[%s] Fetching %s", self.log_tag, url)
        body, status = await self._fetcher.fetch(url, self.request_headers())
        if status >= 400:
            raise NetworkError(f"HTTP {status}", source=self.name, url=url)

        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise ParseError(f"Invalid JSON: {e}", source=self.name, url=url) from e

        try:
            return self.parse(payload, sport)
        except ParseError as e:
            e.source = e.source or self.name
            e.url = e.url or url
            raise

    def select(
        self,
        items: list[NormalizedItem],
        target_date: date,
        teams: list[FollowedTeam],
    ) -> list[NormalizedItem]:
        """Keep items on the target day that involve a followed team."""
        return [
            item
            for item in items
            if item.calendar_date == target_date
            and is_relevant(item.participants, teams, self._matcher)
        ]

    # Helpers for subclasses

    def make_fixture(
        self,
        title: str,
        start_time: datetime | None,
        calendar_date: date | None = None,
        *,
        end_time: datetime | None = None,
        session: str | None = None,
        venue: str | None = None,
        source_note: str | None = None,
        participants: tuple[str, ...] = (),
    ) -> NormalizedItem:
        """Build a fixture in user-local time with a default end time.

        calendar_date defaults to the local date of start_time.

        Raises:
            ValueError: If neither start_time nor calendar_date is given
        """
        if start_time is not None:
            start_time = to_user_tz(start_time)
        if end_time is not None:
            end_time = to_user_tz(end_time)
        else:
            end_time = default_end_time(start_time, self.duration_key, session)

        if calendar_date is None:
            if start_time is None:
                raise ValueError("Fixture needs a start time or a calendar date")
            calendar_date = start_time.date()

        return NormalizedItem(
            title=title,
            kind=ItemKind.FIXTURE,
            calendar_date=calendar_date,
            start_time=start_time,
            end_time=end_time,
            venue=venue or None,
            source_note=source_note,
            participants=participants,
        )
