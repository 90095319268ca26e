"""Planner facade - wires favorites, items, aggregation and the merger.

create_default_planner() builds the production object graph from config;
tests build PlannerService from fakes.
"""

import logging
from dataclasses import dataclass
from datetime import date

from planner.config import PlannerConfig, get_config, set_user_timezone
from planner.consumers.timeline import merged_timeline
from planner.core.interfaces import HttpFetcher
from planner.core.types import NormalizedItem
from planner.database import SettingsStore, SqliteFavoritesStore
from planner.database.settings import DisplaySettings
from planner.providers import HttpxFetcher, create_default_registry
from planner.services.favorites import FavoritesRegistry
from planner.services.items import ItemStore
from planner.services.sports_data import ScheduleAggregator
from planner.utilities.cache import ResponseCache

logger = logging.getLogger(__name__)


@dataclass
class PlannerService:
    """Everything the API layer needs, behind one object."""

    favorites: FavoritesRegistry
    items: ItemStore
    aggregator: ScheduleAggregator
    settings: SettingsStore
    cache: ResponseCache
    fetcher: HttpFetcher | None = None

    async def sports_schedule(self, day: date) -> list[NormalizedItem]:
        """Fixtures for the followed teams; empty when sports are switched off."""
        if not self.settings.get().show_sports_schedule:
            logger.debug("Sports schedule disabled")
            return []
        return await self.aggregator.aggregate(day, self.favorites.list())

    async def timeline(self, day: date) -> list[NormalizedItem]:
        """The day's user items and fixtures in time order."""
        display = self.settings.get()
        user_items = self.items.items_for(
            day,
            show_completed=display.show_completed_items,
            group_by_kind=display.group_by_kind,
        )
        sports_items = await self.sports_schedule(day)
        return merged_timeline(day, user_items, sports_items)

    def update_settings(
        self,
        show_sports_schedule: bool | None = None,
        show_completed_items: bool | None = None,
        group_by_kind: bool | None = None,
        timezone: str | None = None,
    ) -> DisplaySettings:
        """Update display settings; a timezone change drops cached fixtures.

        Raises:
            ValueError: If timezone is not a known IANA name
        """
        if timezone is not None:
            set_user_timezone(timezone)
            # Cached fixtures were converted to the previous timezone
            self.cache.clear()
        return self.settings.update(
            show_sports_schedule=show_sports_schedule,
            show_completed_items=show_completed_items,
            group_by_kind=group_by_kind,
        )

    async def aclose(self) -> None:
        aclose = getattr(self.fetcher, "aclose", None)
        if aclose is not None:
            await aclose()


def create_default_planner(config: PlannerConfig | None = None) -> PlannerService:
    """Build the planner with HTTP providers and SQLite persistence."""
    config = config or get_config()

    fetcher = HttpxFetcher(timeout=config.http_timeout)
    cache = ResponseCache(dedupe_in_flight=config.dedupe_requests)
    registry = create_default_registry(fetcher, cache, config)

    planner = PlannerService(
        favorites=FavoritesRegistry(SqliteFavoritesStore(config.database_path)),
        items=ItemStore(),
        aggregator=ScheduleAggregator(registry),
        settings=SettingsStore(config.database_path),
        cache=cache,
        fetcher=fetcher,
    )
    logger.info(
        "Planner ready (timezone=%s, sports=%s)",
        config.timezone,
        ", ".join(registry.sport_names()),
    )
    return planner
