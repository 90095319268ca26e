"""Sports schedule aggregation.

Fans out one fetch per followed sport, fans the results back in.
Consumers call this service - never adapters directly.

Failure policy: one provider failing never fails the aggregation. Its
contribution is empty (after trying the sport's fallback adapter, if one
is registered), so callers cannot tell "no games" from "provider down".
"""

import asyncio
import logging
from datetime import date

from planner.core.errors import FetchError
from planner.core.types import FollowedSport, NormalizedItem
from planner.providers.registry import AdapterRegistry

logger = logging.getLogger(__name__)


class ScheduleAggregator:
    """Concurrent fan-out/fan-in over the registered schedule adapters."""

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    async def aggregate(
        self,
        target_date: date,
        followed_sports: list[FollowedSport],
    ) -> list[NormalizedItem]:
        """Get fixtures for every followed sport on a day.

        Sports without teams are skipped. All fetches run concurrently and
        are all awaited; cancelling the caller cancels them together.

        Returns:
            Fixtures grouped in followed_sports order (not time-sorted)
        """
        active = [sport for sport in followed_sports if sport.teams]
        if not active:
            return []

        logger.info(
            "[AGGREGATOR] Fetching %s for %d sport(s): %s",
            target_date,
            len(active),
            ", ".join(s.name for s in active),
        )

        results = await asyncio.gather(
            *(self._fetch_sport(target_date, sport) for sport in active)
        )

        items = [item for sport_items in results for item in sport_items]
        logger.info("[AGGREGATOR] Returning %d fixture(s) for %s", len(items), target_date)
        return items

    async def _fetch_sport(self, target_date: date, sport: FollowedSport) -> list[NormalizedItem]:
        """Fetch one sport, downgrading any failure to an empty list."""
        binding = self._registry.binding(sport.name)
        teams = list(sport.teams)

        try:
            return await binding.adapter.try_fetch(target_date, teams, sport.name)
        except FetchError as e:
            if binding.fallback is None:
                logger.warning(
                    "[AGGREGATOR] %s failed for %s: %s", binding.adapter.name, sport.name, e
                )
                return []
            logger.warning(
                "[AGGREGATOR] %s failed for %s: %s - trying %s",
                binding.adapter.name,
                sport.name,
                e,
                binding.fallback.name,
            )
        except Exception as e:
            logger.error(
                "[AGGREGATOR] Unexpected error from %s for %s: %s",
                binding.adapter.name,
                sport.name,
                e,
                exc_info=True,
            )
            return []

        try:
            return await binding.fallback.fetch(target_date, teams, sport.name)
        except Exception as e:
            logger.error(
                "[AGGREGATOR] Fallback %s failed for %s: %s",
                binding.fallback.name,
                sport.name,
                e,
                exc_info=True,
            )
            return []
