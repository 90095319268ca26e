"""Schedule source adapters and their registry.

Adding a provider:
1. Create an adapter module (providers/newprovider/) subclassing ScheduleAdapter
2. Register it for its sport names in create_default_registry()

The aggregator only talks to the registry, never to adapters directly.
"""

from planner.config import PlannerConfig
from planner.core.interfaces import HttpFetcher
from planner.providers.base import ScheduleAdapter
from planner.providers.ergast import ErgastAdapter
from planner.providers.http import HttpxFetcher
from planner.providers.mlb import MLBAdapter
from planner.providers.nhl import NHLAdapter
from planner.providers.registry import AdapterBinding, AdapterRegistry
from planner.providers.thesportsdb import TheSportsDBAdapter
from planner.utilities.cache import ResponseCache
from planner.utilities.matching import DEFAULT_MATCHER, TeamMatcher


def create_default_registry(
    fetcher: HttpFetcher,
    cache: ResponseCache,
    config: PlannerConfig,
    matcher: TeamMatcher = DEFAULT_MATCHER,
) -> AdapterRegistry:
    """Build the registry with every built-in adapter.

    TheSportsDB is the default for unknown sports and the fallback when
    the Formula 1 schedule source is unavailable.
    """
    tsdb = TheSportsDBAdapter(fetcher, cache, config.provider("thesportsdb"), matcher)
    mlb = MLBAdapter(fetcher, cache, config.provider("mlb"), matcher)
    nhl = NHLAdapter(fetcher, cache, config.provider("nhl"), matcher)
    ergast = ErgastAdapter(fetcher, cache, config.provider("ergast"), matcher)

    registry = AdapterRegistry(default=tsdb)
    registry.register("baseball", mlb)
    registry.register("hockey", nhl)
    registry.register(["formula 1", "f1"], ergast, fallback=tsdb)
    return registry


__all__ = [
    "AdapterBinding",
    "AdapterRegistry",
    "ErgastAdapter",
    "HttpxFetcher",
    "MLBAdapter",
    "NHLAdapter",
    "ScheduleAdapter",
    "TheSportsDBAdapter",
    "create_default_registry",
]
