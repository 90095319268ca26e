"""Adapter registry - single source of truth for sport-to-adapter dispatch.

Sport names map to one registered adapter (case-insensitive). Anything
not registered goes to the default adapter, so a new sport always gets
the generic league schedule until a dedicated adapter is added:

    registry = AdapterRegistry(default=tsdb)
    registry.register("baseball", mlb)
    registry.register(["formula 1", "f1"], ergast, fallback=tsdb)

    registry.resolve("Baseball")  # -> mlb
    registry.resolve("cricket")   # -> tsdb (default)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from planner.core.interfaces import ScheduleSource

logger = logging.getLogger(__name__)


def _key(sport: str) -> str:
    return sport.strip().lower()


@dataclass(frozen=True)
class AdapterBinding:
    """How one sport name is served."""

    sport: str
    adapter: ScheduleSource
    fallback: ScheduleSource | None = None  # tried when adapter fails


class AdapterRegistry:
    """Maps sport names to schedule adapters with an explicit default."""

    def __init__(self, default: ScheduleSource):
        self._default = AdapterBinding(sport="*", adapter=default)
        self._bindings: dict[str, AdapterBinding] = {}

    def register(
        self,
        sports: str | Iterable[str],
        adapter: ScheduleSource,
        *,
        fallback: ScheduleSource | None = None,
    ) -> None:
        """Register an adapter for one or more sport names.

        Args:
            sports: Sport name or names (aliases), matched case-insensitively
            adapter: Adapter serving these sports
            fallback: Optional adapter tried when this one fails
        """
        names = [sports] if isinstance(sports, str) else list(sports)
        for sport in names:
            key = _key(sport)
            if key in self._bindings:
                logger.warning("[REGISTRY] Sport '%s' already registered, overwriting", key)
            self._bindings[key] = AdapterBinding(sport=key, adapter=adapter, fallback=fallback)
            logger.debug("[REGISTRY] Registered %s -> %s", key, adapter.name)

    def binding(self, sport: str) -> AdapterBinding:
        """Binding for a sport, or the default binding."""
        return self._bindings.get(_key(sport), self._default)

    def resolve(self, sport: str) -> ScheduleSource:
        return self.binding(sport).adapter

    def fallback_for(self, sport: str) -> ScheduleSource | None:
        return self.binding(sport).fallback

    @property
    def default(self) -> ScheduleSource:
        return self._default.adapter

    def is_registered(self, sport: str) -> bool:
        return _key(sport) in self._bindings

    def unregister(self, sport: str) -> bool:
        """Remove a sport mapping (it then resolves to the default)."""
        return self._bindings.pop(_key(sport), None) is not None

    def sport_names(self) -> list[str]:
        return sorted(self._bindings)
