"""Shared parsing for "Stats API" style schedules (MLB, NHL).

Both leagues answer with:

    {"dates": [{"date": "2024-06-01",
                "games": [{"gameDate": "2024-06-01T23:05:00Z",
                           "officialDate": "2024-06-01",
                           "teams": {"home": {"team": {"name": ...}},
                                     "away": {"team": {"name": ...}}},
                           "venue": {"name": ...}}]}]}
"""

import logging
from datetime import date
from typing import Any

from planner.core.errors import ParseError
from planner.core.types import NormalizedItem
from planner.providers.base import ScheduleAdapter
from planner.utilities.tz import parse_iso_datetime

logger = logging.getLogger(__name__)


class StatsApiAdapter(ScheduleAdapter):
    """Base for adapters reading the dates[].games[] schedule shape.

    Subclasses set `title_label` and `source_note`.
    """

    title_label: str = ""
    source_note: str = ""

    def parse(self, payload: Any, sport: str) -> list[NormalizedItem]:
        if not isinstance(payload, dict):
            raise ParseError("Expected a JSON object with a 'dates' key")

        dates = payload.get("dates")
        if dates is None:
            raise ParseError("Response has no 'dates' key")
        if not isinstance(dates, list):
            raise ParseError(f"'dates' is {type(dates).__name__}, expected list")

        items = []
        for day in dates:
            if not isinstance(day, dict):
                continue
            for game in day.get("games") or []:
                item = self._parse_game(game, day.get("date"))
                if item:
                    items.append(item)
        return items

    def _parse_game(self, game: Any, day_str: str | None) -> NormalizedItem | None:
        """Parse one game, or None if required fields are missing."""
        try:
            teams = game["teams"]
            home = teams["home"]["team"]["name"].strip()
            away = teams["away"]["team"]["name"].strip()
            start_time = parse_iso_datetime(game["gameDate"])

            # Schedule day as the league reports it; local start date otherwise
            official = game.get("officialDate") or day_str
            calendar_date = date.fromisoformat(official) if official else None

            venue = (game.get("venue") or {}).get("name")

            return self.make_fixture(
                f"{self.title_label}: {home} vs {away}",
                start_time,
                calendar_date,
                venue=venue,
                source_note=self.source_note,
                participants=(home, away),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("[%s] Skipping unparseable game: %s", self.log_tag, e)
            return None
