"""TheSportsDB adapter - the generic league schedule source.

Uses the day endpoint (eventsday.php) for one league. TheSportsDB days and
times are UTC, so a local day can span two requests; timed fixtures are
bucketed by their local start date. A strTime of 00:00:00 means the
kick-off is not known yet and the fixture is kept as a date-only item on
its dateEvent.
"""

import logging
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

from planner.core.errors import ParseError
from planner.core.types import FollowedTeam, NormalizedItem
from planner.providers.base import ScheduleAdapter
from planner.providers.thesportsdb.leagues import League, league_for_sport
from planner.utilities.matching import is_relevant
from planner.utilities.tz import get_user_timezone

logger = logging.getLogger(__name__)

# strTime values meaning "kick-off not announced"
MIDNIGHT_PLACEHOLDERS = ("00:00:00", "00:00", "00:00:00+00:00")


class TheSportsDBAdapter(ScheduleAdapter):
    """Generic league adapter; fallback for sports without a dedicated one."""

    name = "thesportsdb"
    duration_key = "generic"
    default_sport = "football"
    log_tag = "TSDB"

    def build_url(self, target_date: date, sport: str) -> str:
        league = league_for_sport(sport)
        base = self._settings.base_url
        key = self._settings.api_key or "3"
        return f"{base}/{key}/eventsday.php?d={target_date.isoformat()}&l={league.id}"

    def build_urls(self, target_date: date, sport: str) -> list[str]:
        """The UTC days the user's local day overlaps (one or two)."""
        start = datetime.combine(target_date, time.min, tzinfo=get_user_timezone())
        end = start + timedelta(days=1) - timedelta(microseconds=1)
        utc_days = sorted({start.astimezone(UTC).date(), end.astimezone(UTC).date()})
        return [self.build_url(day, sport) for day in utc_days]

    def parse(self, payload: Any, sport: str) -> list[NormalizedItem]:
        if not isinstance(payload, dict):
            raise ParseError("Expected a JSON object with an 'events' key")

        events = payload.get("events")
        if events is None:
            # TheSportsDB answers {"events": null} for an empty day
            return []
        if not isinstance(events, list):
            raise ParseError(f"'events' is {type(events).__name__}, expected list")

        league = league_for_sport(sport)
        items = []
        for event_data in events:
            item = self._parse_event(event_data, league)
            if item:
                items.append(item)
        return items

    def select(
        self,
        items: list[NormalizedItem],
        target_date: date,
        teams: list[FollowedTeam],
    ) -> list[NormalizedItem]:
        """Like the base selection, but tournament events (no participants) always pass."""
        return [
            item
            for item in items
            if item.calendar_date == target_date
            and (not item.participants or is_relevant(item.participants, teams, self._matcher))
        ]

    def _parse_event(self, data: Any, league: League) -> NormalizedItem | None:
        """Parse one event, or None if it lacks what a fixture needs."""
        try:
            event_date = date.fromisoformat(data["dateEvent"])
            start_time = self._parse_start(data, event_date)

            home = (data.get("strHomeTeam") or "").strip()
            away = (data.get("strAwayTeam") or "").strip()
            if home and away:
                title = f"{league.label}: {home} vs {away}"
                participants: tuple[str, ...] = (home, away)
            else:
                event_name = (data.get("strEvent") or "").strip()
                if not event_name:
                    return None
                title = f"{league.label}: {event_name}"
                # Tournament leagues (races) are relevant to any followed team
                participants = () if league.tournament else (event_name,)

            return self.make_fixture(
                title,
                start_time,
                # dateEvent is a UTC day; timed fixtures go in their local start day
                None if start_time else event_date,
                venue=data.get("strVenue"),
                source_note=data.get("strLeague") or league.name,
                participants=participants,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("[TSDB] Skipping unparseable event: %s", e)
            return None

    def _parse_start(self, data: dict, event_date: date) -> datetime | None:
        """Kick-off in UTC, preferring strTimestamp over dateEvent + strTime."""
        time_str = (data.get("strTime") or "").strip()
        if time_str in MIDNIGHT_PLACEHOLDERS:
            return None

        timestamp = data.get("strTimestamp")
        if timestamp:
            dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=UTC)
            return dt

        if not time_str:
            return None

        kickoff = time.fromisoformat(time_str.replace("Z", "+00:00"))
        dt = datetime.combine(event_date, kickoff)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt
