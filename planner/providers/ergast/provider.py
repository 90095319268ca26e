"""Ergast-compatible Formula 1 adapter.

The API only serves whole-season schedules, so one request per year is
cached and sessions are narrowed to the target local day afterwards.
Each race weekend becomes one timeline item per session (practice,
qualifying, sprint, race), titled "F1: <race> - <session>".
"""

import logging
from datetime import date, datetime
from typing import Any

from planner.core.errors import ParseError
from planner.core.types import FollowedTeam, NormalizedItem
from planner.providers.base import ScheduleAdapter
from planner.utilities.tz import parse_iso_datetime

logger = logging.getLogger(__name__)

# (response key, display name, duration policy key) in weekend order
SESSIONS: tuple[tuple[str, str, str], ...] = (
    ("FirstPractice", "Practice 1", "practice"),
    ("SecondPractice", "Practice 2", "practice"),
    ("ThirdPractice", "Practice 3", "practice"),
    ("SprintQualifying", "Sprint Qualifying", "sprint_qualifying"),
    ("Sprint", "Sprint Race", "sprint"),
    ("Qualifying", "Qualifying", "qualifying"),
)
RACE_SESSION = ("Race", "race")


class ErgastAdapter(ScheduleAdapter):
    """Formula 1 season schedule, one item per session."""

    name = "ergast"
    duration_key = "motorsport"
    default_sport = "formula 1"
    log_tag = "ERGAST"

    def build_url(self, target_date: date, sport: str) -> str:
        return f"{self._settings.base_url}/{target_date.year}.json"

    def parse(self, payload: Any, sport: str) -> list[NormalizedItem]:
        try:
            races = payload["MRData"]["RaceTable"]["Races"]
        except (KeyError, TypeError) as e:
            raise ParseError(f"Missing MRData.RaceTable.Races: {e}") from e
        if not isinstance(races, list):
            raise ParseError(f"'Races' is {type(races).__name__}, expected list")

        items = []
        for race in races:
            items.extend(self._parse_race(race))
        return items

    def _parse_race(self, race: Any) -> list[NormalizedItem]:
        if not isinstance(race, dict):
            return []

        race_name = race.get("raceName") or "F1 Race"
        circuit = (race.get("Circuit") or {}).get("circuitName")

        items = []
        for key, label, policy in SESSIONS:
            session = race.get(key)
            if isinstance(session, dict):
                item = self._parse_session(session, race_name, label, policy, circuit)
                if item:
                    items.append(item)

        # The race itself lives on the race object, not under a session key
        label, policy = RACE_SESSION
        item = self._parse_session(race, race_name, label, policy, circuit)
        if item:
            items.append(item)
        return items

    def _parse_session(
        self,
        data: dict,
        race_name: str,
        label: str,
        policy: str,
        circuit: str | None,
    ) -> NormalizedItem | None:
        """One session item. Sessions without a time are kept as date-only."""
        date_str = data.get("date")
        if not date_str:
            return None
        try:
            start_time = self._session_start(date_str, data.get("time"))
            calendar_date = None if start_time else date.fromisoformat(date_str)
            return self.make_fixture(
                f"F1: {race_name} - {label}",
                start_time,
                calendar_date,
                session=policy,
                venue=circuit,
                source_note="Formula 1",
            )
        except ValueError as e:
            logger.warning("[ERGAST] Skipping %s %s: %s", race_name, label, e)
            return None

    def _session_start(self, date_str: str, time_str: str | None) -> datetime | None:
        if not time_str:
            return None
        return parse_iso_datetime(f"{date_str}T{time_str}")

    def select(
        self,
        items: list[NormalizedItem],
        target_date: date,
        teams: list[FollowedTeam],
    ) -> list[NormalizedItem]:
        """Every session on the target day.

        Followed constructors and drivers never appear in the schedule, so
        following anyone in the sport means following the whole weekend.
        """
        return [item for item in items if item.calendar_date == target_date]
