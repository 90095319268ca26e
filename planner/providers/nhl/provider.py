"""NHL Stats API adapter - hockey schedules."""

from datetime import date

from planner.providers.statsapi import StatsApiAdapter


class NHLAdapter(StatsApiAdapter):
    name = "nhl"
    duration_key = "hockey"
    default_sport = "hockey"
    log_tag = "NHL"
    title_label = "Hockey"
    source_note = "NHL Game"

    def build_url(self, target_date: date, sport: str) -> str:
        return f"{self._settings.base_url}/schedule?date={target_date.isoformat()}"
