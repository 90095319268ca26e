"""MLB Stats API adapter - baseball schedules."""

from datetime import date

from planner.providers.statsapi import StatsApiAdapter


class MLBAdapter(StatsApiAdapter):
    name = "mlb"
    duration_key = "baseball"
    default_sport = "baseball"
    log_tag = "MLB"
    title_label = "Baseball"
    source_note = "MLB Game"

    def build_url(self, target_date: date, sport: str) -> str:
        # sportId=1 is Major League Baseball
        return (
            f"{self._settings.base_url}/schedule"
            f"?sportId=1&date={target_date.isoformat()}&hydrate=team,venue"
        )
