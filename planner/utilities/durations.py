"""Default fixture durations.

One policy table for every adapter: when a provider gives a start time but
no end time, the end is start + the duration for that sport (or session).
"""

from datetime import datetime, timedelta

DEFAULT_DURATION = timedelta(hours=2)

SPORT_DURATIONS: dict[str, timedelta] = {
    "generic": timedelta(hours=2),
    "baseball": timedelta(hours=3),
    "hockey": timedelta(hours=2, minutes=30),
    "motorsport": timedelta(hours=2),
}

# Motorsport weekend sessions
SESSION_DURATIONS: dict[str, timedelta] = {
    "practice": timedelta(hours=1),
    "qualifying": timedelta(hours=1),
    "sprint_qualifying": timedelta(hours=1),
    "sprint": timedelta(hours=1),
    "race": timedelta(hours=2),
}


def default_duration(sport: str, session: str | None = None) -> timedelta:
    """Duration for a sport, or for a session within it when given."""
    if session is not None and session in SESSION_DURATIONS:
        return SESSION_DURATIONS[session]
    return SPORT_DURATIONS.get(sport, DEFAULT_DURATION)


def default_end_time(
    start: datetime | None,
    sport: str,
    session: str | None = None,
) -> datetime | None:
    """End time for a fixture without one. None when the start is unknown."""
    if start is None:
        return None
    return start + default_duration(sport, session)
