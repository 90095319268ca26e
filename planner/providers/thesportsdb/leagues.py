"""TheSportsDB league table.

Maps user-facing sport names to one TheSportsDB league. The label is the
canonical sport name used in fixture titles, so aliases sharing a league
(football / soccer) produce identical cached items.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class League:
    id: str
    label: str
    name: str
    tournament: bool = False  # events are races/cards, not home-vs-away


EPL = League(id="4328", label="Football", name="English Premier League")
NBA = League(id="4387", label="Basketball", name="NBA")
MLB = League(id="4424", label="Baseball", name="MLB")
NHL = League(id="4380", label="Hockey", name="NHL")
UFC = League(id="4443", label="MMA", name="UFC")
F1 = League(id="4370", label="Formula 1", name="Formula 1", tournament=True)

DEFAULT_LEAGUE = EPL

LEAGUES_BY_SPORT: dict[str, League] = {
    "football": EPL,
    "soccer": EPL,
    "basketball": NBA,
    "baseball": MLB,
    "hockey": NHL,
    "mma": UFC,
    "ufc": UFC,
    "formula 1": F1,
    "f1": F1,
}


def league_for_sport(sport: str) -> League:
    """Resolve a sport name (case-insensitive), defaulting to the EPL."""
    return LEAGUES_BY_SPORT.get(sport.strip().lower(), DEFAULT_LEAGUE)
