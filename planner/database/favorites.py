"""Favorites persistence.

Stored as one JSON document under the "favoriteSports" key:

    [{"name": "Baseball", "teams": [{"name": "New York Yankees"}]}]
"""

import json
import logging

from planner.core.errors import PersistenceError
from planner.core.types import FollowedSport
from planner.database.connection import get_db, init_db
from planner.database.kv import get_value, set_value

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoriteSports"


def decode_favorites(raw: str) -> list[FollowedSport]:
    """Decode the stored JSON document.

    Raises:
        PersistenceError: If the document is not valid JSON of the expected shape
    """
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise TypeError(f"expected list, got {type(data).__name__}")
        return [FollowedSport.from_dict(entry) for entry in data]
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise PersistenceError(f"Malformed favorites: {e}") from e


def encode_favorites(sports: list[FollowedSport]) -> str:
    return json.dumps([sport.to_dict() for sport in sports])


class SqliteFavoritesStore:
    """FavoritesStore backed by the kv_store table."""

    def __init__(self, db_path: str | None = None):
        self._db_path = db_path
        init_db(db_path)

    def load_favorites(self) -> list[FollowedSport]:
        with get_db(self._db_path) as conn:
            raw = get_value(conn, FAVORITES_KEY)
        if raw is None:
            return []
        return decode_favorites(raw)

    def save_favorites(self, sports: list[FollowedSport]) -> None:
        with get_db(self._db_path) as conn:
            set_value(conn, FAVORITES_KEY, encode_favorites(sports))
        logger.debug("Saved %d followed sport(s)", len(sports))
