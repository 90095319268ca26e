"""SQLite persistence.

The planner only needs a key-value table; the stores built on it
(favorites, display settings) live in this package.
"""

from planner.database.connection import get_db, init_db
from planner.database.favorites import SqliteFavoritesStore
from planner.database.settings import DisplaySettings, SettingsStore

__all__ = [
    "DisplaySettings",
    "SettingsStore",
    "SqliteFavoritesStore",
    "get_db",
    "init_db",
]
