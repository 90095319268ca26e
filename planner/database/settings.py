"""Display settings persistence.

Each flag is its own kv_store key holding "1" or "0".
"""

import logging
from dataclasses import dataclass

from planner.database.connection import get_db, init_db
from planner.database.kv import get_value, set_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplaySettings:
    show_sports_schedule: bool = False
    show_completed_items: bool = True
    group_by_kind: bool = False


SETTING_KEYS = {
    "show_sports_schedule": "showSportsSchedule",
    "show_completed_items": "showCompletedItems",
    "group_by_kind": "groupByType",
}


class SettingsStore:
    """Reads and writes DisplaySettings in the kv_store table."""

    def __init__(self, db_path: str | None = None):
        self._db_path = db_path
        init_db(db_path)

    def get(self) -> DisplaySettings:
        defaults = DisplaySettings()
        values = {}
        with get_db(self._db_path) as conn:
            for field_name, key in SETTING_KEYS.items():
                raw = get_value(conn, key)
                values[field_name] = getattr(defaults, field_name) if raw is None else raw == "1"
        return DisplaySettings(**values)

    def update(
        self,
        show_sports_schedule: bool | None = None,
        show_completed_items: bool | None = None,
        group_by_kind: bool | None = None,
    ) -> DisplaySettings:
        """Update the given flags; None leaves a flag unchanged."""
        updates = {
            "show_sports_schedule": show_sports_schedule,
            "show_completed_items": show_completed_items,
            "group_by_kind": group_by_kind,
        }
        with get_db(self._db_path) as conn:
            for field_name, value in updates.items():
                if value is not None:
                    set_value(conn, SETTING_KEYS[field_name], "1" if value else "0")
        return self.get()
