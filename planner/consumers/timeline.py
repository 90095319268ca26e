"""Timeline merge.

Combines the user's items for a day with the day's fixtures into one
list ordered by effective time: start time when known, otherwise local
midnight of the item's calendar date. The sort is stable, so equal times
keep input order (user items first, then fixtures in aggregation order).

Pure: no I/O, inputs are not modified, duplicates are not collapsed.
"""

import logging
from datetime import date, tzinfo

from planner.core.types import NormalizedItem
from planner.utilities.tz import get_user_timezone

logger = logging.getLogger(__name__)


def merged_timeline(
    target_date: date,
    user_items: list[NormalizedItem],
    sports_items: list[NormalizedItem],
    tz: tzinfo | None = None,
) -> list[NormalizedItem]:
    """Merge user items and fixtures for a day into time order.

    Args:
        target_date: Day being assembled (items are not re-filtered by it)
        user_items: The day's task/habit/event items, already filtered
        sports_items: Fixtures from the aggregator
        tz: Timezone for date-only items (defaults to user timezone)

    Returns:
        New list sorted by effective time
    """
    tz = tz or get_user_timezone()
    combined = [*user_items, *sports_items]
    combined.sort(key=lambda item: item.effective_time(tz))

    logger.debug(
        "Timeline for %s: %d user + %d sports item(s)",
        target_date,
        len(user_items),
        len(sports_items),
    )
    return combined
