"""User item store - tasks, habits and events.

In-memory list of the user's own timeline items. Mutations notify two
one-way sinks: tasks get local reminders, events get mirrored to the
external calendar. Sink failures are logged and never undo a mutation.
"""

import logging
from collections.abc import Callable, Collection
from dataclasses import replace
from datetime import date, datetime, time, timedelta

from planner.core.interfaces import CalendarMirror, ReminderScheduler
from planner.core.types import ItemKind, NormalizedItem
from planner.utilities.tz import get_user_timezone, today_user

logger = logging.getLogger(__name__)

# Repeating habits are materialized this far ahead
DAILY_HABIT_DAYS = 30
WEEKLY_HABIT_WEEKS = 12


class LoggingCalendarMirror:
    """CalendarMirror that only logs; used when no calendar is connected."""

    def add_event(self, item: NormalizedItem) -> None:
        logger.debug("[CALENDAR] add %s (%s)", item.title, item.id)

    def update_event(self, item: NormalizedItem) -> None:
        logger.debug("[CALENDAR] update %s (%s)", item.title, item.id)

    def remove_event(self, item: NormalizedItem) -> None:
        logger.debug("[CALENDAR] remove %s (%s)", item.title, item.id)


class LoggingReminderScheduler:
    """ReminderScheduler that only logs."""

    def schedule(self, item: NormalizedItem) -> None:
        when = item.start_time or item.calendar_date
        logger.debug("[REMINDER] schedule %s at %s", item.title, when)

    def cancel(self, item_id: str) -> None:
        logger.debug("[REMINDER] cancel %s", item_id)


class ItemStore:
    """The user's own items, with calendar/reminder side effects."""

    def __init__(
        self,
        calendar: CalendarMirror | None = None,
        reminders: ReminderScheduler | None = None,
        today: Callable[[], date] = today_user,
    ):
        self._items: list[NormalizedItem] = []
        self._calendar = calendar or LoggingCalendarMirror()
        self._reminders = reminders or LoggingReminderScheduler()
        self._today = today

    def _notify(self, action: str, hook: Callable[[], None]) -> None:
        try:
            hook()
        except Exception as e:
            logger.warning("Failed to %s: %s", action, e, exc_info=True)

    def _index(self, item_id: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def _has_habit(self, title: str, day: date) -> bool:
        return any(
            i.kind is ItemKind.HABIT and i.title == title and i.calendar_date == day
            for i in self._items
        )

    def _after_save(self, item: NormalizedItem, created: bool) -> None:
        if item.kind is ItemKind.TASK:
            self._notify("schedule reminder", lambda: self._reminders.schedule(item))
        elif item.kind is ItemKind.EVENT:
            if created:
                self._notify("mirror event", lambda: self._calendar.add_event(item))
            else:
                self._notify("update mirrored event", lambda: self._calendar.update_event(item))

    def all(self) -> list[NormalizedItem]:
        return list(self._items)

    def get(self, item_id: str) -> NormalizedItem | None:
        index = self._index(item_id)
        return None if index is None else self._items[index]

    def add(self, item: NormalizedItem) -> NormalizedItem:
        """Add a user item.

        Raises:
            ValueError: For fixtures (provider items are never stored) or duplicate ids
        """
        if item.kind is ItemKind.FIXTURE:
            raise ValueError("Fixtures come from providers and cannot be added")
        if self._index(item.id) is not None:
            raise ValueError(f"Item {item.id} already exists")

        self._items.append(item)
        self._after_save(item, created=True)
        return item

    def update(self, item: NormalizedItem) -> NormalizedItem:
        """Replace the stored item with the same id.

        Raises:
            KeyError: If no item has this id
            ValueError: If the item is a fixture
        """
        if item.kind is ItemKind.FIXTURE:
            raise ValueError("Fixtures cannot be stored")
        index = self._index(item.id)
        if index is None:
            raise KeyError(item.id)

        self._items[index] = item
        self._after_save(item, created=False)
        return item

    def remove(self, item_id: str) -> NormalizedItem | None:
        """Remove an item; returns it, or None if it did not exist."""
        index = self._index(item_id)
        if index is None:
            return None

        item = self._items.pop(index)
        if item.kind is ItemKind.TASK:
            self._notify("cancel reminder", lambda: self._reminders.cancel(item.id))
        elif item.kind is ItemKind.EVENT:
            self._notify("remove mirrored event", lambda: self._calendar.remove_event(item))
        return item

    def add_recurring_habit(
        self,
        title: str,
        start: date,
        weekdays: Collection[int] | None = None,
        at: time | None = None,
        notes: str | None = None,
    ) -> list[NormalizedItem]:
        """Add one habit item per occurrence of a repeating habit.

        Every day for DAILY_HABIT_DAYS days when weekdays is None, otherwise
        on the given weekdays (0 = Monday) from start through
        WEEKLY_HABIT_WEEKS weeks later.

        Args:
            title: Habit title
            start: First day of the series
            weekdays: Days of the week to repeat on, or None for every day
            at: Optional time of day, in the user timezone
            notes: Copied onto every occurrence

        Returns:
            The created items, in date order

        Raises:
            ValueError: If title is blank, or weekdays is empty or out of range
        """
        if not title.strip():
            raise ValueError("Habit title must not be empty")

        if weekdays is None:
            days = [start + timedelta(days=n) for n in range(DAILY_HABIT_DAYS)]
        else:
            chosen = set(weekdays)
            if not chosen or not chosen <= set(range(7)):
                raise ValueError("weekdays must be a non-empty subset of 0-6 (Monday-Sunday)")
            span = WEEKLY_HABIT_WEEKS * 7
            days = [
                day
                for day in (start + timedelta(days=n) for n in range(span + 1))
                if day.weekday() in chosen
            ]

        tz = get_user_timezone()
        created = [
            self.add(
                NormalizedItem(
                    title=title,
                    kind=ItemKind.HABIT,
                    calendar_date=day,
                    start_time=None if at is None else datetime.combine(day, at, tzinfo=tz),
                    notes=notes,
                )
            )
            for day in days
        ]
        logger.info("Added habit %r on %d day(s) from %s", title, len(created), start)
        return created

    def can_complete(self, item: NormalizedItem) -> bool:
        """Tasks and habits dated today or earlier can change completion."""
        return item.kind.is_completable and item.calendar_date <= self._today()

    def toggle_completion(self, item_id: str) -> NormalizedItem | None:
        """Flip an item's completed flag.

        Only tasks and habits dated today or earlier can be completed.
        Completing today's habit adds a fresh copy for tomorrow unless a
        repeating series already has one.

        Returns:
            The updated item, or None if it is missing or cannot be completed
        """
        index = self._index(item_id)
        if index is None:
            return None

        item = self._items[index]
        if not self.can_complete(item):
            return None

        today = self._today()
        if (
            item.kind is ItemKind.HABIT
            and item.calendar_date == today
            and not item.completed
            and not self._has_habit(item.title, today + timedelta(days=1))
        ):
            self._items.append(
                NormalizedItem(
                    title=item.title,
                    kind=ItemKind.HABIT,
                    calendar_date=today + timedelta(days=1),
                    notes=item.notes,
                )
            )

        updated = replace(item, completed=not item.completed)
        self._items[index] = updated
        return updated

    def items_for(
        self,
        day: date,
        show_completed: bool = True,
        group_by_kind: bool = False,
    ) -> list[NormalizedItem]:
        """Items on a day, ordered by effective time (or by kind, then time)."""
        tz = get_user_timezone()
        items = [
            item
            for item in self._items
            if item.calendar_date == day and (show_completed or not item.completed)
        ]
        if group_by_kind:
            items.sort(key=lambda i: (i.kind.value, i.effective_time(tz)))
        else:
            items.sort(key=lambda i: i.effective_time(tz))
        return items
