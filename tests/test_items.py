"""Tests for ItemStore: side-effect hooks, completion rules, day listing."""

from datetime import date, datetime, time, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from planner.core.types import ItemKind, NormalizedItem
from planner.services.items import ItemStore

TODAY = date(2024, 6, 1)


def _item(title, kind=ItemKind.TASK, day=TODAY, hour=None, **kwargs):
    start = None
    if hour is not None:
        start = datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)
    return NormalizedItem(title=title, kind=kind, calendar_date=day, start_time=start, **kwargs)


@pytest.fixture
def calendar():
    return MagicMock()


@pytest.fixture
def reminders():
    return MagicMock()


@pytest.fixture
def store(calendar, reminders):
    return ItemStore(calendar=calendar, reminders=reminders, today=lambda: TODAY)


class TestMutations:
    def test_add_task_schedules_reminder(self, store, reminders, calendar):
        task = store.add(_item("Pay rent"))

        reminders.schedule.assert_called_once_with(task)
        calendar.add_event.assert_not_called()

    def test_add_event_mirrors_to_calendar(self, store, reminders, calendar):
        event = store.add(_item("Dentist", ItemKind.EVENT, hour=9))

        calendar.add_event.assert_called_once_with(event)
        reminders.schedule.assert_not_called()

    def test_add_habit_has_no_side_effects(self, store, reminders, calendar):
        store.add(_item("Read", ItemKind.HABIT))

        reminders.schedule.assert_not_called()
        calendar.add_event.assert_not_called()

    def test_fixtures_rejected(self, store):
        with pytest.raises(ValueError):
            store.add(_item("Football: A vs B", ItemKind.FIXTURE))

    def test_duplicate_id_rejected(self, store):
        task = store.add(_item("Pay rent"))
        with pytest.raises(ValueError):
            store.add(task)

    def test_update_event(self, store, calendar):
        event = store.add(_item("Dentist", ItemKind.EVENT, hour=9))
        moved = store.update(NormalizedItem(
            title="Dentist", kind=ItemKind.EVENT, calendar_date=TODAY, id=event.id,
        ))

        calendar.update_event.assert_called_once_with(moved)
        assert store.get(event.id) == moved

    def test_update_missing(self, store):
        with pytest.raises(KeyError):
            store.update(_item("Ghost"))

    def test_remove_task_cancels_reminder(self, store, reminders):
        task = store.add(_item("Pay rent"))

        assert store.remove(task.id) == task
        reminders.cancel.assert_called_once_with(task.id)
        assert store.all() == []

    def test_remove_event(self, store, calendar):
        event = store.add(_item("Dentist", ItemKind.EVENT))
        store.remove(event.id)
        calendar.remove_event.assert_called_once_with(event)

    def test_remove_missing(self, store):
        assert store.remove("nope") is None

    def test_hook_failure_does_not_undo(self, store, calendar):
        calendar.add_event.side_effect = RuntimeError("calendar access denied")

        event = store.add(_item("Dentist", ItemKind.EVENT))

        assert store.get(event.id) == event


class TestToggleCompletion:
    def test_task_today(self, store):
        task = store.add(_item("Pay rent"))

        done = store.toggle_completion(task.id)

        assert done.completed is True
        assert store.toggle_completion(task.id).completed is False

    def test_past_task(self, store):
        task = store.add(_item("Old chore", day=date(2024, 5, 20)))
        assert store.toggle_completion(task.id).completed is True

    def test_future_item_cannot_complete(self, store):
        task = store.add(_item("Later", day=date(2024, 6, 2)))

        assert store.toggle_completion(task.id) is None
        assert store.get(task.id).completed is False

    def test_events_cannot_complete(self, store):
        event = store.add(_item("Dentist", ItemKind.EVENT))
        assert store.toggle_completion(event.id) is None

    def test_missing(self, store):
        assert store.toggle_completion("nope") is None

    def test_completing_todays_habit_spawns_tomorrow(self, store):
        habit = store.add(_item("Meditate", ItemKind.HABIT, notes="10 minutes"))

        store.toggle_completion(habit.id)

        habits = [i for i in store.all() if i.kind is ItemKind.HABIT]
        assert len(habits) == 2
        tomorrow = habits[1]
        assert tomorrow.title == "Meditate"
        assert tomorrow.calendar_date == date(2024, 6, 2)
        assert tomorrow.completed is False
        assert tomorrow.notes == "10 minutes"
        assert tomorrow.id != habit.id

    def test_uncompleting_habit_does_not_spawn(self, store):
        habit = store.add(_item("Meditate", ItemKind.HABIT))
        store.toggle_completion(habit.id)
        store.toggle_completion(habit.id)

        assert len(store.all()) == 2

    def test_past_habit_does_not_spawn(self, store):
        habit = store.add(_item("Meditate", ItemKind.HABIT, day=date(2024, 5, 31)))
        store.toggle_completion(habit.id)
        assert len(store.all()) == 1


class TestItemsFor:
    def test_only_that_day_in_time_order(self, store):
        store.add(_item("Evening", hour=19))
        store.add(_item("Morning", hour=8))
        store.add(_item("Anytime"))
        store.add(_item("Tomorrow", day=date(2024, 6, 2)))

        titles = [i.title for i in store.items_for(TODAY)]

        assert titles == ["Anytime", "Morning", "Evening"]

    def test_hide_completed(self, store):
        done = store.add(_item("Done"))
        store.add(_item("Open"))
        store.toggle_completion(done.id)

        titles = [i.title for i in store.items_for(TODAY, show_completed=False)]

        assert titles == ["Open"]

    def test_group_by_kind(self, store):
        store.add(_item("Task", hour=8))
        store.add(_item("Event", ItemKind.EVENT, hour=9))
        store.add(_item("Habit", ItemKind.HABIT, hour=7))

        titles = [i.title for i in store.items_for(TODAY, group_by_kind=True)]

        assert titles == ["Event", "Habit", "Task"]

    def test_completing_habit_does_not_duplicate_existing_tomorrow(self, store):
        [today, tomorrow] = store.add_recurring_habit("Stretch", TODAY, weekdays=[5, 6])[:2]
        assert tomorrow.calendar_date == date(2024, 6, 2)

        store.toggle_completion(today.id)

        on_tomorrow = [i for i in store.all() if i.calendar_date == date(2024, 6, 2)]
        assert len(on_tomorrow) == 1


class TestRecurringHabits:
    def test_every_day_for_thirty_days(self, store):
        created = store.add_recurring_habit("Meditate", TODAY)

        assert len(created) == 30
        assert created[0].calendar_date == TODAY
        assert created[-1].calendar_date == date(2024, 6, 30)
        assert all(i.kind is ItemKind.HABIT and not i.completed for i in created)
        assert len({i.id for i in created}) == 30
        assert store.all() == created

    def test_selected_weekdays_for_twelve_weeks(self, store):
        # 2024-06-01 is a Saturday; Monday and Wednesday are 0 and 2
        created = store.add_recurring_habit("Run", TODAY, weekdays=[0, 2])

        assert len(created) == 24
        assert created[0].calendar_date == date(2024, 6, 3)
        assert created[1].calendar_date == date(2024, 6, 5)
        assert created[-1].calendar_date == date(2024, 8, 21)
        assert {i.calendar_date.weekday() for i in created} == {0, 2}

    def test_series_end_is_inclusive(self, store):
        created = store.add_recurring_habit("Swim", TODAY, weekdays=[5])

        assert len(created) == 13
        assert created[-1].calendar_date == date(2024, 8, 24)

    def test_time_of_day_in_user_timezone(self, store, new_york):
        [first, *_] = store.add_recurring_habit("Journal", TODAY, at=time(21, 30))

        assert first.start_time.hour == 21
        assert first.start_time.utcoffset() == timedelta(hours=-4)

    def test_notes_copied(self, store):
        created = store.add_recurring_habit("Read", TODAY, weekdays=[6], notes="20 pages")
        assert {i.notes for i in created} == {"20 pages"}

    @pytest.mark.parametrize("weekdays", [[], [7], [-1, 2]])
    def test_invalid_weekdays(self, store, weekdays):
        with pytest.raises(ValueError):
            store.add_recurring_habit("Run", TODAY, weekdays=weekdays)
        assert store.all() == []

    def test_blank_title(self, store):
        with pytest.raises(ValueError):
            store.add_recurring_habit("  ", TODAY)


class TestCanComplete:
    def test_rules(self, store):
        assert store.can_complete(_item("Today"))
        assert store.can_complete(_item("Past", ItemKind.HABIT, day=date(2024, 5, 1)))
        assert not store.can_complete(_item("Future", day=date(2024, 6, 2)))
        assert not store.can_complete(_item("Dentist", ItemKind.EVENT))
