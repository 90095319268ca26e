"""Pydantic models for API requests and responses."""

from datetime import date, datetime, time

from pydantic import BaseModel, Field, field_validator

from planner.core.types import FollowedSport, ItemKind, NormalizedItem


class TimelineItemResponse(BaseModel):
    id: str
    title: str
    kind: ItemKind
    calendar_date: date
    start_time: datetime | None = None
    end_time: datetime | None = None
    completed: bool = False
    venue: str | None = None
    source_note: str | None = None
    notes: str | None = None

    @classmethod
    def from_item(cls, item: NormalizedItem) -> "TimelineItemResponse":
        return cls(
            id=item.id,
            title=item.title,
            kind=item.kind,
            calendar_date=item.calendar_date,
            start_time=item.start_time,
            end_time=item.end_time,
            completed=item.completed,
            venue=item.venue,
            source_note=item.source_note,
            notes=item.notes,
        )


class TimelineResponse(BaseModel):
    day: date
    items: list[TimelineItemResponse]


class ItemCreate(BaseModel):
    """User item; kind must be task, habit or event."""

    title: str = Field(min_length=1)
    kind: ItemKind
    calendar_date: date
    start_time: datetime | None = None
    end_time: datetime | None = None
    venue: str | None = None
    notes: str | None = None


class RecurringHabitCreate(BaseModel):
    """A repeating habit; weekdays use 0 = Monday, omit for every day."""

    title: str = Field(min_length=1)
    start_date: date
    weekdays: list[int] | None = Field(default=None, min_length=1)
    at: time | None = None
    notes: str | None = None


class ItemUpdate(BaseModel):
    """Partial update; omitted fields are unchanged, optional ones may be cleared with null."""

    title: str | None = Field(default=None, min_length=1)
    calendar_date: date | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    completed: bool | None = None
    venue: str | None = None
    notes: str | None = None

    @field_validator("title", "calendar_date", "completed")
    @classmethod
    def reject_null(cls, value):
        # Validators only see values that were sent, so this rejects explicit nulls
        if value is None:
            raise ValueError("must not be null")
        return value


class FollowedTeamModel(BaseModel):
    name: str


class FollowedSportModel(BaseModel):
    name: str
    teams: list[FollowedTeamModel]

    @classmethod
    def from_sport(cls, sport: FollowedSport) -> "FollowedSportModel":
        return cls(name=sport.name, teams=[FollowedTeamModel(name=t.name) for t in sport.teams])


class FollowRequest(BaseModel):
    sport: str = Field(min_length=1)
    team: str = Field(min_length=1)


class DisplaySettingsModel(BaseModel):
    show_sports_schedule: bool
    show_completed_items: bool
    group_by_kind: bool
    timezone: str


class DisplaySettingsUpdate(BaseModel):
    show_sports_schedule: bool | None = None
    show_completed_items: bool | None = None
    group_by_kind: bool | None = None
    timezone: str | None = None
