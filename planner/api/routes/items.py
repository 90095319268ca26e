"""User item API endpoints (tasks, habits, events)."""

from dataclasses import replace
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status

from planner.api.deps import get_planner
from planner.api.models import (
    ItemCreate,
    ItemUpdate,
    RecurringHabitCreate,
    TimelineItemResponse,
)
from planner.core.types import ItemKind, NormalizedItem
from planner.services.planner import PlannerService

router = APIRouter(prefix="/items")


def _get_or_404(planner: PlannerService, item_id: str) -> NormalizedItem:
    item = planner.items.get(item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


@router.get("", response_model=list[TimelineItemResponse])
def list_items(
    day: date | None = None,
    show_completed: bool = True,
    planner: PlannerService = Depends(get_planner),
):
    """List user items, optionally for one day."""
    if day is None:
        items = planner.items.all()
    else:
        items = planner.items.items_for(day, show_completed=show_completed)
    return [TimelineItemResponse.from_item(i) for i in items]


@router.post("", response_model=TimelineItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(item: ItemCreate, planner: PlannerService = Depends(get_planner)):
    """Create a task, habit or event."""
    if item.kind is ItemKind.FIXTURE:
        raise HTTPException(
            status_code=422,
            detail="Fixtures come from sports providers and cannot be created",
        )
    created = planner.items.add(
        NormalizedItem(
            title=item.title,
            kind=item.kind,
            calendar_date=item.calendar_date,
            start_time=item.start_time,
            end_time=item.end_time,
            venue=item.venue,
            notes=item.notes,
        )
    )
    return TimelineItemResponse.from_item(created)


@router.post(
    "/recurring",
    response_model=list[TimelineItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_recurring_habit(
    habit: RecurringHabitCreate,
    planner: PlannerService = Depends(get_planner),
):
    """Create a habit repeating every day or on chosen weekdays."""
    try:
        created = planner.items.add_recurring_habit(
            habit.title,
            habit.start_date,
            weekdays=habit.weekdays,
            at=habit.at,
            notes=habit.notes,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return [TimelineItemResponse.from_item(i) for i in created]


@router.get("/{item_id}", response_model=TimelineItemResponse)
def get_item(item_id: str, planner: PlannerService = Depends(get_planner)):
    return TimelineItemResponse.from_item(_get_or_404(planner, item_id))


@router.patch("/{item_id}", response_model=TimelineItemResponse)
def update_item(item_id: str, update: ItemUpdate, planner: PlannerService = Depends(get_planner)):
    """Update fields of a user item.

    Completion changes follow the toggle rules: only tasks and habits dated
    today or earlier, and completing today's habit adds tomorrow's.
    """
    current = _get_or_404(planner, item_id)
    changes = update.model_dump(exclude_unset=True)
    completed = changes.pop("completed", None)

    updated = replace(current, **changes)
    wants_toggle = completed is not None and completed != updated.completed
    if wants_toggle:
        if not updated.kind.is_completable:
            raise HTTPException(status_code=422, detail="Only tasks and habits can be completed")
        if not planner.items.can_complete(updated):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Items dated in the future cannot be completed",
            )

    if changes:
        updated = planner.items.update(updated)
    if wants_toggle:
        updated = planner.items.toggle_completion(item_id)
    return TimelineItemResponse.from_item(updated)


@router.post("/{item_id}/toggle", response_model=TimelineItemResponse)
def toggle_item(item_id: str, planner: PlannerService = Depends(get_planner)):
    """Flip completion of a task or habit dated today or earlier."""
    _get_or_404(planner, item_id)
    toggled = planner.items.toggle_completion(item_id)
    if toggled is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Item cannot be completed (future date or not a task/habit)",
        )
    return TimelineItemResponse.from_item(toggled)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: str, planner: PlannerService = Depends(get_planner)):
    if planner.items.remove(item_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
