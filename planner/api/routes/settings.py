"""Display settings endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from planner.api.deps import get_planner
from planner.api.models import DisplaySettingsModel, DisplaySettingsUpdate
from planner.config import get_user_timezone_str
from planner.database.settings import DisplaySettings
from planner.services.planner import PlannerService

router = APIRouter(prefix="/settings")


def _to_model(settings: DisplaySettings) -> DisplaySettingsModel:
    return DisplaySettingsModel(
        show_sports_schedule=settings.show_sports_schedule,
        show_completed_items=settings.show_completed_items,
        group_by_kind=settings.group_by_kind,
        timezone=get_user_timezone_str(),
    )


@router.get("/display", response_model=DisplaySettingsModel)
def get_display_settings(planner: PlannerService = Depends(get_planner)):
    """Get display settings."""
    return _to_model(planner.settings.get())


@router.put("/display", response_model=DisplaySettingsModel)
def update_display_settings(
    update: DisplaySettingsUpdate,
    planner: PlannerService = Depends(get_planner),
):
    """Update display settings. Omitted fields are left unchanged."""
    try:
        settings = planner.update_settings(
            show_sports_schedule=update.show_sports_schedule,
            show_completed_items=update.show_completed_items,
            group_by_kind=update.group_by_kind,
            timezone=update.timezone,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _to_model(settings)
