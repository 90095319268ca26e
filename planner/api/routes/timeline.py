"""Timeline API endpoints.

- GET /timeline/{day}  - User items and followed fixtures in time order
- GET /sports/{day}    - Followed fixtures only
"""

from datetime import date

from fastapi import APIRouter, Depends

from planner.api.deps import get_planner
from planner.api.models import TimelineItemResponse, TimelineResponse
from planner.services.planner import PlannerService

router = APIRouter()


@router.get("/timeline/{day}", response_model=TimelineResponse)
async def get_timeline(day: date, planner: PlannerService = Depends(get_planner)):
    """Merged timeline for a day."""
    items = await planner.timeline(day)
    return TimelineResponse(day=day, items=[TimelineItemResponse.from_item(i) for i in items])


@router.get("/sports/{day}", response_model=TimelineResponse)
async def get_sports_schedule(day: date, planner: PlannerService = Depends(get_planner)):
    """Fixtures for followed teams on a day (unsorted provider order).

    Empty when nothing is followed, sports are switched off, or every
    provider failed.
    """
    items = await planner.sports_schedule(day)
    return TimelineResponse(day=day, items=[TimelineItemResponse.from_item(i) for i in items])
