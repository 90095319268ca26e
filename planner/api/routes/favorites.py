"""Favorites API endpoints.

- GET    /favorites                        - List followed sports
- POST   /favorites                        - Follow a team
- DELETE /favorites                        - Unfollow everything
- DELETE /favorites/{sport}                - Unfollow a sport
- DELETE /favorites/{sport}/teams/{team}   - Unfollow a team
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from planner.api.deps import get_planner
from planner.api.models import FollowedSportModel, FollowRequest
from planner.services.planner import PlannerService

router = APIRouter(prefix="/favorites")


def _listing(planner: PlannerService) -> list[FollowedSportModel]:
    return [FollowedSportModel.from_sport(s) for s in planner.favorites.list()]


@router.get("", response_model=list[FollowedSportModel])
def list_favorites(planner: PlannerService = Depends(get_planner)):
    """List followed sports and teams."""
    return _listing(planner)


@router.post("", response_model=list[FollowedSportModel])
def follow_team(
    request: FollowRequest,
    response: Response,
    planner: PlannerService = Depends(get_planner),
):
    """Follow a team. Following an already-followed team is a no-op (200)."""
    try:
        changed = planner.favorites.add(request.sport, request.team)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    if changed:
        response.status_code = status.HTTP_201_CREATED
    return _listing(planner)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_favorites(planner: PlannerService = Depends(get_planner)):
    """Unfollow every sport."""
    planner.favorites.clear()


@router.delete("/{sport}", response_model=list[FollowedSportModel])
def unfollow_sport(sport: str, planner: PlannerService = Depends(get_planner)):
    """Unfollow a sport and all its teams."""
    if not planner.favorites.remove_sport(sport):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sport not followed")
    return _listing(planner)


@router.delete("/{sport}/teams/{team}", response_model=list[FollowedSportModel])
def unfollow_team(sport: str, team: str, planner: PlannerService = Depends(get_planner)):
    """Unfollow one team; the sport is dropped with its last team."""
    if not planner.favorites.remove(sport, team):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not followed")
    return _listing(planner)
