"""Request dependencies."""

from fastapi import Request

from planner.services.planner import PlannerService


def get_planner(request: Request) -> PlannerService:
    """The PlannerService attached to the app at startup."""
    return request.app.state.planner
