"""Response cache endpoints.

- GET    /cache/status  - Cache statistics
- DELETE /cache         - Drop every cached provider response
"""

import logging

from fastapi import APIRouter, Depends, status

from planner.api.deps import get_planner
from planner.services.planner import PlannerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache")


@router.get("/status")
def get_cache_status(planner: PlannerService = Depends(get_planner)) -> dict:
    """Get cache statistics.

    Returns:
        Entry, item, hit and miss counts
    """
    return planner.cache.stats()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cache(planner: PlannerService = Depends(get_planner)):
    """Clear cached provider responses."""
    planner.cache.clear()
    logger.info("Response cache cleared")
