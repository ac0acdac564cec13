"""
Trail endpoints for API v1.

Mirror of the lift endpoints: lenient reads through ``QueryService``,
strict status mutation through ``StatusService``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from snowtooth_api.app.core.context import ResortContext, get_context
from snowtooth_api.app.schemas.resort import LiftRead, Status, StatusUpdate, TrailRead
from snowtooth_api.app.services.query_service import QueryService
from snowtooth_api.app.services.status_service import StatusService


router = APIRouter()


@router.get("/", response_model=List[TrailRead])
async def all_trails(
    status: Optional[Status] = Query(None, description="Only return trails with this status"),
    ctx: ResortContext = Depends(get_context),
) -> List[TrailRead]:
    """List all trails in dataset order, optionally filtered by status."""
    return await QueryService.all_trails(ctx, status)


@router.get("/{trail_id}", response_model=Optional[TrailRead])
async def get_trail(
    trail_id: str = Path(..., description="ID of the trail"),
    ctx: ResortContext = Depends(get_context),
) -> Optional[TrailRead]:
    return await QueryService.trail_by_id(ctx, trail_id)


@router.get("/{trail_id}/lift-access", response_model=Optional[List[LiftRead]])
async def get_lift_access(
    trail_id: str = Path(..., description="ID of the trail"),
    ctx: ResortContext = Depends(get_context),
) -> Optional[List[LiftRead]]:
    """Lifts serving the trail; ``null`` if the trail does not exist."""
    return await QueryService.lift_access(ctx, trail_id)


@router.put("/{trail_id}/status", response_model=TrailRead)
async def set_trail_status(
    update: StatusUpdate,
    trail_id: str = Path(..., description="ID of the trail"),
    ctx: ResortContext = Depends(get_context),
) -> TrailRead:
    """Change a trail's status and notify ``trail-status-change`` subscribers."""
    return await StatusService.set_trail_status(ctx, trail_id, update.status)
