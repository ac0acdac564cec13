"""
Lift endpoints for API v1.

Reads go through ``QueryService``; an unknown lift id yields a JSON
``null`` body rather than an error.  The status mutation goes through
``StatusService`` and fails with 404 for unknown ids (see the
``NotFoundError`` handler in ``main.py``).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from snowtooth_api.app.core.context import ResortContext, get_context
from snowtooth_api.app.schemas.resort import LiftRead, Status, StatusUpdate, TrailRead
from snowtooth_api.app.services.query_service import QueryService
from snowtooth_api.app.services.status_service import StatusService


router = APIRouter()


@router.get("/", response_model=List[LiftRead])
async def all_lifts(
    status: Optional[Status] = Query(None, description="Only return lifts with this status"),
    ctx: ResortContext = Depends(get_context),
) -> List[LiftRead]:
    """List all lifts in dataset order, optionally filtered by status."""
    return await QueryService.all_lifts(ctx, status)


@router.get("/{lift_id}", response_model=Optional[LiftRead])
async def get_lift(
    lift_id: str = Path(..., description="ID of the lift"),
    ctx: ResortContext = Depends(get_context),
) -> Optional[LiftRead]:
    return await QueryService.lift_by_id(ctx, lift_id)


@router.get("/{lift_id}/trail-access", response_model=Optional[List[TrailRead]])
async def get_trail_access(
    lift_id: str = Path(..., description="ID of the lift"),
    ctx: ResortContext = Depends(get_context),
) -> Optional[List[TrailRead]]:
    """Trails reachable from the lift.

    References to trails missing from the dataset are left out.
    Returns ``null`` if the lift itself does not exist.
    """
    return await QueryService.trail_access(ctx, lift_id)


@router.put("/{lift_id}/status", response_model=LiftRead)
async def set_lift_status(
    update: StatusUpdate,
    lift_id: str = Path(..., description="ID of the lift"),
    ctx: ResortContext = Depends(get_context),
) -> LiftRead:
    """Change a lift's status and notify ``lift-status-change`` subscribers."""
    return await StatusService.set_lift_status(ctx, lift_id, update.status)
