"""
Pydantic models for lifts and trails.

``LiftRead`` and ``TrailRead`` describe the entities held in memory
and returned by the API; the dataset loader also uses them to
validate the JSON files at start-up.  Each entity carries the ids of
related entities in the other collection (``trails`` on a lift,
``lifts`` on a trail); the related entities themselves are only
resolved when a client asks for them.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Status(str, Enum):
    """Operating status shared by lifts and trails."""

    OPEN = "OPEN"
    HOLD = "HOLD"
    CLOSED = "CLOSED"


class EntityBase(BaseModel):
    id: str = Field(..., min_length=1, examples=["panorama"])
    name: str = Field(..., examples=["Panorama"])
    status: Status = Field(..., examples=[Status.OPEN])
    capacity: int = Field(..., ge=0, examples=[6])
    night: Optional[bool] = Field(None, examples=[False])
    elevation: int = Field(..., examples=[1200])


class LiftRead(EntityBase):
    """A chairlift or gondola."""

    # Ids of trails reachable from this lift.
    trails: List[str] = Field(default_factory=list)


class TrailRead(EntityBase):
    """A ski trail."""

    # Ids of lifts serving this trail.
    lifts: List[str] = Field(default_factory=list)


class StatusUpdate(BaseModel):
    """Request body for the ``set*Status`` mutations."""

    status: Status = Field(..., examples=[Status.HOLD])
