"""
Read-only queries over lifts and trails.

``QueryService`` answers the list and lookup requests of the API.  A
lookup for an unknown id returns ``None`` rather than raising: the
read path is lenient, only mutations fail on unknown ids.  Related
entities are resolved on request through ``services.access`` and are
never attached to list results.
"""

from typing import List, Optional

from ..core.context import ResortContext
from ..core.store import Collection
from ..schemas.resort import LiftRead, Status, TrailRead
from .access import resolve_lift_access, resolve_trail_access


class QueryService:
    """Read access to the entity store."""

    @classmethod
    async def all_lifts(cls, ctx: ResortContext, status: Optional[Status] = None) -> List[LiftRead]:
        """Return all lifts, or only those with ``status`` when given."""
        return cls._list(ctx, Collection.LIFTS, status)

    @classmethod
    async def all_trails(cls, ctx: ResortContext, status: Optional[Status] = None) -> List[TrailRead]:
        """Return all trails, or only those with ``status`` when given."""
        return cls._list(ctx, Collection.TRAILS, status)

    @classmethod
    async def lift_by_id(cls, ctx: ResortContext, lift_id: str) -> Optional[LiftRead]:
        return ctx.store.get_by_id(Collection.LIFTS, lift_id)

    @classmethod
    async def trail_by_id(cls, ctx: ResortContext, trail_id: str) -> Optional[TrailRead]:
        return ctx.store.get_by_id(Collection.TRAILS, trail_id)

    @classmethod
    async def trail_access(cls, ctx: ResortContext, lift_id: str) -> Optional[List[TrailRead]]:
        """Trails served by a lift, or ``None`` if the lift does not exist."""
        lift = ctx.store.get_by_id(Collection.LIFTS, lift_id)
        if lift is None:
            return None
        return resolve_trail_access(ctx.store, lift)

    @classmethod
    async def lift_access(cls, ctx: ResortContext, trail_id: str) -> Optional[List[LiftRead]]:
        """Lifts serving a trail, or ``None`` if the trail does not exist."""
        trail = ctx.store.get_by_id(Collection.TRAILS, trail_id)
        if trail is None:
            return None
        return resolve_lift_access(ctx.store, trail)

    @staticmethod
    def _list(ctx: ResortContext, collection: Collection, status: Optional[Status]) -> list:
        if status is None:
            return ctx.store.get_all(collection)
        return ctx.store.filter_by_status(collection, status)
