"""
Status mutations for lifts and trails.

``StatusService.set_status`` is the only code path that modifies an
entity.  It updates the ``status`` field in place and then publishes
a snapshot of the updated entity on the collection's topic, before
returning.  Delivery to subscribers happens later, when each
subscriber's stream is next awaited.
"""

import logging
from typing import Dict, Union

from ..core.context import ResortContext
from ..core.errors import InvalidStatusError, NotFoundError
from ..core.store import Collection, Entity
from ..schemas.resort import LiftRead, Status, TrailRead


logger = logging.getLogger(__name__)

LIFT_STATUS_CHANGE = "lift-status-change"
TRAIL_STATUS_CHANGE = "trail-status-change"

TOPICS: Dict[Collection, str] = {
    Collection.LIFTS: LIFT_STATUS_CHANGE,
    Collection.TRAILS: TRAIL_STATUS_CHANGE,
}


class StatusService:
    """Apply status changes and notify subscribers."""

    @classmethod
    async def set_status(
        cls,
        ctx: ResortContext,
        collection: Collection,
        entity_id: str,
        status: Union[Status, str],
    ) -> Entity:
        """Set the status of one lift or trail.

        Parameters
        ----------
        ctx : ResortContext
            Context holding the store and the notification bus.
        collection : Collection
            Collection the entity belongs to.
        entity_id : str
            Id of the entity to update.
        status : Status or str
            New status.  Plain strings are accepted if they name a
            ``Status`` member.

        Returns
        -------
        The updated entity, as stored.

        Raises
        ------
        InvalidStatusError
            If ``status`` is not ``OPEN``, ``HOLD`` or ``CLOSED``.
        NotFoundError
            If no entity with ``entity_id`` exists; the store is left
            unchanged and nothing is published.
        """
        try:
            new_status = Status(status)
        except ValueError as e:
            raise InvalidStatusError(status) from e

        entity = ctx.store.get_by_id(collection, entity_id)
        if entity is None:
            raise NotFoundError(collection.value, entity_id)

        old_status = entity.status
        entity.status = new_status
        logger.info(
            "%s '%s' status changed: %s -> %s",
            collection.value[:-1].capitalize(),
            entity_id,
            old_status.value,
            new_status.value,
        )

        # Publish a copy so later mutations do not rewrite queued events.
        ctx.pubsub.publish(TOPICS[collection], entity.model_copy(deep=True))
        return entity

    @classmethod
    async def set_lift_status(cls, ctx: ResortContext, lift_id: str, status: Union[Status, str]) -> LiftRead:
        return await cls.set_status(ctx, Collection.LIFTS, lift_id, status)

    @classmethod
    async def set_trail_status(cls, ctx: ResortContext, trail_id: str, status: Union[Status, str]) -> TrailRead:
        return await cls.set_status(ctx, Collection.TRAILS, trail_id, status)
