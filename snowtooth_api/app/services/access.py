"""
Cross-reference resolution between lifts and trails.

A lift lists the ids of the trails it serves and a trail lists the
ids of the lifts that reach it.  These helpers turn such an id list
into entities of the other collection, keeping the order of the id
list.  Ids without a matching entity are skipped, so stale references
in the dataset never break a read.
"""

from typing import List

from ..core.store import Collection, EntityStore
from ..schemas.resort import LiftRead, TrailRead


def _resolve(store: EntityStore, collection: Collection, ids: List[str]) -> list:
    resolved = []
    for entity_id in ids:
        entity = store.get_by_id(collection, entity_id)
        if entity is not None:
            resolved.append(entity)
    return resolved


def resolve_trail_access(store: EntityStore, lift: LiftRead) -> List[TrailRead]:
    """Return the trails referenced by ``lift.trails``."""
    return _resolve(store, Collection.TRAILS, lift.trails)


def resolve_lift_access(store: EntityStore, trail: TrailRead) -> List[LiftRead]:
    """Return the lifts referenced by ``trail.lifts``."""
    return _resolve(store, Collection.LIFTS, trail.lifts)
