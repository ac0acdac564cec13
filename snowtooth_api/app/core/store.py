"""
In-memory entity store and dataset loader.

The ``EntityStore`` holds the lift and trail collections as ordered
lists, exactly as they were loaded.  It offers lookup by id and
filtering by status; both preserve insertion order.  The store itself
never changes an entity: status updates are applied by
``StatusService``, which is the only writer.

``load_dataset`` builds a store from ``lifts.json`` and
``trails.json`` in a data directory, validating every record with the
pydantic entity models and rejecting duplicate ids.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from ..schemas.resort import LiftRead, Status, TrailRead
from .errors import DatasetError


logger = logging.getLogger(__name__)

Entity = Union[LiftRead, TrailRead]


class Collection(str, Enum):
    LIFTS = "lifts"
    TRAILS = "trails"


ENTITY_MODELS: Dict[Collection, Type[BaseModel]] = {
    Collection.LIFTS: LiftRead,
    Collection.TRAILS: TrailRead,
}


class EntityStore:
    """Ordered in-memory collections of lifts and trails."""

    def __init__(
        self,
        lifts: Optional[Iterable[LiftRead]] = None,
        trails: Optional[Iterable[TrailRead]] = None,
    ) -> None:
        self._collections: Dict[Collection, List[Entity]] = {
            Collection.LIFTS: list(lifts or []),
            Collection.TRAILS: list(trails or []),
        }

    def get_all(self, collection: Collection) -> List[Entity]:
        """Return every entity of ``collection`` in insertion order."""
        return list(self._collections[collection])

    def get_by_id(self, collection: Collection, entity_id: str) -> Optional[Entity]:
        """Return the first entity whose id equals ``entity_id``, or ``None``."""
        return next(
            (entity for entity in self._collections[collection] if entity.id == entity_id),
            None,
        )

    def filter_by_status(self, collection: Collection, status: Status) -> List[Entity]:
        return [entity for entity in self._collections[collection] if entity.status == status]

    def count(self, collection: Collection) -> int:
        return len(self._collections[collection])


def _load_collection(path: Path, collection: Collection) -> List[Entity]:
    model = ENTITY_MODELS[collection]
    try:
        with path.open(encoding="utf-8") as fh:
            records = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetError(f"Cannot read {collection.value} from {path}: {e}") from e
    if not isinstance(records, list):
        raise DatasetError(f"{path} must contain a JSON array")

    entities: List[Entity] = []
    seen = set()
    for index, record in enumerate(records):
        try:
            entity = model.model_validate(record)
        except ValidationError as e:
            raise DatasetError(f"Invalid record #{index} in {path}: {e}") from e
        if entity.id in seen:
            raise DatasetError(f"Duplicate {collection.value[:-1]} id {entity.id!r} in {path}")
        seen.add(entity.id)
        entities.append(entity)
    return entities


def load_dataset(data_dir: Union[str, Path]) -> EntityStore:
    """Load ``lifts.json`` and ``trails.json`` from ``data_dir``.

    Raises
    ------
    DatasetError
        If a file is missing or unreadable, a record fails validation
        or an id occurs twice within one collection.
    """
    data_dir = Path(data_dir)
    lifts = _load_collection(data_dir / "lifts.json", Collection.LIFTS)
    trails = _load_collection(data_dir / "trails.json", Collection.TRAILS)
    logger.info("Loaded %d lifts and %d trails from %s", len(lifts), len(trails), data_dir)
    return EntityStore(lifts=lifts, trails=trails)
