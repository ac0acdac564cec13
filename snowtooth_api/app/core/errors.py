"""
Domain exceptions raised by the service layer.

Services raise these exceptions; the application registers handlers
in ``main.py`` that translate them into HTTP responses, so endpoint
functions do not need to catch them individually.
"""


class NotFoundError(LookupError):
    """No entity with the requested id exists in the collection."""

    def __init__(self, collection: str, entity_id: str) -> None:
        self.collection = collection
        self.entity_id = entity_id
        super().__init__(f"{collection[:-1].capitalize()} {entity_id!r} not found")


class InvalidStatusError(ValueError):
    """A status value outside ``OPEN``/``HOLD``/``CLOSED`` was supplied."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid status {value!r}; expected one of OPEN, HOLD, CLOSED")


class DatasetError(ValueError):
    """The initial dataset could not be loaded."""
