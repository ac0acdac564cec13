"""
Shared application context.

A single ``ResortContext`` holding the entity store and the
notification bus is built once by ``create_app`` and stored on
``app.state``.  Endpoints receive it through the ``get_context``
dependency, which works for both HTTP requests and WebSocket
connections.
"""

from dataclasses import dataclass, field

from starlette.requests import HTTPConnection

from .config import Settings
from .pubsub import PubSub
from .store import EntityStore, load_dataset


@dataclass
class ResortContext:
    store: EntityStore
    pubsub: PubSub = field(default_factory=PubSub)


def build_context(settings: Settings) -> ResortContext:
    """Load the dataset and create a fresh bus according to ``settings``."""
    store = load_dataset(settings.get_data_dir())
    return ResortContext(store=store, pubsub=PubSub(queue_size=settings.subscriber_queue_size))


def get_context(connection: HTTPConnection) -> ResortContext:
    """FastAPI dependency returning the context of the running app."""
    return connection.app.state.context
