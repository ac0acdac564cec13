"""Shared pytest fixtures for all tests."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from snowtooth_api.app.core.context import ResortContext
from snowtooth_api.app.core.pubsub import PubSub
from snowtooth_api.app.core.store import EntityStore
from snowtooth_api.app.main import create_app
from snowtooth_api.app.schemas.resort import LiftRead, TrailRead


LIFTS = [
    {
        "id": "panorama",
        "name": "Panorama",
        "status": "OPEN",
        "capacity": 6,
        "night": False,
        "elevation": 1580,
        # "ghost-run" does not exist in TRAILS.
        "trails": ["lower-gold", "ghost-run"],
    },
    {
        "id": "jazz-cat",
        "name": "Jazz Cat",
        "status": "CLOSED",
        "capacity": 2,
        "night": True,
        "elevation": 1012,
        "trails": ["meow", "lower-gold"],
    },
    {
        "id": "whirlybird",
        "name": "Whirlybird",
        "status": "OPEN",
        "capacity": 4,
        "elevation": 880,
        "trails": [],
    },
    {
        "id": "summit",
        "name": "Summit",
        "status": "HOLD",
        "capacity": 4,
        "night": None,
        "elevation": 2212,
        "trails": ["meow"],
    },
]

TRAILS = [
    {
        "id": "lower-gold",
        "name": "Lower Gold",
        "status": "OPEN",
        "capacity": 55,
        "night": False,
        "elevation": 1450,
        "lifts": ["panorama", "jazz-cat"],
    },
    {
        "id": "meow",
        "name": "Meow",
        "status": "HOLD",
        "capacity": 70,
        "night": True,
        "elevation": 980,
        "lifts": ["jazz-cat", "retired-chair", "summit"],
    },
    {
        "id": "sneaky-pete",
        "name": "Sneaky Pete",
        "status": "CLOSED",
        "capacity": 15,
        "night": False,
        "elevation": 1980,
        "lifts": [],
    },
]


@pytest.fixture
def store():
    """A fresh store built from the in-test dataset."""
    return EntityStore(
        lifts=[LiftRead.model_validate(record) for record in LIFTS],
        trails=[TrailRead.model_validate(record) for record in TRAILS],
    )


@pytest.fixture
def context(store):
    return ResortContext(store=store, pubsub=PubSub())


@pytest.fixture
def client(context):
    """TestClient sharing one event loop for HTTP and WebSocket calls."""
    app = create_app(context=context)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """A data directory containing the in-test dataset as JSON files."""
    (tmp_path / "lifts.json").write_text(json.dumps(LIFTS), encoding="utf-8")
    (tmp_path / "trails.json").write_text(json.dumps(TRAILS), encoding="utf-8")
    return tmp_path
