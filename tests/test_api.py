"""HTTP and WebSocket tests for API v1."""

import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import Depends, WebSocketDisconnect, status
from fastapi.testclient import TestClient

from snowtooth_api.app.api.v1.endpoints.subscriptions import _stream
from snowtooth_api.app.core.config import Settings
from snowtooth_api.app.core.context import ResortContext, get_context
from snowtooth_api.app.core.store import Collection
from snowtooth_api.app.main import create_app
from snowtooth_api.app.services.status_service import LIFT_STATUS_CHANGE, StatusService


class TestLiftEndpoints:
    """Test the lift queries and mutation."""

    def test_all_lifts(self, client):
        response = client.get("/api/v1/lifts/")

        assert response.status_code == 200
        assert [lift["id"] for lift in response.json()] == ["panorama", "jazz-cat", "whirlybird", "summit"]

    def test_list_does_not_expand_cross_references(self, client):
        """Test that list results carry ids, not resolved entities."""
        panorama = client.get("/api/v1/lifts/").json()[0]

        assert panorama == {
            "id": "panorama",
            "name": "Panorama",
            "status": "OPEN",
            "capacity": 6,
            "night": False,
            "elevation": 1580,
            "trails": ["lower-gold", "ghost-run"],
        }

    def test_all_lifts_filtered(self, client):
        response = client.get("/api/v1/lifts/", params={"status": "CLOSED"})

        assert response.status_code == 200
        assert [lift["id"] for lift in response.json()] == ["jazz-cat"]

    def test_invalid_status_filter(self, client):
        response = client.get("/api/v1/lifts/", params={"status": "BROKEN"})
        assert response.status_code == 422

    def test_get_lift(self, client):
        response = client.get("/api/v1/lifts/summit")

        assert response.status_code == 200
        assert response.json()["night"] is None
        assert response.json()["status"] == "HOLD"

    def test_get_unknown_lift_returns_null(self, client):
        response = client.get("/api/v1/lifts/gondola-x")

        assert response.status_code == 200
        assert response.json() is None

    def test_trail_access(self, client):
        response = client.get("/api/v1/lifts/panorama/trail-access")

        assert response.status_code == 200
        assert [trail["id"] for trail in response.json()] == ["lower-gold"]

    def test_trail_access_unknown_lift(self, client):
        assert client.get("/api/v1/lifts/gondola-x/trail-access").json() is None

    def test_set_lift_status(self, client, store):
        response = client.put("/api/v1/lifts/panorama/status", json={"status": "HOLD"})

        assert response.status_code == 200
        assert response.json()["status"] == "HOLD"
        assert client.get("/api/v1/lifts/panorama").json()["status"] == "HOLD"
        assert store.get_by_id(Collection.LIFTS, "panorama").status.value == "HOLD"

    def test_set_status_unknown_lift(self, client):
        response = client.put("/api/v1/lifts/gondola-x/status", json={"status": "HOLD"})

        assert response.status_code == 404
        assert response.json() == {"detail": "Lift 'gondola-x' not found"}

    @pytest.mark.parametrize("body", [{"status": "hold"}, {"status": "GROOMING"}, {}])
    def test_set_status_invalid_body(self, client, body):
        response = client.put("/api/v1/lifts/panorama/status", json=body)

        assert response.status_code == 422
        assert client.get("/api/v1/lifts/panorama").json()["status"] == "OPEN"


class TestTrailEndpoints:
    """Test the trail queries and mutation."""

    def test_all_trails(self, client):
        response = client.get("/api/v1/trails/")
        assert [trail["id"] for trail in response.json()] == ["lower-gold", "meow", "sneaky-pete"]

    def test_all_trails_filtered(self, client):
        response = client.get("/api/v1/trails/", params={"status": "HOLD"})
        assert [trail["id"] for trail in response.json()] == ["meow"]

    def test_get_trail(self, client):
        trail = client.get("/api/v1/trails/meow").json()
        assert trail["lifts"] == ["jazz-cat", "retired-chair", "summit"]

    def test_get_unknown_trail_returns_null(self, client):
        assert client.get("/api/v1/trails/nope").json() is None

    def test_lift_access_skips_dangling_reference(self, client):
        response = client.get("/api/v1/trails/meow/lift-access")
        assert [lift["id"] for lift in response.json()] == ["jazz-cat", "summit"]

    def test_set_trail_status(self, client):
        response = client.put("/api/v1/trails/sneaky-pete/status", json={"status": "OPEN"})

        assert response.status_code == 200
        assert response.json()["status"] == "OPEN"
        assert [t["id"] for t in client.get("/api/v1/trails/", params={"status": "CLOSED"}).json()] == []

    def test_set_status_unknown_trail(self, client):
        response = client.put("/api/v1/trails/nope/status", json={"status": "OPEN"})
        assert response.status_code == 404


class TestSubscriptions:
    """Test status change notifications over WebSockets."""

    def test_lift_status_change(self, client):
        """Test the Panorama hold scenario end to end."""
        with client.websocket_connect("/api/v1/subscriptions/lift-status-change") as websocket:
            response = client.put("/api/v1/lifts/panorama/status", json={"status": "HOLD"})
            assert response.status_code == 200

            message = websocket.receive_json()

        assert message["liftStatusChange"]["id"] == "panorama"
        assert message["liftStatusChange"]["status"] == "HOLD"
        open_lifts = client.get("/api/v1/lifts/", params={"status": "OPEN"}).json()
        assert "panorama" not in [lift["id"] for lift in open_lifts]

    def test_trail_status_change(self, client):
        with client.websocket_connect("/api/v1/subscriptions/trail-status-change") as websocket:
            client.put("/api/v1/trails/meow/status", json={"status": "CLOSED"})
            message = websocket.receive_json()

        assert message == {
            "trailStatusChange": {
                "id": "meow",
                "name": "Meow",
                "status": "CLOSED",
                "capacity": 70,
                "night": True,
                "elevation": 980,
                "lifts": ["jazz-cat", "retired-chair", "summit"],
            }
        }

    def test_two_subscribers_receive_every_event(self, client):
        url = "/api/v1/subscriptions/lift-status-change"
        with client.websocket_connect(url) as first, client.websocket_connect(url) as second:
            client.put("/api/v1/lifts/panorama/status", json={"status": "HOLD"})
            client.put("/api/v1/lifts/jazz-cat/status", json={"status": "OPEN"})

            for websocket in (first, second):
                events = [websocket.receive_json()["liftStatusChange"] for _ in range(2)]
                assert [(e["id"], e["status"]) for e in events] == [("panorama", "HOLD"), ("jazz-cat", "OPEN")]

    def test_failed_mutation_publishes_nothing(self, client):
        """Test that only the successful mutation reaches the subscriber."""
        with client.websocket_connect("/api/v1/subscriptions/lift-status-change") as websocket:
            assert client.put("/api/v1/lifts/gondola-x/status", json={"status": "HOLD"}).status_code == 404
            client.put("/api/v1/lifts/summit/status", json={"status": "OPEN"})

            message = websocket.receive_json()

        assert message["liftStatusChange"]["id"] == "summit"

    def test_disconnect_deregisters_stream(self, client, context):
        with client.websocket_connect("/api/v1/subscriptions/lift-status-change"):
            assert context.pubsub.subscriber_count("lift-status-change") == 1

        # The handler finishes on the server loop after the client side closes.
        for _ in range(100):
            if context.pubsub.subscriber_count("lift-status-change") == 0:
                break
            time.sleep(0.01)
        assert context.pubsub.subscriber_count("lift-status-change") == 0
        assert client.put("/api/v1/lifts/panorama/status", json={"status": "CLOSED"}).status_code == 200


def test_create_app_loads_dataset_from_settings(data_dir):
    """Test building the context from a configured data directory."""
    app = create_app(Settings(data_dir=str(data_dir)))
    with TestClient(app) as client:
        lifts = client.get("/api/v1/lifts/").json()

    assert [lift["id"] for lift in lifts] == ["panorama", "jazz-cat", "whirlybird", "summit"]


class TestSubscriptionCleanup:
    """Test that streams are released when a connection ends abnormally."""

    async def test_failed_handshake_closes_stream(self, context):
        """Test that a client lost during accept leaves no stream behind."""
        websocket = MagicMock()
        websocket.accept = AsyncMock(side_effect=RuntimeError("client went away"))

        with pytest.raises(RuntimeError):
            await _stream(websocket, context, LIFT_STATUS_CHANGE, "liftStatusChange")

        assert context.pubsub.subscriber_count(LIFT_STATUS_CHANGE) == 0
        assert context.pubsub.publish(LIFT_STATUS_CHANGE, "ignored") == 0

    def test_server_side_close_sends_going_away(self, client, context):
        """Test that closing all streams, as done at shutdown, ends sockets with 1001."""
        with client.websocket_connect("/api/v1/subscriptions/lift-status-change") as websocket:
            client.portal.call(context.pubsub.close_all)

            with pytest.raises(WebSocketDisconnect) as excinfo:
                websocket.receive_json()

        assert excinfo.value.code == status.WS_1001_GOING_AWAY
        assert context.pubsub.subscriber_count(LIFT_STATUS_CHANGE) == 0

    def test_shutdown_closes_open_streams(self, context):
        """Test that leaving the application lifespan closes every stream."""
        with TestClient(create_app(context=context)) as client:
            subscription = client.portal.call(context.pubsub.subscribe, LIFT_STATUS_CHANGE)
            assert context.pubsub.subscriber_count(LIFT_STATUS_CHANGE) == 1

        assert subscription.closed
        assert context.pubsub.subscriber_count(LIFT_STATUS_CHANGE) == 0


def test_invalid_status_error_maps_to_422(context):
    """Test the handler for statuses that bypass request validation."""
    app = create_app(context=context)

    @app.put("/raw/lifts/{lift_id}/status")
    async def set_raw_status(lift_id: str, value: str, ctx: ResortContext = Depends(get_context)):
        return await StatusService.set_lift_status(ctx, lift_id, value)

    with TestClient(app) as client:
        response = client.put("/raw/lifts/panorama/status", params={"value": "GROOMING"})

    assert response.status_code == 422
    assert response.json() == {"detail": "Invalid status 'GROOMING'; expected one of OPEN, HOLD, CLOSED"}
    assert context.store.get_by_id(Collection.LIFTS, "panorama").status.value == "OPEN"
