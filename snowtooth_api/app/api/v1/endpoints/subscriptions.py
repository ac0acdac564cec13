"""
Status change subscriptions for API v1.

Each WebSocket connection opens its own stream on the notification
bus and receives one JSON message per status change, keyed by the
subscription name::

    {"liftStatusChange": {"id": "panorama", "status": "HOLD", ...}}

The stream is registered before the socket is accepted, so every
mutation made after the client's handshake completes is delivered.
Clients are not expected to send anything; incoming messages are
ignored and a disconnect closes the stream.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, status

from snowtooth_api.app.core.context import ResortContext, get_context
from snowtooth_api.app.core.pubsub import Subscription
from snowtooth_api.app.services.status_service import LIFT_STATUS_CHANGE, TRAIL_STATUS_CHANGE


logger = logging.getLogger(__name__)

router = APIRouter()


async def _forward(websocket: WebSocket, subscription: Subscription, field: str) -> None:
    async for entity in subscription:
        await websocket.send_json({field: entity.model_dump(mode="json")})


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


async def _stream(websocket: WebSocket, ctx: ResortContext, topic: str, field: str) -> None:
    subscription = ctx.pubsub.subscribe(topic)
    try:
        await websocket.accept()
    except BaseException:
        subscription.close()
        raise
    logger.info("Client subscribed to '%s' (%d open)", topic, ctx.pubsub.subscriber_count(topic))

    receiver = asyncio.create_task(_wait_for_disconnect(websocket))
    forwarder = asyncio.create_task(_forward(websocket, subscription, field))
    try:
        done, _ = await asyncio.wait([receiver, forwarder], return_when=asyncio.FIRST_COMPLETED)
    finally:
        subscription.close()
        for task in (receiver, forwarder):
            task.cancel()
        await asyncio.gather(receiver, forwarder, return_exceptions=True)

    if forwarder in done and receiver not in done:
        if exception := forwarder.exception():
            logger.warning("Delivery to '%s' subscriber failed: %s", topic, exception)
        else:
            # Stream closed server side, e.g. at shutdown.
            await websocket.close(code=status.WS_1001_GOING_AWAY)
    logger.info("Client unsubscribed from '%s' (%d open)", topic, ctx.pubsub.subscriber_count(topic))


@router.websocket("/lift-status-change")
async def lift_status_change(websocket: WebSocket, ctx: ResortContext = Depends(get_context)) -> None:
    """Push every updated lift after a successful ``setLiftStatus``."""
    await _stream(websocket, ctx, LIFT_STATUS_CHANGE, "liftStatusChange")


@router.websocket("/trail-status-change")
async def trail_status_change(websocket: WebSocket, ctx: ResortContext = Depends(get_context)) -> None:
    """Push every updated trail after a successful ``setTrailStatus``."""
    await _stream(websocket, ctx, TRAIL_STATUS_CHANGE, "trailStatusChange")
