"""
Top-level router for version 1 of the API.

Aggregates the lift, trail and subscription routers under a unified
prefix.  Queries and mutations are plain HTTP routes; subscriptions
are WebSocket routes under ``/subscriptions``.
"""

from fastapi import APIRouter

from .endpoints import lifts, subscriptions, trails

router = APIRouter()

router.include_router(lifts.router, prefix="/lifts", tags=["lifts"])
router.include_router(trails.router, prefix="/trails", tags=["trails"])
router.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
