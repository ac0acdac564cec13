"""
Version 1 of the Snowtooth Status API.

Queries and mutations for lifts and trails, plus WebSocket
subscriptions for their status changes.
"""
