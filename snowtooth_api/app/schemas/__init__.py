"""
Pydantic schema definitions for API payloads.

The same models describe the in-memory entities, the JSON dataset
files and the HTTP/WebSocket payloads, since the service has no
separate persistence layer.
"""
