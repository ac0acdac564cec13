"""
Application package initializer.

The API is organised into ``core`` (configuration, logging, the entity
store and the notification bus), ``schemas`` (pydantic models),
``services`` (queries, status mutations and cross-reference
resolution) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
