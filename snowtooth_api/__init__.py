"""
Top-level package for the Snowtooth Status API.

All functionality lives in submodules under ``app``; run the service
with ``uvicorn snowtooth_api.app.main:app`` or ``python run.py``.
"""

__all__ = []
