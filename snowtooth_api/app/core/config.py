"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables so that the service can be configured without
an extra settings library.  Defaults are provided for all fields and
point at the dataset bundled with the package, which means a plain
``python run.py`` starts a working server.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# Directory containing ``app``; relative ``DATA_DIR`` values resolve here.
PACKAGE_DIR = Path(__file__).resolve().parent.parent.parent


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Snowtooth Status API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))

    # Directory holding ``lifts.json`` and ``trails.json``.  A relative
    # path is resolved against the package directory by
    # ``get_data_dir``.
    data_dir: str = os.getenv("DATA_DIR", "data")

    # Maximum number of undelivered events buffered per subscriber
    # stream.  ``0`` keeps the queues unbounded; any positive value
    # makes the bus drop events for a subscriber whose queue is full.
    subscriber_queue_size: int = int(os.getenv("SUBSCRIBER_QUEUE_SIZE", "0"))

    def get_data_dir(self) -> Path:
        """Return the absolute dataset directory."""
        path = Path(self.data_dir)
        if path.is_absolute():
            return path
        return (PACKAGE_DIR / path).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
