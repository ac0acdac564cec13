"""
Logging configuration for the service.

Every module logs through ``logging.getLogger(__name__)``, so all
records of this project descend from the ``snowtooth_api`` logger.
``setup_logging`` attaches handlers to that logger only, leaving the
root logger (and uvicorn's own loggers) to whoever runs the app.
"""

import logging
from pathlib import Path
from typing import Optional


APP_LOGGER = "snowtooth_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the ``snowtooth_api`` logger and return it.

    Handlers are attached on the first call only, so building several
    apps in one process (as the test suite does) does not duplicate
    output.  The level is applied on every call.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``).  Case insensitive;
        unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Also write records to this file when given.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    # Records are fully handled here; a configured root logger would
    # otherwise print them a second time.
    logger.propagate = False
    return logger
