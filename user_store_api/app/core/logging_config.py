"""
Logging setup for the User Store API.

Application modules log through ``logging.getLogger(__name__)`` under
the ``user_store_api`` namespace.  The request middleware writes one
line per request to the ``user_store_api.access`` logger, which can be
silenced on its own without touching the rest of the output (useful
when uvicorn already writes its own access log).
"""

import logging
from pathlib import Path
from typing import Optional

ACCESS_LOGGER = "user_store_api.access"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, access_log: bool = True) -> None:
    """Configure the root logger and the access logger.

    The access logger is adjusted on every call, so each application
    built in the process gets the access log setting it asked for.
    Root handlers are only attached when none exist yet, so running
    under uvicorn (or under a test runner) keeps their handlers.

    Parameters
    ----------
    level : str
        Root logging level name (e.g. ``"DEBUG"``).  Case insensitive;
        unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Extra file to write log records to.  No file handler is added
        when empty.
    access_log : bool
        When false, per-request access lines are dropped.
    """
    # NOTSET defers to the root level
    logging.getLogger(ACCESS_LOGGER).setLevel(logging.NOTSET if access_log else logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
