"""
Log output for the Video Store API and its command line tools.

``create_app`` and ``seed_db.py`` call ``setup_logging`` with the
``LOG_LEVEL`` and ``LOG_FILE`` settings.  Records from every
``video_store_api`` module reach the console, and the log file too when
one is configured.  Chatty third-party loggers (HTTP access lines, the
connection pool behind catalog searches) are held at ``WARNING`` unless
the application itself runs at ``DEBUG``.
"""

import logging
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = ("uvicorn.access", "urllib3")


def resolve_level(level: str) -> int:
    """Numeric level for a name such as ``"debug"``; ``INFO`` if unknown."""
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the console (and optional file) handler to the root logger.

    Does nothing when the root logger already has handlers, which is the
    case under pytest and when ``create_app`` runs more than once.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = resolve_level(level)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    quiet_level = numeric_level if numeric_level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
