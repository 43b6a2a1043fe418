"""
Logging setup for the registration service.

Application modules log through ``logging.getLogger(__name__)`` and
propagate to the root logger configured here.  uvicorn's own loggers
are pointed at the same handlers so access lines and application
records share one format and one optional log file.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that uvicorn configures with handlers of its own.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str, debug: bool = False) -> int:
    """Map a level name to its number; ``debug`` forces ``DEBUG``."""
    if debug:
        return logging.DEBUG
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Level name such as ``"INFO"``; unknown names mean ``INFO``.
    logfile : Optional[str]
        File to mirror records into, relative to the working directory.
    debug : bool
        Log everything at ``DEBUG`` regardless of ``level``.
    """
    root = logging.getLogger()
    if root.handlers:
        # Tests build the app more than once.
        return

    root.setLevel(resolve_level(level, debug))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
