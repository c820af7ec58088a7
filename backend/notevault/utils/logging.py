from __future__ import annotations

import logging
import sys

from notevault.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root, uvicorn and application loggers.

    Safe to call more than once; the app factory runs it for every app built
    (tests build one per test).
    """
    level_name = (level or settings.log_level).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stdout)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        logging.getLogger(name).setLevel(logging.INFO)
    logging.getLogger("notevault").setLevel(resolved)

    logging.getLogger(__name__).debug("Logging configured", extra={"level": level_name})


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
