"""Logging setup shared by the API host and scripts."""
from __future__ import annotations
import logging

from prereq_coach.core.config import LOG_LEVEL

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("prereq_coach")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.INFO))
