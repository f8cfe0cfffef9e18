"""Logging configuration for the resume extraction service."""

import logging
import sys
from typing import Optional

from internship_sniper.config import LOG_LEVEL

_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger writing to stdout. Level defaults to LOG_LEVEL, which is
    WARNING in production so per-tier progress messages stay out of prod logs.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    if level is not None:
        logger.setLevel(level)
    return logger


def preview(text: Optional[str], limit: int = 200) -> str:
    """Single-line, truncated view of provider output for log messages."""
    if not text:
        return ""
    flat = " ".join(str(text).split())
    return flat if len(flat) <= limit else flat[:limit] + "..."
