# src/book_stats/utils/logging.py
from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "book_stats") -> logging.Logger:
    """
    Return the package logger. A single stderr handler is attached the first
    time; module loggers (``book_stats.*``) propagate to it.
    """
    logger = logging.getLogger(name)
    if not any(getattr(h, "_book_stats", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._book_stats = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
