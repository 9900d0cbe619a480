"""Application logging helpers.

Every module asks for its logger through :func:`get_logger`; the handler and
level are attached once per logger name, honoring ``LOG_LEVEL``.
"""
from __future__ import annotations

import logging
import threading

from locallibrary.core.settings import get_settings

_LOCK = threading.Lock()
_CONFIGURED: set[str] = set()


def get_logger(name: str = "locallibrary") -> logging.Logger:
    logger = logging.getLogger(name)
    if name in _CONFIGURED:
        return logger
    with _LOCK:
        if name in _CONFIGURED:
            return logger
        level = getattr(logging, get_settings().log_level, logging.INFO)
        logger.setLevel(level)
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[locallibrary] %(asctime)s %(levelname)s %(name)s %(message)s"))
            logger.addHandler(handler)
        logger.propagate = False
        _CONFIGURED.add(name)
        return logger


__all__ = ["get_logger"]
