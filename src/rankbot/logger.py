"""Console logging shared by the bot, the notifiers and the CLI."""

from __future__ import annotations

import logging
import sys
from typing import Optional

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a configured logger (creates handler only once per name)."""
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger
    if not level:
        logger.setLevel(logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def set_level(level: str) -> None:
    """Apply ``level`` to every rankbot logger created so far and to ones created later."""
    effective = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger("rankbot")
    root.setLevel(effective)
    for name, obj in logging.Logger.manager.loggerDict.items():
        if name.startswith("rankbot") and isinstance(obj, logging.Logger):
            obj.setLevel(effective)
