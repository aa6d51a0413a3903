"""Single-line logging for the Homescape backend."""

from __future__ import annotations

import logging
import os
from typing import Optional

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _root_logger() -> logging.Logger:
    logger = logging.getLogger("homescape")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(_LOG_LEVEL)
        logger.propagate = False
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    base = _root_logger()
    return base.getChild(child) if child else base
