from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a ``wings_client.*`` logger; the root handler is configured once from WINGS_LOG_LEVEL."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        level = os.getenv("WINGS_LOG_LEVEL", "INFO").upper()
        logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    return logger
