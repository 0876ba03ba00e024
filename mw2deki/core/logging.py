#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Logging setup shared by the API and the command-line converter.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from .config import get_settings


# -----------------------------------------------------------------------------

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


# -----------------------------------------------------------------------------

def configure_logging(level: str | int | None = None) -> None:
    """Attach a single stream handler to the ``mw2deki`` logger.

    *level* defaults to ``Settings.log_level``.  Calling this more than once
    only updates the level.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("mw2deki")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


# -----------------------------------------------------------------------------
