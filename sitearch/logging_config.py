"""Logging setup shared by the API and CLI entry-points.

Engine modules only ever call ``logging.getLogger(__name__)``; handlers are
installed here, once, on the package-level ``sitearch`` logger.
"""

from __future__ import annotations

import logging
from typing import Optional

from sitearch.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the ``sitearch`` logger and set its level.

    Safe to call more than once: the handler is only added the first time.
    ``level`` defaults to ``settings.log_level``.
    """
    logger = logging.getLogger("sitearch")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel((level or settings.log_level).upper())
    return logger
