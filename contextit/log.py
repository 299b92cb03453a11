"""Logging setup for the command line.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, on the ``contextit`` logger, and always write to stderr
since stdout carries the generated document.

Configuration via environment variable:
  CONTEXTIT_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "CONTEXTIT_LOG_LEVEL"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _level_from_env() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the contextit logger (idempotent).

    ``verbose`` forces DEBUG; otherwise the level comes from
    ``CONTEXTIT_LOG_LEVEL``.
    """
    logger = logging.getLogger("contextit")
    logger.setLevel(logging.DEBUG if verbose else _level_from_env())

    if not any(getattr(h, "_contextit", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._contextit = True
        logger.addHandler(handler)
    return logger
