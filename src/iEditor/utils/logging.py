"""Logging setup shared by the editor, its workers and the pixel executors."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import APP_NAME, log_level

_LOGGER: Optional[logging.Logger] = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger() -> logging.Logger:
    """Return the ``iEditor`` logger, attaching one stream handler on first use.

    Child loggers created with ``logging.getLogger(__name__)`` inside the
    package propagate here, so executor fallbacks share the same output.
    """

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(APP_NAME)
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            _LOGGER.addHandler(handler)
        _LOGGER.setLevel(log_level())
    return _LOGGER


def reset_logger() -> None:
    """Forget the cached logger so the next call re-reads the level."""

    global _LOGGER
    _LOGGER = None


logger = get_logger()
