"""Logging setup for txledger.

Modules log through ``logging.getLogger(__name__)``; all of them live under
the ``txledger`` logger configured here.
"""

import logging
import sys
from typing import Any, Union

_LOGGER_NAME = "txledger"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: Union[int, str] = logging.WARNING, stream: Any = None) -> None:
    """Send txledger logs to ``stream`` (stderr by default) at ``level``.

    Calling it again replaces the previous handler.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)


def reset_logging() -> None:
    """Remove txledger handlers and restore propagation. Used by tests."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
