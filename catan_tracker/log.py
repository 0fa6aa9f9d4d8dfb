"""Shared logging setup for the board core."""

import logging

from . import settings


def configure_logging(level: str | None = None) -> None:
    """Set the log level of the ``catan_tracker`` logger hierarchy.

    Falls back to ``settings.LOG_LEVEL`` when *level* is not given.  A stream
    handler is attached only if the root logger has none, so host
    applications that already configured logging keep their own handlers.
    """
    resolved = (level or settings.LOG_LEVEL).upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=resolved)
    logging.getLogger('catan_tracker').setLevel(resolved)
