from __future__ import annotations

import logging

from clipsense.config import LoggingSettings

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PACKAGE_LOGGER = "clipsense"


def configure_logging(settings: LoggingSettings, *, process_wide: bool = False) -> logging.Logger:
    """Configure logging for the analysis package.

    By default only the ``clipsense`` logger tree is touched so that embedding
    applications keep their own root configuration. ``process_wide`` applies
    the format to the root logger instead.
    """

    level = getattr(logging, settings.level.upper(), logging.INFO)
    if process_wide:
        logging.basicConfig(level=level, format=DEFAULT_LOG_FORMAT, force=True)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    if not process_wide and not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        package_logger.addHandler(handler)

    return package_logger
