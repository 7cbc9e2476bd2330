from __future__ import annotations

import logging

from clipsense.config import LoggingSettings
from clipsense.logging_config import PACKAGE_LOGGER, configure_logging


def test_configure_logging_scopes_level_to_package_logger() -> None:
    package_logger = configure_logging(LoggingSettings(level="debug"))

    assert package_logger.name == PACKAGE_LOGGER
    assert package_logger.level == logging.DEBUG
    assert package_logger.handlers


def test_unknown_level_falls_back_to_info() -> None:
    package_logger = configure_logging(LoggingSettings(level="chatty"))

    assert package_logger.level == logging.INFO
