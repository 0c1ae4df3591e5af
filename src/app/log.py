from __future__ import annotations

"""Logging setup shared by the test data helpers and the test session."""

import logging

from src.app.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
PACKAGE_LOGGERS = ("src.loaders", "src.testdata")


def resolve_level(level: str | int | None = None) -> int:
    """Map a level name or number to a logging level, defaulting to settings."""
    if isinstance(level, int):
        return level
    level_name = (level or settings.log_level).strip().upper()
    resolved = logging.getLevelName(level_name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = None) -> int:
    """Attach a root handler once and set the helper packages' log level."""
    resolved = resolve_level(level)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(resolved)
    return resolved
