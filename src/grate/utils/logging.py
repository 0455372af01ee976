from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import AppSettings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logger = logging.getLogger("grate")


def configure_logging(settings: AppSettings | None = None) -> Path | None:
    """Attach grate's log handler once and return the log file, if any.

    With ``GRATE_LOG_FILE`` set, records go to a rotating file. Without it a
    :class:`logging.NullHandler` is installed so the library stays silent
    unless the application configures logging itself; a later call naming a
    log file replaces that placeholder. The logger level is only changed
    when ``GRATE_LOG_LEVEL`` is set, otherwise it stays ``NOTSET`` and
    follows the application's root configuration.
    """
    settings = settings or default_settings
    level_name = settings.get_str("LOG_LEVEL").strip().upper()
    if level_name:
        logger.setLevel(getattr(logging, level_name, logging.INFO))

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return Path(handler.baseFilename)

    log_file = settings.get_str("LOG_FILE")
    if not log_file:
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())
        return None

    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return path


__all__ = ["logger", "configure_logging", "LOG_FORMAT"]
