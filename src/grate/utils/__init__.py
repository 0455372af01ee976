from .logging import configure_logging, logger
from .settings import AppSettings, settings

__all__ = ["AppSettings", "configure_logging", "logger", "settings"]
