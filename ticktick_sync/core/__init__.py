"""Core client components."""

from .config import SERVERS, Settings, settings
from .logging import get_logger, setup_logging

__all__ = [
    "settings",
    "Settings",
    "SERVERS",
    "get_logger",
    "setup_logging",
]
