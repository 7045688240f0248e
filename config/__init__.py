from . import calendar, logging
from .settings import settings

__all__ = ["calendar", "logging", "settings"]
