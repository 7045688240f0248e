from .IcsFormatter import IcsFormatter
from .VEvent import VEvent
from .VCalendar import VCalendar, CalendarOptions, FALLBACK_PRODUCT_ID

__all__ = [
    "IcsFormatter",
    "VEvent",
    "VCalendar",
    "CalendarOptions",
    "FALLBACK_PRODUCT_ID",
]
