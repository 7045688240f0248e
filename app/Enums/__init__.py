from __future__ import annotations

from .BaseEnum import StringEnum
from .CalendarEnums import CalendarMethod, EventStatus

__all__: list[str] = [
    'StringEnum',
    'CalendarMethod',
    'EventStatus',
]
