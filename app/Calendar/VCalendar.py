from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from app.Calendar.VEvent import VEvent
from app.Enums.CalendarEnums import CalendarMethod
from app.Utils.Logger import get_logger
from config import calendar as calendar_config

logger = get_logger(__name__)

FALLBACK_PRODUCT_ID = '-//vendor//calendar v1.0//EN'


@dataclass(frozen=True)
class CalendarOptions:
    """Resolved encoder configuration handed to each VCalendar."""

    default_product_id: str = FALLBACK_PRODUCT_ID
    line_ending: str = '\r\n'

    @classmethod
    def from_config(cls) -> CalendarOptions:
        """Build options from config/calendar.py."""
        return cls(
            default_product_id=calendar_config.product_id,
            line_ending=calendar_config.line_ending,
        )


class VCalendar:
    """
    A VCALENDAR object holding an ordered list of VEVENT components.

    Example:
        calendar = VCalendar(method=CalendarMethod.REQUEST)
        calendar.add_event(VEvent(summary="Launch"))
        body = calendar.to_ics()
    """

    VERSION = '2.0'

    def __init__(
        self,
        method: Union[CalendarMethod, str] = CalendarMethod.PUBLISH,
        product_id: str = '',
        events: Optional[Iterable[VEvent]] = None,
        options: Optional[CalendarOptions] = None,
    ) -> None:
        self.method: CalendarMethod = CalendarMethod.from_value(method)
        self.product_id = product_id
        self.options = options if options is not None else CalendarOptions.from_config()
        self._events: List[VEvent] = list(events) if events is not None else []

    @property
    def version(self) -> str:
        return self.VERSION

    @property
    def events(self) -> List[VEvent]:
        """A copy of the events in insertion order."""
        return list(self._events)

    def add_event(self, event: VEvent) -> VCalendar:
        self._events.append(event)
        return self

    def add_vevent(self, event: VEvent) -> VCalendar:
        return self.add_event(event)

    def v_events(self) -> List[VEvent]:
        return self.events

    def set_method(self, method: Union[CalendarMethod, str]) -> VCalendar:
        self.method = CalendarMethod.from_value(method)
        return self

    def set_product_id(self, product_id: str) -> VCalendar:
        self.product_id = product_id
        return self

    def resolved_product_id(self) -> str:
        """
        The product id set on this calendar, else the configured default,
        else the built-in fallback.
        """
        if self.product_id:
            return self.product_id
        if self.options.default_product_id:
            return self.options.default_product_id
        return FALLBACK_PRODUCT_ID

    def lines(self) -> List[str]:
        lines = [
            'BEGIN:VCALENDAR',
            f'VERSION:{self.version}',
            f'METHOD:{self.method.value}',
            f'PRODID:{self.resolved_product_id()}',
        ]
        for event in self._events:
            lines.extend(event.lines())
        lines.append('END:VCALENDAR')
        return lines

    def to_ics(self) -> str:
        ics = self.options.line_ending.join(self.lines())
        logger.debug("Serialized calendar", {
            "method": self.method.value,
            "events": len(self._events),
            "bytes": len(ics),
        })
        return ics

    def serialize(self) -> str:
        return self.to_ics()

    def __str__(self) -> str:
        return self.to_ics()
