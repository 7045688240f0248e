from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import List, Optional, Union

from app.Calendar.IcsFormatter import DateLike, IcsFormatter as Format
from app.Enums.CalendarEnums import EventStatus
from app.Utils.ULIDUtils import generate_ulid


class VEvent:
    """
    A single VEVENT component.

    Every field is optional on output: empty strings, None timestamps and a
    zero sequence leave their content line out.
    """

    def __init__(
        self,
        summary: str = '',
        description: str = '',
        location: str = '',
        url: str = '',
        status: Union[EventStatus, str] = EventStatus.CONFIRMED,
        all_day: bool = True,
        uid: Optional[str] = None,
        sequence: Optional[int] = None,
        dt_start: Optional[DateLike] = None,
        dt_end: Optional[DateLike] = None,
    ) -> None:
        now = datetime.now(timezone.utc)

        self.uid: str = generate_ulid() if uid is None else uid
        self.sequence: Optional[int] = int(time.time()) if sequence is None else sequence
        self.summary = summary
        self.description = description
        self.location = location
        self.url = url
        self.status: Optional[EventStatus] = EventStatus.from_value(status)
        self.all_day = all_day
        self.dt_start: Optional[DateLike] = now if dt_start is None else dt_start
        self.dt_end: Optional[DateLike] = now if dt_end is None else dt_end
        self.dt_stamp: Optional[DateLike] = now
        self.last_modified: Optional[DateLike] = now

    # Setters

    def set_title(self, title: str) -> VEvent:
        return self.set_summary(title)

    def set_summary(self, summary: str) -> VEvent:
        self.summary = summary
        return self

    def set_description(self, description: str) -> VEvent:
        self.description = description
        return self

    def set_uid(self, uid: str) -> VEvent:
        self.uid = uid
        return self

    def set_dt_start(self, dt_start: Optional[DateLike]) -> VEvent:
        self.dt_start = dt_start
        return self

    def set_dt_end(self, dt_end: Optional[DateLike]) -> VEvent:
        self.dt_end = dt_end
        return self

    def all_day_event(self, all_day: bool = True) -> VEvent:
        self.all_day = all_day
        return self

    def set_sequence(self, sequence: Optional[int]) -> VEvent:
        self.sequence = sequence
        return self

    def set_last_modified(self, last_modified: Optional[DateLike]) -> VEvent:
        self.last_modified = last_modified
        return self

    def set_dt_stamp(self, dt_stamp: Optional[DateLike]) -> VEvent:
        self.dt_stamp = dt_stamp
        return self

    def set_location(self, location: str) -> VEvent:
        self.location = location
        return self

    def set_url(self, url: str) -> VEvent:
        self.url = url
        return self

    def set_status(self, status: Optional[Union[EventStatus, str]]) -> VEvent:
        """Set the status; None leaves the STATUS line out, unknown values raise ValueError."""
        self.status = None if status is None else EventStatus.from_value(status)
        return self

    # Content lines

    def title(self) -> Optional[str]:
        return self.summary_line()

    def summary_line(self) -> Optional[str]:
        if not self.summary:
            return None
        return 'SUMMARY:' + Format.escape(self.summary)

    def description_line(self) -> Optional[str]:
        if not self.description:
            return None
        return 'DESCRIPTION:' + Format.escape(self.description)

    def uid_line(self) -> Optional[str]:
        if not self.uid:
            return None
        return f'UID:{self.uid}'

    def status_line(self) -> Optional[str]:
        if not self.status:
            return None
        return f'STATUS:{self.status.value}'

    def includes_time_in_start_end_dates(self) -> bool:
        return not self.all_day

    def dt_start_line(self) -> Optional[str]:
        if self.dt_start is None:
            return None
        return Format.date_for_property('DTSTART', self.dt_start, self.includes_time_in_start_end_dates())

    def dt_end_line(self) -> Optional[str]:
        if self.dt_end is None:
            return None
        return Format.date_for_property('DTEND', self.dt_end, self.includes_time_in_start_end_dates())

    def dt_stamp_line(self) -> Optional[str]:
        if self.dt_stamp is None:
            return None
        return 'DTSTAMP:' + Format.datetime_utc(self.dt_stamp)

    def sequence_line(self) -> Optional[str]:
        if not self.sequence:
            return None
        return f'SEQUENCE:{self.sequence}'

    def last_modified_line(self) -> Optional[str]:
        if self.last_modified is None:
            return None
        return Format.date_for_property('LAST-MODIFIED', self.last_modified, True)

    def url_line(self) -> Optional[str]:
        if not self.url:
            return None
        return 'URL:' + Format.escape(self.url)

    def location_line(self) -> Optional[str]:
        if not self.location:
            return None
        return 'LOCATION:' + Format.escape(self.location)

    def lines(self) -> List[str]:
        """The content lines of this event, BEGIN/END included, omitted fields dropped."""
        candidates = [
            'BEGIN:VEVENT',
            self.summary_line(),
            self.description_line(),
            self.uid_line(),
            self.status_line(),
            self.dt_start_line(),
            self.dt_end_line(),
            self.dt_stamp_line(),
            self.sequence_line(),
            self.last_modified_line(),
            self.url_line(),
            self.location_line(),
            'END:VEVENT',
        ]
        return [line for line in candidates if line is not None]

    def to_ics(self, line_ending: str = '\r\n') -> str:
        return line_ending.join(self.lines())

    def __str__(self) -> str:
        return self.to_ics()

    def __repr__(self) -> str:
        return f"<VEvent uid={self.uid!r} summary={self.summary!r}>"
